"""SQL implementation of the blob store."""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from tripcore.db.models import Base, KvBlob
from tripcore.errors import StorageReadError, StorageWriteError

logger = logging.getLogger(__name__)


class SqlBlobStore:
    """SQL implementation of BlobStore over the kv_blob table.

    Each write runs in its own transaction, so a blob is replaced atomically.
    """

    def __init__(self, engine: AsyncEngine) -> None:
        self._engine = engine

    async def create_schema(self) -> None:
        """Create the kv_blob table if it does not exist."""
        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def read(self, key: str) -> str | None:
        """Read a blob."""
        try:
            async with AsyncSession(self._engine) as session:
                row = await session.get(KvBlob, key)
                return row.value if row is not None else None
        except SQLAlchemyError as e:
            logger.error(f"[SqlBlobStore.read] key={key} failed: {e}")
            raise StorageReadError(key, str(e)) from e

    async def write(self, key: str, blob: str) -> None:
        """Write a blob."""
        try:
            async with AsyncSession(self._engine) as session, session.begin():
                row = await session.get(KvBlob, key)
                if row is None:
                    session.add(KvBlob(key=key, value=blob))
                else:
                    row.value = blob
        except SQLAlchemyError as e:
            logger.error(f"[SqlBlobStore.write] key={key} failed: {e}")
            raise StorageWriteError(key, str(e)) from e
