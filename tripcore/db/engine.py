"""Blob store and repository factories, database engine construction."""

import redis.asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from tripcore.config import Settings
from tripcore.db.inmemory import InMemoryBlobStore
from tripcore.db.redis_storage import RedisBlobStore
from tripcore.db.repositories import ItineraryRepository
from tripcore.db.sql_storage import SqlBlobStore
from tripcore.db.storage import BlobStore


def create_async_engine_from_settings(settings: Settings) -> AsyncEngine:
    """Create async SQLAlchemy engine from settings.

    Raises:
        ValueError: If DATABASE_URL is unset or empty.
    """
    database_url = settings.database_url

    if not database_url:
        raise ValueError(
            "DATABASE_URL must be set to a valid connection string. "
            "Please configure the database_url setting."
        )

    # Convert postgresql:// to postgresql+asyncpg://
    if database_url.startswith("postgresql://"):
        database_url = database_url.replace("postgresql://", "postgresql+asyncpg://", 1)

    return create_async_engine(database_url, pool_pre_ping=True, echo=False)


def create_blob_store(settings: Settings) -> BlobStore:
    """Create the blob store selected by settings.storage_backend.

    Raises:
        ValueError: If the selected backend is missing its connection URL.
    """
    if settings.storage_backend == "sql":
        return SqlBlobStore(create_async_engine_from_settings(settings))

    if settings.storage_backend == "redis":
        if not settings.redis_url:
            raise ValueError("REDIS_URL must be set when storage_backend is 'redis'.")
        return RedisBlobStore(redis.asyncio.from_url(settings.redis_url))

    return InMemoryBlobStore()


def create_itinerary_repository(settings: Settings) -> ItineraryRepository:
    """Create an itinerary repository over the configured blob store and key."""
    return ItineraryRepository(create_blob_store(settings), key=settings.itineraries_storage_key)
