"""Itinerary repository: owns the itinerary collection and its persistence."""

import logging
from collections.abc import Callable
from datetime import datetime

from pydantic import ValidationError as PydanticValidationError

from tripcore.db.storage import BlobStore
from tripcore.errors import NotFoundError, StorageReadError, StorageWriteError, ValidationError
from tripcore.models.common import new_id, utcnow
from tripcore.models.itinerary import Itinerary, itinerary_collection
from tripcore.utils.metrics import record_itinerary_write

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "itineraries"


def serialize_itineraries(itineraries: list[Itinerary]) -> str:
    """Serialize a collection to its stored JSON form."""
    return itinerary_collection.dump_json(itineraries).decode("utf-8")


def deserialize_itineraries(blob: str, key: str = DEFAULT_STORAGE_KEY) -> list[Itinerary]:
    """Rebuild a collection from its stored JSON form.

    Raises:
        StorageReadError: If the blob is not a valid itinerary collection.
    """
    try:
        itineraries = itinerary_collection.validate_json(blob)
    except PydanticValidationError as e:
        raise StorageReadError(key, f"malformed itinerary collection: {e}") from e

    ids = [itinerary.id for itinerary in itineraries]
    if len(set(ids)) != len(ids):
        raise StorageReadError(key, "malformed itinerary collection: duplicate itinerary ids")

    return itineraries


class ItineraryRepository:
    """Owns the ordered collection of itineraries.

    Every mutation serializes and writes the entire collection in a single
    adapter call. The in-memory collection is swapped only after the write
    succeeds, so a failed write leaves the repository unchanged.
    """

    def __init__(
        self,
        store: BlobStore,
        key: str = DEFAULT_STORAGE_KEY,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        """Initialize repository.

        Args:
            store: Persistence adapter
            key: Storage key holding the serialized collection
            clock: Source of the current time (injectable for tests)
        """
        self._store = store
        self._key = key
        self._clock = clock
        self._itineraries: list[Itinerary] = []
        self._loaded = False

    def list_all(self) -> list[Itinerary]:
        """List itineraries in append order."""
        return list(self._itineraries)

    def get(self, itinerary_id: str) -> Itinerary:
        """Get itinerary by ID.

        Raises:
            NotFoundError: If no itinerary has that id.
        """
        for itinerary in self._itineraries:
            if itinerary.id == itinerary_id:
                return itinerary
        raise NotFoundError("Itinerary", itinerary_id)

    async def load(self) -> list[Itinerary]:
        """Load the full collection from storage.

        Returns:
            Loaded itineraries (empty if nothing is stored)

        Raises:
            StorageReadError: If the stored blob is malformed or unreadable.
        """
        try:
            blob = await self._store.read(self._key)
        except StorageReadError:
            logger.error(f"[ItineraryRepository.load] read of key={self._key} failed", exc_info=True)
            raise
        except OSError as e:
            logger.error(f"[ItineraryRepository.load] read of key={self._key} failed: {e}", exc_info=True)
            raise StorageReadError(self._key, str(e)) from e

        if blob is None:
            itineraries: list[Itinerary] = []
        else:
            try:
                itineraries = deserialize_itineraries(blob, self._key)
            except StorageReadError:
                logger.error(f"[ItineraryRepository.load] key={self._key} holds a malformed blob")
                raise

        self._itineraries = itineraries
        self._loaded = True
        logger.info(f"[ItineraryRepository.load] key={self._key} count={len(itineraries)}")
        return list(itineraries)

    async def create(self, name: str) -> Itinerary:
        """Create and persist a new, empty itinerary.

        Raises:
            ValidationError: If name is blank.
        """
        trimmed = name.strip() if name else ""
        if not trimmed:
            raise ValidationError("Please enter an itinerary name")

        await self._ensure_loaded()

        now = self._clock()
        existing_ids = {itinerary.id for itinerary in self._itineraries}
        itinerary_id = new_id()
        while itinerary_id in existing_ids:
            itinerary_id = new_id()

        itinerary = Itinerary(id=itinerary_id, name=trimmed, created_at=now, updated_at=now)
        await self._persist([*self._itineraries, itinerary])

        logger.info(f"[ItineraryRepository.create] id={itinerary.id}")
        return itinerary

    async def delete(self, itinerary_id: str) -> None:
        """Delete an itinerary and, with it, all its days and activities.

        Unknown ids are a no-op; the collection is still persisted.
        """
        await self._ensure_loaded()

        remaining = [i for i in self._itineraries if i.id != itinerary_id]
        if len(remaining) == len(self._itineraries):
            logger.info(f"[ItineraryRepository.delete] id={itinerary_id} not found, no-op")

        await self._persist(remaining)

    async def update(self, itinerary: Itinerary) -> Itinerary:
        """Replace the stored itinerary with the same id.

        The caller is responsible for having bumped updated_at.

        Raises:
            NotFoundError: If no itinerary has that id.
        """
        await self._ensure_loaded()

        if not any(i.id == itinerary.id for i in self._itineraries):
            raise NotFoundError("Itinerary", itinerary.id)

        updated = [itinerary if i.id == itinerary.id else i for i in self._itineraries]
        await self._persist(updated)
        return itinerary

    async def _ensure_loaded(self) -> None:
        if not self._loaded:
            await self.load()

    async def _persist(self, itineraries: list[Itinerary]) -> None:
        blob = serialize_itineraries(itineraries)

        try:
            await self._store.write(self._key, blob)
        except StorageWriteError:
            record_itinerary_write("error")
            logger.error(f"[ItineraryRepository] write of key={self._key} failed", exc_info=True)
            raise
        except OSError as e:
            record_itinerary_write("error")
            logger.error(f"[ItineraryRepository] write of key={self._key} failed: {e}", exc_info=True)
            raise StorageWriteError(self._key, str(e)) from e

        self._itineraries = itineraries
        record_itinerary_write("ok")
