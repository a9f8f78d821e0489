"""Persistence adapter protocol: a key-value blob store."""

from typing import Protocol


class BlobStore(Protocol):
    """Key-value store holding whole serialized blobs.

    Keys are opaque to the core. Implementations translate backend failures
    into StorageReadError / StorageWriteError.
    """

    async def read(self, key: str) -> str | None:
        """Read a blob.

        Args:
            key: Storage key

        Returns:
            Serialized blob, or None if nothing is stored under the key

        Raises:
            StorageReadError: On backend failure
        """
        ...

    async def write(self, key: str, blob: str) -> None:
        """Write a blob, replacing any previous value.

        Args:
            key: Storage key
            blob: Serialized blob

        Raises:
            StorageWriteError: On backend failure
        """
        ...
