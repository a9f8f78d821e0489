"""In-memory implementation of the blob store."""


class InMemoryBlobStore:
    """In-memory implementation of BlobStore."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._blobs: dict[str, str] = dict(initial or {})
        self.write_count = 0

    async def read(self, key: str) -> str | None:
        """Read a blob."""
        return self._blobs.get(key)

    async def write(self, key: str, blob: str) -> None:
        """Write a blob."""
        self._blobs[key] = blob
        self.write_count += 1

