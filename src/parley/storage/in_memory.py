"""In-memory blob store.

Simple dict-based storage for tests and throwaway runs.
Data is lost when the application exits.
"""

from .base import BlobStore


class InMemoryBlobStore(BlobStore):
    """Blob store backed by a dict."""

    def __init__(self, initial: dict[str, bytes] | None = None):
        self._blobs: dict[str, bytes] = dict(initial or {})

    def read(self, key: str) -> bytes | None:
        return self._blobs.get(key)

    def write(self, key: str, data: bytes) -> None:
        self._blobs[key] = bytes(data)

    def exists(self, key: str) -> bool:
        return key in self._blobs

    @property
    def backend_type(self) -> str:
        return "memory"
