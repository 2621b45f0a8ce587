"""Abstract base class for blob storage backends.

The persistence layer reads and writes whole documents by key.
The abstraction hides:
- Where documents live (directory on disk, process memory)
- How a missing document is detected
- Backend-specific I/O failures (always surfaced as PersistenceIOError)
"""

from abc import ABC, abstractmethod


class BlobStore(ABC):
    """Opaque key-value store of whole documents.

    Writes always replace the previous blob; there are no partial
    or append writes.
    """

    @abstractmethod
    def read(self, key: str) -> bytes | None:
        """Read a blob.

        Args:
            key: Blob key (a file name for file-backed stores)

        Returns:
            Stored bytes, or None if nothing is stored under key

        Raises:
            PersistenceIOError: If an existing blob cannot be read
        """

    @abstractmethod
    def write(self, key: str, data: bytes) -> None:
        """Replace the blob stored under key.

        Raises:
            PersistenceIOError: If the blob cannot be written
        """

    def exists(self, key: str) -> bool:
        """Check whether a blob is stored under key."""
        return self.read(key) is not None

    @property
    @abstractmethod
    def backend_type(self) -> str:
        """Get the backend type identifier."""
