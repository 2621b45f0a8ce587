"""File-backed blob store: one file per key inside a root directory."""

from pathlib import Path

from .base import BlobStore
from .errors import PersistenceIOError


class FileBlobStore(BlobStore):
    """Stores each blob as a file named after its key.

    The root directory is created lazily on first write so that a
    read-only startup against a fresh directory leaves no trace.
    """

    def __init__(self, root: str | Path = "."):
        self._root = Path(root)

    @property
    def root(self) -> Path:
        return self._root

    def path_for(self, key: str) -> Path:
        """Return the file path that backs key."""
        return self._root / key

    def read(self, key: str) -> bytes | None:
        path = self.path_for(key)
        if not path.exists():
            return None
        try:
            return path.read_bytes()
        except OSError as e:
            raise PersistenceIOError(f"Failed to read {path}: {e}") from e

    def write(self, key: str, data: bytes) -> None:
        path = self.path_for(key)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except OSError as e:
            raise PersistenceIOError(f"Failed to write {path}: {e}") from e

    def exists(self, key: str) -> bool:
        return self.path_for(key).is_file()

    @property
    def backend_type(self) -> str:
        return "file"
