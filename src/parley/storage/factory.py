"""Factory for creating blob store backends."""

from typing import Any

from ..config import STORAGE_FILE, STORAGE_MEMORY
from .base import BlobStore


def create_blob_store(backend: str = STORAGE_FILE, **config: Any) -> BlobStore:
    """Create a blob store backend.

    Args:
        backend: Backend type ("file" or "memory")
        **config: Backend-specific configuration
            For file:
                - root: str | Path (default: current directory)
            For memory:
                - initial: dict[str, bytes] | None

    Returns:
        BlobStore instance

    Raises:
        ValueError: If backend type is not supported

    Example:
        >>> store = create_blob_store("file", root="~/.parley")
    """
    if backend == STORAGE_FILE:
        from .file import FileBlobStore
        return FileBlobStore(**config)

    elif backend == STORAGE_MEMORY:
        from .in_memory import InMemoryBlobStore
        return InMemoryBlobStore(**config)

    raise ValueError(
        f"Unsupported storage backend: {backend}. "
        f"Supported backends: {STORAGE_FILE}, {STORAGE_MEMORY}"
    )
