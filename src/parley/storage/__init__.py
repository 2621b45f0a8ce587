"""Persistence layer for parley.

Stores the provider and session collections in an opaque blob store.
"""

from .base import BlobStore
from .errors import PersistenceError, PersistenceFormatError, PersistenceIOError
from .factory import create_blob_store
from .gateway import Collection, LoadResult, PersistenceGateway

__all__ = [
    "BlobStore",
    "Collection",
    "LoadResult",
    "PersistenceError",
    "PersistenceFormatError",
    "PersistenceGateway",
    "PersistenceIOError",
    "create_blob_store",
]
