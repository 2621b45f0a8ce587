"""Persistence gateway for the two durable collections.

Hides the serialization format (JSON written by field alias) and the
mapping from collection to blob key. Only whole collections are written.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, TypeVar

from pydantic import TypeAdapter, ValidationError

from ..providers.models import ProviderConfig
from ..sessions.models import Session
from .base import BlobStore
from .errors import PersistenceFormatError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Collection(str, Enum):
    """Durable collections and the blob key each one is stored under."""

    PROVIDERS = "api_list.json"
    SESSIONS = "sessions.json"

    @property
    def label(self) -> str:
        return "Api list" if self is Collection.PROVIDERS else "Sessions"


@dataclass
class LoadResult(Generic[T]):
    """Outcome of loading a collection.

    found is False when nothing was stored yet; that is informational,
    not an error, and items is then empty.
    """

    items: list[T] = field(default_factory=list)
    found: bool = False


_PROVIDER_LIST = TypeAdapter(list[ProviderConfig])
_SESSION_LIST = TypeAdapter(list[Session])


class PersistenceGateway:
    """Reads and writes the provider and session collections."""

    def __init__(self, store: BlobStore):
        self._store = store

    @property
    def store(self) -> BlobStore:
        return self._store

    def save_providers(self, providers: Sequence[ProviderConfig]) -> None:
        """Overwrite the stored provider collection.

        Raises:
            PersistenceIOError: If the backend write fails
        """
        self._save(Collection.PROVIDERS, _PROVIDER_LIST, list(providers))

    def load_providers(self) -> LoadResult[ProviderConfig]:
        """Load the provider collection.

        Raises:
            PersistenceFormatError: If the stored collection is malformed
            PersistenceIOError: If the backend read fails
        """
        return self._load(Collection.PROVIDERS, _PROVIDER_LIST)

    def save_sessions(self, sessions: Sequence[Session]) -> None:
        """Overwrite the stored session collection.

        Raises:
            PersistenceIOError: If the backend write fails
        """
        self._save(Collection.SESSIONS, _SESSION_LIST, list(sessions))

    def load_sessions(self) -> LoadResult[Session]:
        """Load the session collection.

        Raises:
            PersistenceFormatError: If the stored collection is malformed
            PersistenceIOError: If the backend read fails
        """
        return self._load(Collection.SESSIONS, _SESSION_LIST)

    def _save(self, collection: Collection, adapter: TypeAdapter, items: list) -> None:
        data = adapter.dump_json(items, by_alias=True)
        self._store.write(collection.value, data)
        logger.info("%s saved successfully to %s", collection.label, collection.value)

    def _load(self, collection: Collection, adapter: TypeAdapter) -> LoadResult:
        raw = self._store.read(collection.value)
        if raw is None:
            logger.info("%s file %s not found", collection.label, collection.value)
            return LoadResult(items=[], found=False)

        try:
            items = adapter.validate_json(raw)
        except ValidationError as e:
            raise PersistenceFormatError(
                f"Malformed {collection.value}: {e.error_count()} error(s), first: {e.errors()[0]['msg']}"
            ) from e

        logger.info("%s loaded successfully from %s", collection.label, collection.value)
        return LoadResult(items=items, found=True)
