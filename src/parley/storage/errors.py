"""Exceptions raised by the persistence layer."""


class PersistenceError(Exception):
    """Base class for persistence failures."""


class PersistenceIOError(PersistenceError):
    """Raised when a backend cannot read or write a blob."""


class PersistenceFormatError(PersistenceError):
    """Raised when a stored collection cannot be deserialized."""
