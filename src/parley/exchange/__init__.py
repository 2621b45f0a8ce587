"""Exchange engine for parley.

Runs one request/response cycle against the active provider and folds
the result back into the active session's transcript.
"""

from .engine import ERROR_PREFIX, ExchangeEngine
from .errors import ExchangeBusyError, NoProviderError
from .models import ExchangeOutcome, ExchangeState

__all__ = [
    "ERROR_PREFIX",
    "ExchangeBusyError",
    "ExchangeEngine",
    "ExchangeOutcome",
    "ExchangeState",
    "NoProviderError",
]
