"""
Parley: a chat client for OpenAI-compatible text-generation APIs.

Conversations are organized into named sessions that survive restarts.
Each subpackage hides one design decision:
- providers: how API endpoints are described and selected
- sessions: how transcripts are kept and how sessions are created or reset
- storage: where and how collections are persisted
- llm: how a request travels over HTTP and how the reply is read
- exchange: how one user utterance becomes a transcript update
"""

__version__ = "0.1.0"

from .controller import ApplicationState, ChatController, create_controller
from .exchange import ExchangeEngine, ExchangeOutcome, ExchangeState
from .providers import ProviderConfig, ProviderRegistry
from .sessions import Message, Role, Session, SessionStore
from .storage import PersistenceGateway, create_blob_store

__all__ = [
    "ApplicationState",
    "ChatController",
    "ExchangeEngine",
    "ExchangeOutcome",
    "ExchangeState",
    "Message",
    "PersistenceGateway",
    "ProviderConfig",
    "ProviderRegistry",
    "Role",
    "Session",
    "SessionStore",
    "create_blob_store",
    "create_controller",
]
