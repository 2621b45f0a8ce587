"""Session store for parley.

Provides named conversation transcripts and the active-session selection.
"""

from .models import DEFAULT_SESSION_NAME, Message, Role, Session, default_session_name
from .store import SessionStore

__all__ = [
    "DEFAULT_SESSION_NAME",
    "Message",
    "Role",
    "Session",
    "SessionStore",
    "default_session_name",
]
