"""Session store: the ordered collection of chat sessions.

Hides how sessions are created, numbered, removed and reset, and keeps
the two invariants the rest of the application relies on:
- there is always at least one session
- the active index always points at an existing session
"""

import logging
from collections.abc import Callable, Iterable

from .models import DEFAULT_SESSION_NAME, Message, Role, Session, default_session_name

logger = logging.getLogger(__name__)


class SessionStore:
    """Ordered sessions with one active session.

    Structural changes (create, remove, clear) notify the change listener
    so the owner can persist the collection. Appending a message does not;
    appends happen in batches around an exchange and the owner persists
    once the exchange has finished.
    """

    def __init__(
        self,
        sessions: Iterable[Session] | None = None,
        active_index: int = 0,
        on_change: Callable[[], None] | None = None
    ):
        self._sessions: list[Session] = []
        self._active_index = 0
        self._on_change = on_change
        self.replace_all(sessions or (), active_index)

    @property
    def sessions(self) -> tuple[Session, ...]:
        return tuple(self._sessions)

    @property
    def active_index(self) -> int:
        return self._active_index

    @property
    def active_session(self) -> Session:
        return self._sessions[self._active_index]

    def __len__(self) -> int:
        return len(self._sessions)

    def create_session(self, name: str | None = None) -> Session:
        """Append a new empty session and make it active.

        Args:
            name: Display name; blank or None falls back to "Session N"

        Returns:
            The new session
        """
        # Ids follow the session count, so they can repeat after removals
        ordinal_id = len(self._sessions)
        if name is None or not name.strip():
            name = default_session_name(ordinal_id)
        session = Session(ordinal_id=ordinal_id, display_name=name)
        self._sessions.append(session)
        self._active_index = len(self._sessions) - 1
        logger.debug("Created session %d (%s)", ordinal_id, name)
        self._notify()
        return session

    def remove_active_session(self) -> Session | None:
        """Remove the active session.

        The last remaining session is never removed: it is cleared and
        renamed to the default name instead.

        Returns:
            The removed session, or None if the last session was reset
        """
        if len(self._sessions) > 1:
            removed = self._sessions.pop(self._active_index)
            if self._active_index >= len(self._sessions):
                self._active_index = len(self._sessions) - 1
            logger.debug("Removed session %d (%s)", removed.ordinal_id, removed.display_name)
            self._notify()
            return removed

        self.active_session.reset(DEFAULT_SESSION_NAME)
        logger.debug("Reset the only session instead of removing it")
        self._notify()
        return None

    def clear_all_sessions(self) -> None:
        """Replace every session with a single fresh default session."""
        self._sessions = [Session.default()]
        self._active_index = 0
        self._notify()

    def select_session(self, index: int) -> Session:
        """Make the session at index active.

        Raises:
            IndexError: If index does not name an existing session
        """
        if not 0 <= index < len(self._sessions):
            raise IndexError(f"Session index {index} out of range (0..{len(self._sessions) - 1})")
        self._active_index = index
        return self._sessions[index]

    def append_message(self, role: Role, content: str) -> Message:
        """Append to the active session's transcript without persisting."""
        return self.active_session.append(role, content)

    def replace_all(self, sessions: Iterable[Session], active_index: int = 0) -> None:
        """Replace the whole collection (used when loading from storage).

        An empty collection falls back to one default session, and an
        out-of-range active index falls back to the first session.
        """
        self._sessions = list(sessions) or [Session.default()]
        if not 0 <= active_index < len(self._sessions):
            active_index = 0
        self._active_index = active_index

    def _notify(self) -> None:
        if self._on_change is not None:
            self._on_change()
