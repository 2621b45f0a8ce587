"""Application controller.

The single owner of the application state. Every user action from the
surface (CLI, GUI, ...) goes through here, and this is the only place
where persistence is triggered and where persistence errors are absorbed.
"""

import logging
from dataclasses import dataclass, field

from .config import STORAGE_FILE, Settings
from .exchange import ExchangeBusyError, ExchangeEngine, ExchangeOutcome, NoProviderError
from .llm import ChatTransport, create_transport
from .providers import ProviderConfig, ProviderRegistry
from .sessions import Session, SessionStore
from .storage import PersistenceError, PersistenceGateway, create_blob_store

logger = logging.getLogger(__name__)


@dataclass
class ApplicationState:
    """Root of all mutable state: the provider registry and the session store."""

    registry: ProviderRegistry = field(default_factory=ProviderRegistry)
    store: SessionStore = field(default_factory=SessionStore)

    @property
    def providers(self) -> tuple[ProviderConfig, ...]:
        return self.registry.providers

    @property
    def active_provider_index(self) -> int:
        return self.registry.active_index

    def active_provider(self) -> ProviderConfig | None:
        return self.registry.active_provider()

    @property
    def sessions(self) -> tuple[Session, ...]:
        return self.store.sessions

    @property
    def active_session_index(self) -> int:
        return self.store.active_index


class ChatController:
    """Owns the application state and serializes access to it.

    Only one exchange may be in flight at a time; a second send while
    one is outstanding raises ExchangeBusyError. Sessions are persisted
    after every exchange, whether it succeeded or failed.
    """

    def __init__(self, gateway: PersistenceGateway, engine: ExchangeEngine):
        self._gateway = gateway
        self._engine = engine
        self.state = ApplicationState(
            registry=ProviderRegistry(on_change=self.save_providers),
            store=SessionStore(on_change=self.save_sessions),
        )
        self.input_buffer = ""
        self.pending_session_name = ""

    @property
    def registry(self) -> ProviderRegistry:
        return self.state.registry

    @property
    def store(self) -> SessionStore:
        return self.state.store

    @property
    def busy(self) -> bool:
        return self._engine.busy

    @property
    def engine(self) -> ExchangeEngine:
        return self._engine

    @property
    def gateway(self) -> PersistenceGateway:
        return self._gateway

    # ------------------------------------------------------------------
    # Startup and persistence
    # ------------------------------------------------------------------
    def startup(self) -> None:
        """Load both collections; failures are logged and defaults kept."""
        try:
            result = self._gateway.load_providers()
            self.registry.replace_all(result.items)
        except PersistenceError as e:
            logger.error("Error loading api_list: %s", e)

        try:
            result = self._gateway.load_sessions()
            self.store.replace_all(result.items)
        except PersistenceError as e:
            logger.error("Error loading sessions: %s", e)

    def save_providers(self) -> bool:
        """Persist the provider collection. Returns False on failure."""
        try:
            self._gateway.save_providers(self.registry.providers)
        except PersistenceError as e:
            logger.error("Error saving api_list: %s", e)
            return False
        return True

    def save_sessions(self) -> bool:
        """Persist the session collection. Returns False on failure."""
        try:
            self._gateway.save_sessions(self.store.sessions)
        except PersistenceError as e:
            logger.error("Error saving sessions: %s", e)
            return False
        return True

    # ------------------------------------------------------------------
    # Providers
    # ------------------------------------------------------------------
    def add_provider(self, config: ProviderConfig) -> int:
        return self.registry.add_provider(config)

    def select_provider(self, index: int) -> ProviderConfig:
        return self.registry.select_provider(index)

    def require_provider(self) -> ProviderConfig:
        """Get the active provider for callers that cannot proceed without one.

        Raises:
            NoProviderError: If no provider is configured or selected
        """
        provider = self.state.active_provider()
        if provider is None:
            raise NoProviderError("No API configured. Add one with 'parley providers add'.")
        return provider

    # ------------------------------------------------------------------
    # Sessions
    # ------------------------------------------------------------------
    def create_session(self, name: str | None = None) -> Session:
        """Create and activate a session.

        Falls back to pending_session_name when name is None. Clears the
        input buffer and the pending name.
        """
        if name is None:
            name = self.pending_session_name
        session = self.store.create_session(name)
        self.input_buffer = ""
        self.pending_session_name = ""
        return session

    def remove_active_session(self) -> Session | None:
        return self.store.remove_active_session()

    def clear_all_sessions(self) -> None:
        self.store.clear_all_sessions()

    def select_session(self, index: int) -> Session:
        return self.store.select_session(index)

    # ------------------------------------------------------------------
    # Exchanges
    # ------------------------------------------------------------------
    async def send(self, text: str | None = None) -> ExchangeOutcome | None:
        """Send text (or the current input buffer) to the active provider.

        The input buffer keeps the text until the exchange succeeds, so a
        failed message can be sent again with send().

        Returns:
            Outcome of the exchange, or None if no provider is selected

        Raises:
            ExchangeBusyError: If an exchange is already in flight
        """
        if self.busy:
            raise ExchangeBusyError("An exchange is already in progress")
        if text is not None:
            self.input_buffer = text

        outcome = await self._engine.send_user_message(
            self.store,
            self.input_buffer,
            self.state.active_provider()
        )
        if outcome is None:
            return None

        if outcome.succeeded:
            self.input_buffer = ""
        self.save_sessions()
        return outcome

    async def close(self) -> None:
        await self._engine.close()


def create_controller(
    settings: Settings | None = None,
    transport: ChatTransport | None = None,
    load: bool = True
) -> ChatController:
    """Wire a controller from settings.

    Args:
        settings: Effective settings (default: Settings.from_env())
        transport: Chat transport (default: an httpx transport)
        load: Load stored collections before returning

    Returns:
        Ready-to-use controller
    """
    settings = settings or Settings.from_env()
    if settings.storage_backend == STORAGE_FILE:
        blob_store = create_blob_store(STORAGE_FILE, root=settings.data_dir)
    else:
        blob_store = create_blob_store(settings.storage_backend)

    engine = ExchangeEngine(
        transport or create_transport("httpx"),
        replay_system_as_assistant=settings.replay_system_messages
    )
    controller = ChatController(PersistenceGateway(blob_store), engine)
    if load:
        controller.startup()
    return controller
