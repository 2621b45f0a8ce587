"""Exchange engine: turns one user utterance into transcript updates.

Hides the protocol details of an exchange:
- Translating the transcript into the remote API's role/content pairs
- Classifying failures (transport vs. response format)
- Which message is appended for each outcome
"""

import logging
from collections.abc import Sequence
from typing import Any

from ..llm import (
    INVALID_RESPONSE_FORMAT,
    ChatRequest,
    ChatTransport,
    FormatError,
    TransportError,
    WireMessage,
    extract_reply,
)
from ..providers import ProviderConfig
from ..sessions import Message, Role, SessionStore
from .errors import ExchangeBusyError
from .models import ExchangeOutcome, ExchangeState

logger = logging.getLogger(__name__)

ERROR_PREFIX = "Error: "


class ExchangeEngine:
    """Runs exchanges against the active session, one at a time.

    Each exchange moves IDLE -> SENDING -> SUCCEEDED | FAILED. The user
    message is always appended first, and exactly one more message
    (assistant reply or system error) follows it.
    """

    def __init__(self, transport: ChatTransport, replay_system_as_assistant: bool = True):
        """Initialize the engine.

        Args:
            transport: Transport used to reach the remote API
            replay_system_as_assistant: Send earlier System messages to the API
                as assistant turns (True), or leave them out of the request (False)
        """
        self._transport = transport
        self._replay_system = replay_system_as_assistant
        self._state = ExchangeState.IDLE

    @property
    def state(self) -> ExchangeState:
        """State of the most recent exchange."""
        return self._state

    @property
    def busy(self) -> bool:
        return self._state is ExchangeState.SENDING

    def build_payload(self, transcript: Sequence[Message], model: str) -> dict[str, Any]:
        """Translate a transcript into a chat request body.

        User messages keep the 'user' role; every other role is sent
        as 'assistant'.

        Args:
            transcript: Full ordered transcript of the session
            model: Model identifier of the provider

        Returns:
            JSON-ready request body
        """
        messages = [
            WireMessage(
                role="user" if message.sender_role is Role.USER else "assistant",
                content=message.content
            )
            for message in transcript
            if self._replay_system or message.sender_role is not Role.SYSTEM
        ]
        return ChatRequest(model=model, messages=messages).to_payload()

    async def send_user_message(
        self,
        store: SessionStore,
        text: str,
        provider: ProviderConfig | None
    ) -> ExchangeOutcome | None:
        """Run one exchange on the store's active session.

        Args:
            store: Session store whose active session receives the messages
            text: Raw user input
            provider: Active provider, or None if none is selected

        Returns:
            Outcome of the exchange, or None if it was refused because no
            provider is available (the transcript is then left untouched)

        Raises:
            ExchangeBusyError: If another exchange is still in flight
        """
        if self.busy:
            raise ExchangeBusyError("An exchange is already in progress")
        if provider is None:
            logger.info("No provider selected; message not sent")
            return None

        user_message = store.append_message(Role.USER, text)
        self._state = ExchangeState.SENDING
        payload = self.build_payload(store.active_session.transcript, provider.model_identifier)

        try:
            body = await self._transport.post_chat(
                provider.endpoint_url,
                provider.credential,
                payload
            )
            reply = extract_reply(body)
        except TransportError as e:
            logger.warning("Exchange with %s failed: %s", provider.display_name, e)
            return self._fail(store, user_message, f"{ERROR_PREFIX}{e}")
        except FormatError:
            logger.warning("Unexpected response format from %s", provider.display_name)
            return self._fail(store, user_message, INVALID_RESPONSE_FORMAT)
        except BaseException:
            # Cancellation or an unexpected error must not leave the engine SENDING
            self._state = ExchangeState.FAILED
            raise

        assistant_message = store.append_message(Role.ASSISTANT, reply)
        self._state = ExchangeState.SUCCEEDED
        return ExchangeOutcome(
            state=ExchangeState.SUCCEEDED,
            appended=[user_message, assistant_message],
            reply=reply
        )

    def _fail(self, store: SessionStore, user_message: Message, error_text: str) -> ExchangeOutcome:
        system_message = store.append_message(Role.SYSTEM, error_text)
        self._state = ExchangeState.FAILED
        return ExchangeOutcome(
            state=ExchangeState.FAILED,
            appended=[user_message, system_message],
            error=error_text
        )

    async def close(self) -> None:
        await self._transport.close()
