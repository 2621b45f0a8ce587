from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from ..sessions.models import Message


class ExchangeState(str, Enum):
    """Lifecycle of a single exchange."""

    IDLE = "idle"
    SENDING = "sending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class ExchangeOutcome(BaseModel):
    """Result of one user-message-in, reply-or-error-out cycle."""

    model_config = ConfigDict(frozen=True)

    state: ExchangeState = Field(description="SUCCEEDED or FAILED")
    appended: list[Message] = Field(description="Messages appended to the transcript, in order")
    reply: str | None = Field(default=None, description="Assistant reply on success")
    error: str | None = Field(default=None, description="Error text appended on failure")

    @property
    def succeeded(self) -> bool:
        return self.state is ExchangeState.SUCCEEDED
