from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import FormatError

INVALID_RESPONSE_FORMAT = "Invalid response format"


class WireMessage(BaseModel):
    """A message as sent to the remote API."""

    model_config = ConfigDict(frozen=True)

    role: Literal["user", "assistant"] = Field(description="Role understood by the remote API")
    content: str = Field(description="Content of the message")


class ChatRequest(BaseModel):
    """Body of an outbound chat completion request."""

    model_config = ConfigDict(frozen=True)

    model: str = Field(description="Model identifier of the active provider")
    messages: list[WireMessage] = Field(default_factory=list, description="Full ordered transcript")

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump()


class _ReplyMessage(BaseModel):
    content: str


class _Choice(BaseModel):
    message: _ReplyMessage


class ChatCompletion(BaseModel):
    """The part of a chat completion response that parley reads."""

    choices: list[Any] = Field(min_length=1)

    @property
    def reply(self) -> str:
        """Content of the first choice; later choices are never inspected."""
        return _Choice.model_validate(self.choices[0]).message.content


def extract_reply(body: Any) -> str:
    """Pull choices[0].message.content out of a decoded response body.

    Raises:
        FormatError: If the path is missing or does not hold a string
    """
    try:
        return ChatCompletion.model_validate(body).reply
    except ValidationError as e:
        raise FormatError(INVALID_RESPONSE_FORMAT) from e
