"""Data models for chat sessions.

Field aliases are the keys used in the session collection file:
sessions carry id, name and messages; messages carry sender and content.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_SESSION_NAME = "Default Session"

# Sender value written by earlier releases for assistant replies
LEGACY_ASSISTANT_SENDER = "API"


class Role(str, Enum):
    """Who produced a message."""

    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"      # Local error/status notes, never produced by the API


def default_session_name(ordinal_id: int) -> str:
    """Name given to a new session when the user supplies none."""
    return f"Session {ordinal_id + 1}"


class Message(BaseModel):
    """One transcript entry. Immutable once created."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    sender_role: Role = Field(alias="sender", description="Role of the message sender")
    content: str = Field(description="Message text")

    @field_validator("sender_role", mode="before")
    @classmethod
    def _accept_legacy_sender(cls, value: Any) -> Any:
        if value == LEGACY_ASSISTANT_SENDER:
            return Role.ASSISTANT
        return value


class Session(BaseModel):
    """A named, ordered conversation transcript."""

    model_config = ConfigDict(populate_by_name=True)

    ordinal_id: int = Field(alias="id", description="Session count at creation time")
    display_name: str = Field(alias="name", description="Name shown in the session list")
    transcript: list[Message] = Field(
        default_factory=list,
        alias="messages",
        description="Messages in the order they were appended"
    )

    @classmethod
    def default(cls) -> "Session":
        """The session used when no other session exists."""
        return cls(ordinal_id=0, display_name=DEFAULT_SESSION_NAME)

    def append(self, role: Role, content: str) -> Message:
        message = Message(sender_role=role, content=content)
        self.transcript.append(message)
        return message

    def reset(self, name: str = DEFAULT_SESSION_NAME) -> None:
        """Drop the whole transcript and rename the session."""
        self.transcript.clear()
        self.display_name = name
