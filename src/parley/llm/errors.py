"""Exceptions raised while talking to a chat completion endpoint."""


class ChatAPIError(Exception):
    """Base class for chat API failures."""


class TransportError(ChatAPIError):
    """The request could not be sent or the response body could not be read."""


class FormatError(ChatAPIError):
    """The response body does not hold a reply at choices[0].message.content."""
