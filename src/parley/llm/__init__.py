from .base import ChatTransport
from .errors import ChatAPIError, FormatError, TransportError
from .factory import create_transport
from .http import HttpxChatTransport
from .models import INVALID_RESPONSE_FORMAT, ChatCompletion, ChatRequest, WireMessage, extract_reply

__all__ = [
    "ChatTransport",
    "create_transport",
    "ChatAPIError",
    "ChatCompletion",
    "ChatRequest",
    "FormatError",
    "HttpxChatTransport",
    "INVALID_RESPONSE_FORMAT",
    "TransportError",
    "WireMessage",
    "extract_reply",
]
