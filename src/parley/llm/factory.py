from typing import Any

from .base import ChatTransport
from .http import HttpxChatTransport


def create_transport(kind: str = "httpx", **config: Any) -> ChatTransport:
    """Create a chat transport instance.

    Args:
        kind: Transport type ('httpx')
        **config: Transport-specific configuration
            For httpx:
                - client: httpx.AsyncClient | None
                - any other httpx.AsyncClient keyword argument

    Returns:
        Initialized chat transport

    Raises:
        ValueError: If transport type is not supported
    """
    if kind.lower() == "httpx":
        return HttpxChatTransport(**config)

    raise ValueError(
        f"Unsupported transport: {kind}. "
        f"Supported transports: 'httpx'"
    )
