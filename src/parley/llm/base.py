from abc import ABC, abstractmethod
from typing import Any


class ChatTransport(ABC):
    """Abstract base class for chat request transports.

    This module hides the design decision of how a request reaches the
    remote API. Implementations must handle:
    - HTTP client setup
    - Bearer-token authentication
    - Buffering and decoding the whole response body

    Supports async context manager protocol for proper resource cleanup:
        async with transport:
            body = await transport.post_chat(url, key, payload)
        # Automatically cleaned up
    """

    @abstractmethod
    async def post_chat(
        self,
        endpoint_url: str,
        credential: str,
        payload: dict[str, Any]
    ) -> Any:
        """Send one chat request and return the decoded JSON body.

        Args:
            endpoint_url: Full URL to POST to
            credential: Token sent as 'Authorization: Bearer <credential>'
            payload: JSON request body

        Returns:
            Decoded response body (any JSON value)

        Raises:
            TransportError: If sending fails or the body is not JSON
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections or resources."""
        pass

    async def __aenter__(self) -> "ChatTransport":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit with automatic cleanup.

        Note: Suppresses "Event loop is closed" errors during cleanup.
        This is a known harmless race condition in httpx/anyio cleanup:
        https://github.com/encode/httpx/issues/914
        """
        try:
            await self.close()
        except RuntimeError as e:
            if "Event loop is closed" not in str(e):
                raise
