import logging
from typing import Any

import httpx

from .base import ChatTransport
from .errors import TransportError

logger = logging.getLogger(__name__)


class HttpxChatTransport(ChatTransport):
    """Chat transport built on httpx.AsyncClient.

    Hidden design decisions:
    - One pooled client per transport
    - No timeout and no retries: a request runs until it completes or fails
    - Status codes are not inspected; the body alone decides the outcome
    """

    def __init__(self, client: httpx.AsyncClient | None = None, **client_kwargs: Any):
        """Initialize the transport.

        Args:
            client: Pre-built client (tests pass one with a MockTransport)
            **client_kwargs: Additional kwargs for httpx.AsyncClient
        """
        self._owns_client = client is None
        if client is None:
            client_kwargs.setdefault("timeout", None)
            client = httpx.AsyncClient(**client_kwargs)
        self._client = client

    async def post_chat(
        self,
        endpoint_url: str,
        credential: str,
        payload: dict[str, Any]
    ) -> Any:
        headers = {"Authorization": f"Bearer {credential}"}
        logger.debug("POST %s (%d messages)", endpoint_url, len(payload.get("messages", [])))

        # Header values must be ASCII, so a non-ASCII credential fails while building the request
        try:
            response = await self._client.post(endpoint_url, json=payload, headers=headers)
        except (httpx.HTTPError, httpx.InvalidURL, UnicodeEncodeError) as e:
            raise TransportError(f"Error sending request: {e}") from e

        logger.debug("Response %d from %s", response.status_code, endpoint_url)
        try:
            return response.json()
        except ValueError as e:
            raise TransportError(f"Error reading response: {e}") from e

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()
