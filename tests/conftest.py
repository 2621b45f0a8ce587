"""Pytest configuration and shared fixtures."""
import logging
from collections.abc import Callable

import httpx
import pytest

from parley.controller import ChatController
from parley.exchange import ExchangeEngine
from parley.llm import HttpxChatTransport
from parley.providers import ProviderConfig
from parley.sessions import SessionStore
from parley.storage import PersistenceGateway, create_blob_store

ENDPOINT_URL = "https://api.example.test/v1/chat/completions"


@pytest.fixture
def provider():
    """Return a provider pointing at a fake endpoint."""
    return ProviderConfig(
        display_name="Example",
        endpoint_url=ENDPOINT_URL,
        credential="sk-test",
        model_identifier="gpt-test"
    )


@pytest.fixture
def store():
    """Return a fresh session store with one default session."""
    return SessionStore()


@pytest.fixture
def memory_gateway():
    """Return a gateway over an in-memory blob store."""
    return PersistenceGateway(create_blob_store("memory"))


@pytest.fixture
def make_transport() -> Callable[..., HttpxChatTransport]:
    """Return a factory for transports backed by httpx.MockTransport.

    The handler receives every request, so tests can both inspect what was
    sent and decide what comes back.
    """
    def _make(handler: Callable[[httpx.Request], httpx.Response]) -> HttpxChatTransport:
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return HttpxChatTransport(client=client)

    return _make


@pytest.fixture
def reply_with() -> Callable[[str], Callable[[httpx.Request], httpx.Response]]:
    """Return a factory for handlers that answer with a well-formed reply."""
    def _handler_for(content: str) -> Callable[[httpx.Request], httpx.Response]:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"choices": [{"message": {"content": content}}]})
        return handler

    return _handler_for


@pytest.fixture
def make_controller(memory_gateway, make_transport):
    """Return a factory for controllers over in-memory storage."""
    def _make(handler, provider: ProviderConfig | None = None) -> ChatController:
        controller = ChatController(memory_gateway, ExchangeEngine(make_transport(handler)))
        controller.startup()
        if provider is not None:
            controller.add_provider(provider)
        return controller

    return _make


@pytest.fixture
def restore_logging():
    """Put the root logger back the way the test found it."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    httpx_level = logging.getLogger("httpx").level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    logging.getLogger("httpx").setLevel(httpx_level)
