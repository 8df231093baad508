"""Pytest fixtures and shared test configuration.

Provides reusable fixtures for unit and integration tests.

Fixtures:
    - storage: In-memory key/value storage
    - history: ChatHistoryStore over that storage
    - fake_client: Scripted stand-in for the Gemini chat client
    - controller: Initialized SessionController wired to the fakes
    - async_client: HTTPX client for API testing

Fakes replace only the remote Gemini API; everything else runs for real.
"""

import asyncio
from collections.abc import AsyncGenerator, AsyncIterator, Sequence

import pytest
from httpx import ASGITransport, AsyncClient

from src.api import app
from src.models.message import Message
from src.api.chat import session_controller
from src.session.controller import SessionController
from src.session.persistence import ChatHistoryStore, MemoryStorage


class FakeChatHandle:
    """Chat handle that streams the fragments scripted on its client."""

    def __init__(self, client: "FakeChatClient") -> None:
        self._client = client
        self.sent: list[str] = []

    async def send_stream(self, text: str) -> AsyncIterator[str]:
        self.sent.append(text)
        if self._client.setup_error is not None:
            raise self._client.setup_error
        return self._iterate(list(self._client.fragments), self._client.error)

    async def _iterate(
        self, fragments: list[str], error: Exception | None
    ) -> AsyncGenerator[str]:
        for fragment in fragments:
            await asyncio.sleep(0)
            yield fragment
        if error is not None:
            raise error


class FakeChatClient:
    """Chat client double recording created handles and replayed history.

    Attributes:
        fragments: Fragments every send streams back.
        error: Raised after the fragments, simulating a mid-stream failure.
        setup_error: Raised when the request is sent.
        create_error: Raised when a handle is created.
    """

    def __init__(self) -> None:
        self.fragments: list[str] = []
        self.error: Exception | None = None
        self.setup_error: Exception | None = None
        self.create_error: Exception | None = None
        self.histories: list[list[Message] | None] = []
        self.handles: list[FakeChatHandle] = []

    def create(self, history: Sequence[Message] | None = None) -> FakeChatHandle:
        if self.create_error is not None:
            raise self.create_error
        self.histories.append(list(history) if history else None)
        handle = FakeChatHandle(self)
        self.handles.append(handle)
        return handle

    @property
    def sent(self) -> list[str]:
        """All messages sent through any handle, in order."""
        return [text for handle in self.handles for text in handle.sent]


@pytest.fixture
def storage() -> MemoryStorage:
    """Return empty in-memory storage."""
    return MemoryStorage()


@pytest.fixture
def history(storage: MemoryStorage) -> ChatHistoryStore:
    """Return a history store over the in-memory storage."""
    return ChatHistoryStore(storage)


@pytest.fixture
def fake_client() -> FakeChatClient:
    """Return a scripted chat client."""
    return FakeChatClient()


@pytest.fixture
def controller(fake_client: FakeChatClient, history: ChatHistoryStore) -> SessionController:
    """Return an initialized controller with empty storage.

    Returns:
        SessionController ready to send.
    """
    session = SessionController(client=fake_client, history=history)
    session.initialize()
    return session


@pytest.fixture
async def async_client(controller: SessionController) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for API testing.

    The app's session controller is replaced by the fake-backed one.

    Yields:
        Configured AsyncClient for making test requests.
    """
    app.dependency_overrides[session_controller] = lambda: controller
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client
    finally:
        app.dependency_overrides.pop(session_controller, None)
