"""Gemini chat client with streaming support.

Wraps the google-genai SDK behind a small interface so the session layer only
sees two operations: create a chat handle (optionally seeded with history) and
stream text fragments for a user message.
"""

import logging
from collections.abc import AsyncGenerator, AsyncIterator, Sequence
from typing import Protocol

from google import genai
from google.genai import types
from pydantic import ValidationError

from src.agent.config import ChatConfig, get_chat_config
from src.models.message import Message, Sender
from src.session.errors import InitializationError, StreamError

logger = logging.getLogger(__name__)

_ROLES = {Sender.USER: "user", Sender.AI: "model"}


class ChatHandle(Protocol):
    """Remote conversation whose turn history lives on the API side."""

    async def send_stream(self, text: str) -> AsyncIterator[str]: ...


class ChatClient(Protocol):
    """Factory for remote conversation handles."""

    def create(self, history: Sequence[Message] | None = None) -> ChatHandle: ...


def to_gemini_history(messages: Sequence[Message]) -> list[types.Content]:
    """Translate stored messages into Gemini turn contents.

    User messages map to the ``user`` role and AI messages to ``model``.

    Args:
        messages: Ordered conversation history.

    Returns:
        One Content per message, each with a single text part.
    """
    return [
        types.Content(role=_ROLES[msg.sender], parts=[types.Part(text=msg.text)])
        for msg in messages
    ]


class GeminiChatHandle:
    """One Gemini chat session."""

    def __init__(self, chat: object) -> None:
        self._chat = chat

    async def send_stream(self, text: str) -> AsyncIterator[str]:
        """Send a user message and open the response stream.

        Args:
            text: The user's message.

        Returns:
            Async iterator over non-empty text fragments in arrival order.

        Raises:
            StreamError: If the request cannot be sent.
        """
        try:
            stream = await self._chat.send_message_stream(text)
        except Exception as e:
            raise StreamError(f"Gemini request failed: {e}") from e
        return self._fragments(stream)

    async def _fragments(self, stream: AsyncIterator) -> AsyncGenerator[str]:
        try:
            async for chunk in stream:
                if chunk.text:
                    yield chunk.text
        except Exception as e:
            raise StreamError(f"Gemini stream failed: {e}") from e


class GeminiChatClient:
    """Creates Gemini chat handles from a ChatConfig."""

    def __init__(self, config: ChatConfig) -> None:
        self._config = config
        self._client = genai.Client(api_key=config.api_key)

    @classmethod
    def from_env(cls) -> "GeminiChatClient":
        """Build a client from environment configuration.

        Raises:
            InitializationError: If the API key is missing or the SDK client
                cannot be constructed.
        """
        try:
            config = get_chat_config()
        except ValidationError as e:
            raise InitializationError("GEMINI_API_KEY environment variable not set.") from e
        try:
            return cls(config)
        except Exception as e:
            raise InitializationError(f"Failed to create Gemini client: {e}") from e

    def _generation_config(self) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(
            system_instruction=self._config.system_instruction,
            temperature=self._config.temperature,
            max_output_tokens=self._config.max_output_tokens,
        )

    def create(self, history: Sequence[Message] | None = None) -> GeminiChatHandle:
        """Create a chat handle, replaying history as prior context.

        Args:
            history: Messages from a previous session, or None to start empty.

        Returns:
            Handle for streaming new turns.

        Raises:
            InitializationError: If the SDK rejects the chat creation.
        """
        try:
            chat = self._client.aio.chats.create(
                model=self._config.model_name,
                history=to_gemini_history(history) if history else None,
                config=self._generation_config(),
            )
        except Exception as e:
            raise InitializationError(f"Failed to create Gemini chat: {e}") from e

        logger.info(
            f"Created Gemini chat ({self._config.model_name}) "
            f"with {len(history) if history else 0} history messages"
        )
        return GeminiChatHandle(chat)
