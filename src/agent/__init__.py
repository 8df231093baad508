"""Gemini client logic for LLM access.

Responsibilities:
    - Loading model configuration and the API key from the environment
    - Creating Gemini chat sessions, optionally seeded with stored history
    - Exposing streamed response text as plain string fragments

Wraps the google-genai SDK so the session layer never touches it directly.
"""

from src.agent.config import ChatConfig, get_chat_config
from src.agent.gemini_client import (
    ChatClient,
    ChatHandle,
    GeminiChatClient,
    GeminiChatHandle,
    to_gemini_history,
)

__all__ = [
    "ChatClient",
    "ChatConfig",
    "ChatHandle",
    "GeminiChatClient",
    "GeminiChatHandle",
    "get_chat_config",
    "to_gemini_history",
]
