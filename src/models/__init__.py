"""Pydantic models for chat messages and API payloads.

Provides type safety, validation, JSON serialization for the persisted
history, and automatic OpenAPI documentation.

Models:
    - Message: Individual message in the conversation
    - Sender: Message author (user or ai)
    - ChatRequest: Incoming chat request payload
    - StreamChunk: One Server-Sent Events payload
    - ChatState: Messages, busy flag and error banner
"""

from src.models.message import Message, Sender, new_message_id
from src.models.schemas import ChatRequest, ChatState, StreamChunk, StreamStatus

__all__ = [
    "ChatRequest",
    "ChatState",
    "Message",
    "Sender",
    "StreamChunk",
    "StreamStatus",
    "new_message_id",
]
