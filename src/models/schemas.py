from enum import Enum

from pydantic import BaseModel, Field, field_validator

from src.models.message import Message


class StreamStatus(str, Enum):
    """Status values for streaming updates."""

    RECEIVED = "received"
    GENERATING = "generating"
    COMPLETE = "complete"
    ERROR = "error"


class ChatRequest(BaseModel):
    """Request payload for the streaming chat endpoint.

    Attributes:
        message: User's question or prompt.
    """

    message: str = Field(..., min_length=1)

    @field_validator("message", mode="before")
    @classmethod
    def strip_message(cls, v: str) -> str:
        """Strip whitespace from message before validation."""
        if isinstance(v, str):
            return v.strip()
        return v


class StreamChunk(BaseModel):
    """A chunk of streamed response data.

    Attributes:
        content: The text content of this chunk.
        done: Whether this is the final chunk.
        status: Current processing status (received, generating, complete, error).
        error: Error message if the turn failed.
    """

    content: str
    done: bool
    status: StreamStatus | None = None
    error: str | None = None


class ChatState(BaseModel):
    """Snapshot of the conversation exposed to clients.

    Attributes:
        messages: Ordered message list.
        busy: Whether a response is being streamed.
        error: Current error banner text, if any.
    """

    messages: list[Message] = Field(default_factory=list)
    busy: bool = False
    error: str | None = None
