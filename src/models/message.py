"""Chat message model shared by the session, persistence and API layers."""

import time
from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


class Sender(str, Enum):
    """Author of a chat message."""

    USER = "user"
    AI = "ai"


def new_message_id(prefix: str) -> str:
    """Build a unique message id from a prefix and the creation time.

    Args:
        prefix: Kind of message, e.g. ``user``, ``ai`` or ``error``.

    Returns:
        Opaque id such as ``ai-1760738400123456789-3f9a1c``.
    """
    return f"{prefix}-{time.time_ns()}-{uuid4().hex[:6]}"


class Message(BaseModel):
    """A single message in the conversation.

    Messages are frozen. The streaming AI message is updated by replacing the
    stored record with a copy carrying the new text.

    Attributes:
        id: Opaque unique identifier.
        text: Message content (markdown for AI messages).
        sender: Who wrote the message.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    text: str
    sender: Sender

    @classmethod
    def from_user(cls, text: str) -> "Message":
        return cls(id=new_message_id("user"), text=text, sender=Sender.USER)

    @classmethod
    def from_ai(cls, text: str = "", prefix: str = "ai") -> "Message":
        return cls(id=new_message_id(prefix), text=text, sender=Sender.AI)

    def with_text(self, text: str) -> "Message":
        """Return a copy of this message with different text."""
        return self.model_copy(update={"text": text})
