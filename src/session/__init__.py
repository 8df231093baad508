"""Conversation session state, streaming and persistence.

Responsibilities:
    - Observable message store and busy/error status
    - Streaming AI responses into the store one fragment at a time
    - Saving the conversation once per completed turn and restoring it on startup
    - Owning the single remote conversation handle (see session.controller)

Contains no rendering code. Presentation layers subscribe to the store and
status and call SessionController.send_message / clear.
"""

from src.session.errors import (
    INIT_ERROR_MESSAGE,
    STREAM_ERROR_MESSAGE,
    ChatError,
    InitializationError,
    StreamError,
)
from src.session.persistence import (
    CHAT_HISTORY_KEY,
    ChatHistoryStore,
    JsonFileStorage,
    MemoryStorage,
    get_history_store,
)
from src.session.store import ChatStatus, MessageStore

__all__ = [
    "CHAT_HISTORY_KEY",
    "INIT_ERROR_MESSAGE",
    "STREAM_ERROR_MESSAGE",
    "ChatError",
    "ChatHistoryStore",
    "ChatStatus",
    "InitializationError",
    "JsonFileStorage",
    "MemoryStorage",
    "MessageStore",
    "StreamError",
    "get_history_store",
]
