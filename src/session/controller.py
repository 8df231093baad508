"""Session controller owning the single active conversation.

Ties together the remote chat handle, the observable message store, the stream
consumer and the history persistence:

1. **Startup** - The stored snapshot is loaded and replayed as the remote
   chat's history, so a restarted client continues the same conversation.

2. **One turn at a time** - The busy flag is checked before any await, which
   is enough on a single event loop. A second send while streaming is a no-op.

3. **Persistence at turn boundaries** - The snapshot is written when the busy
   flag drops back to False, once per turn instead of once per fragment.
"""

import logging
from collections.abc import Callable, Sequence

from src.agent.gemini_client import ChatClient, ChatHandle, GeminiChatClient
from src.models.message import Message
from src.session.errors import INIT_ERROR_MESSAGE, InitializationError
from src.session.persistence import ChatHistoryStore, get_history_store
from src.session.store import ChatStatus, MessageStore
from src.session.stream import StreamConsumer

logger = logging.getLogger(__name__)


class SessionController:
    """Owns the conversation handle and exposes send and clear operations.

    Args:
        client: Factory for remote chat handles. Built from the environment on
            first use when not given.
        history: Snapshot persistence. Defaults to the file-backed store.
        store: Message store to drive. A new empty one by default.
    """

    def __init__(
        self,
        client: ChatClient | None = None,
        history: ChatHistoryStore | None = None,
        store: MessageStore | None = None,
    ) -> None:
        self._client = client
        self._history = history if history is not None else get_history_store()
        self.store = store if store is not None else MessageStore()
        self.status = ChatStatus()
        self._consumer = StreamConsumer(self.store, self.status)
        self._handle: ChatHandle | None = None
        self._was_busy = False
        self.status.subscribe(self._on_status_changed)

    @property
    def messages(self) -> tuple[Message, ...]:
        return self.store.messages

    @property
    def busy(self) -> bool:
        return self.status.busy

    @property
    def error(self) -> str | None:
        return self.status.error

    @property
    def is_ready(self) -> bool:
        """Whether a conversation handle exists."""
        return self._handle is not None

    def _get_client(self) -> ChatClient:
        if self._client is None:
            self._client = GeminiChatClient.from_env()
        return self._client

    def start(self, history: Sequence[Message] | None = None) -> ChatHandle:
        """Create a fresh remote conversation handle.

        Args:
            history: Earlier messages to replay as context, or None.

        Returns:
            The new handle, which also becomes the active one.

        Raises:
            InitializationError: If the credential is missing or the handle
                cannot be created.
        """
        self._handle = None
        handle = self._get_client().create(history or None)
        self._handle = handle
        return handle

    def initialize(self) -> None:
        """Restore the stored conversation or start an empty one."""
        saved = self._history.load()
        try:
            self.start(saved)
        except InitializationError:
            logger.exception("Failed to initialize chat session")
            self.status.error = INIT_ERROR_MESSAGE
            return

        self.store.replace_all(saved or [])
        self.status.error = None
        if saved:
            logger.info(f"Restored chat session with {len(saved)} messages")
        else:
            logger.info("Started new chat session")

    async def send_message(
        self,
        text: str,
        on_fragment: Callable[[str], None] | None = None,
    ) -> bool:
        """Send a user message and stream the AI response into the store.

        Args:
            text: The user's message.
            on_fragment: Optional callback receiving each response fragment.

        Returns:
            False if the message was ignored (blank text, a turn already in
            flight, or no conversation handle), True once the turn is over.
        """
        if not text.strip() or self.status.busy or self._handle is None:
            return False

        self.store.append(Message.from_user(text))
        await self._consumer.consume(self._handle, text, on_fragment)
        return True

    def clear(self) -> None:
        """Discard the stored and active conversation and start an empty one."""
        if self.status.busy:
            return

        self._history.clear()
        self.store.replace_all([])
        try:
            self.start()
        except InitializationError:
            logger.exception("Failed to start a new chat session")
            self.status.error = INIT_ERROR_MESSAGE
            return

        self.status.error = None
        logger.info("Chat cleared")

    def _on_status_changed(self, status: ChatStatus) -> None:
        turn_finished = self._was_busy and not status.busy
        self._was_busy = status.busy
        if turn_finished and len(self.store) > 0:
            self._history.save(self.store.messages)
            logger.debug(f"Persisted {len(self.store)} messages after turn")


# Module-level singleton instance
_session_controller: SessionController | None = None


def get_session_controller() -> SessionController:
    """Get or create the global session controller.

    The controller is initialized on creation, so the stored conversation is
    loaded once per process.

    Returns:
        The SessionController instance.
    """
    global _session_controller
    if _session_controller is None:
        _session_controller = SessionController()
        _session_controller.initialize()
    return _session_controller
