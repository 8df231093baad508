"""Observable in-memory state for the active conversation.

MessageStore holds the ordered message list and ChatStatus holds the busy flag
and the current error banner. Both notify subscribers after every change so
presentation layers can re-render without the session layer knowing about them.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Iterator
from typing import Generic, TypeVar

from src.models.message import Message

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Observable(ABC, Generic[T]):
    """Minimal subject: listeners receive a snapshot after each change."""

    def __init__(self) -> None:
        self._listeners: list[Callable[[T], None]] = []

    def subscribe(self, listener: Callable[[T], None]) -> Callable[[], None]:
        """Register a listener.

        Args:
            listener: Called with the new snapshot after every change.

        Returns:
            Callable that removes the listener again.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    @abstractmethod
    def _snapshot(self) -> T: ...

    def _notify(self) -> None:
        snapshot = self._snapshot()
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception(f"Listener {listener!r} failed")


class MessageStore(Observable[tuple[Message, ...]]):
    """Ordered message list with append, id-based update and bulk replace."""

    def __init__(self, messages: Iterable[Message] = ()) -> None:
        super().__init__()
        self._messages: list[Message] = list(messages)

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(tuple(self._messages))

    @property
    def messages(self) -> tuple[Message, ...]:
        return tuple(self._messages)

    def _snapshot(self) -> tuple[Message, ...]:
        return self.messages

    def get(self, message_id: str) -> Message | None:
        return next((m for m in self._messages if m.id == message_id), None)

    def replace_all(self, messages: Iterable[Message]) -> None:
        self._messages = list(messages)
        self._notify()

    def append(self, message: Message) -> None:
        self._messages.append(message)
        self._notify()

    def update_by_id(self, message_id: str, text: str) -> bool:
        """Replace the text of the message with the given id.

        Args:
            message_id: Id of the message to update.
            text: New full text of the message.

        Returns:
            True if a message was updated, False if no message has that id.
        """
        for index, message in enumerate(self._messages):
            if message.id == message_id:
                self._messages[index] = message.with_text(text)
                self._notify()
                return True
        logger.debug(f"No message with id {message_id}, update skipped")
        return False


class ChatStatus(Observable["ChatStatus"]):
    """Busy flag and current error banner."""

    def __init__(self) -> None:
        super().__init__()
        self._busy = False
        self._error: str | None = None

    def _snapshot(self) -> "ChatStatus":
        return self

    @property
    def busy(self) -> bool:
        return self._busy

    @busy.setter
    def busy(self, value: bool) -> None:
        if value != self._busy:
            self._busy = value
            self._notify()

    @property
    def error(self) -> str | None:
        return self._error

    @error.setter
    def error(self, value: str | None) -> None:
        if value != self._error:
            self._error = value
            self._notify()
