"""Chat history persistence.

The whole conversation is stored as one JSON array under a fixed key in a small
key/value storage. JsonFileStorage keeps the values in a JSON file in the
project data directory, MemoryStorage keeps them for the life of the process.
"""

import json
import logging
import os
import tempfile
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from pydantic import TypeAdapter, ValidationError

from src.models.message import Message

logger = logging.getLogger(__name__)

CHAT_HISTORY_KEY = "gemini-chat-history"

# Stored next to other runtime data in the project data directory
_DATA_DIR = Path(__file__).parent.parent.parent / "data"
_HISTORY_FILE = _DATA_DIR / "chat_history.json"

_messages_adapter = TypeAdapter(list[Message])


class KeyValueStorage(Protocol):
    """String key/value storage with synchronous access."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


class MemoryStorage:
    """Process-local storage, used for tests and ephemeral sessions."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def delete(self, key: str) -> None:
        self._values.pop(key, None)


class JsonFileStorage:
    """Key/value storage backed by a single JSON object file.

    Every write rewrites the file through a temporary file and ``os.replace``
    so readers never see a half-written document. A missing or unreadable
    file reads as empty.
    """

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self) -> dict[str, str]:
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable storage file {self._path}: {e}")
            return {}

        if not isinstance(data, dict):
            logger.warning(f"Ignoring storage file {self._path}: not a JSON object")
            return {}
        return {k: v for k, v in data.items() if isinstance(v, str)}

    def _write_all(self, values: dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(values, f, ensure_ascii=False)
            os.replace(tmp_name, self._path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def get(self, key: str) -> str | None:
        return self._read_all().get(key)

    def set(self, key: str, value: str) -> None:
        values = self._read_all()
        values[key] = value
        self._write_all(values)

    def delete(self, key: str) -> None:
        values = self._read_all()
        if values.pop(key, None) is not None:
            self._write_all(values)


class ChatHistoryStore:
    """Saves and restores the conversation snapshot.

    Args:
        storage: Backing key/value storage.
        key: Storage key of the snapshot.
    """

    def __init__(self, storage: KeyValueStorage, key: str = CHAT_HISTORY_KEY) -> None:
        self._storage = storage
        self._key = key

    def save(self, messages: Sequence[Message]) -> None:
        """Overwrite the snapshot with the given ordered messages."""
        payload = _messages_adapter.dump_json(list(messages)).decode("utf-8")
        self._storage.set(self._key, payload)
        logger.debug(f"Saved {len(messages)} messages under {self._key}")

    def load(self) -> list[Message] | None:
        """Read the snapshot.

        Returns:
            The stored messages, or None when nothing usable is stored
            (missing, empty, or malformed).
        """
        raw = self._storage.get(self._key)
        if not raw:
            return None

        try:
            messages = _messages_adapter.validate_json(raw)
        except ValidationError as e:
            logger.warning(f"Discarding malformed chat history under {self._key}: {e}")
            return None

        return messages or None

    def clear(self) -> None:
        self._storage.delete(self._key)


def get_history_store() -> ChatHistoryStore:
    """Create the file-backed history store.

    The file location defaults to ``data/chat_history.json`` and can be
    changed with CHAT_HISTORY_FILE.
    """
    path = os.getenv("CHAT_HISTORY_FILE") or _HISTORY_FILE
    return ChatHistoryStore(JsonFileStorage(path))
