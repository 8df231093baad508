"""Drives one streamed AI turn into the message store."""

import logging
from collections.abc import Callable

from src.agent.gemini_client import ChatHandle
from src.models.message import Message
from src.session.errors import STREAM_ERROR_MESSAGE
from src.session.store import ChatStatus, MessageStore

logger = logging.getLogger(__name__)


class StreamConsumer:
    """Appends streamed fragments to a placeholder AI message.

    Args:
        store: Message store that receives the placeholder and its updates.
        status: Status whose busy flag brackets the turn.
    """

    def __init__(self, store: MessageStore, status: ChatStatus) -> None:
        self._store = store
        self._status = status

    async def consume(
        self,
        handle: ChatHandle,
        text: str,
        on_fragment: Callable[[str], None] | None = None,
    ) -> str | None:
        """Stream the response to ``text`` into the store.

        An empty AI placeholder is appended as soon as the request is set up.
        Each fragment extends its text, looked up by id. On failure the partial
        placeholder stays as it is and the error text is appended as a
        separate AI message. The busy flag is always cleared at the end.

        Args:
            handle: Remote conversation to send the message to.
            text: The user's message.
            on_fragment: Optional callback receiving each fragment.

        Returns:
            The full response text, or None if the turn failed.
        """
        self._status.busy = True
        self._status.error = None
        try:
            fragments = await handle.send_stream(text)

            placeholder = Message.from_ai()
            self._store.append(placeholder)

            response_text = ""
            async for fragment in fragments:
                if not fragment:
                    continue
                response_text += fragment
                self._store.update_by_id(placeholder.id, response_text)
                if on_fragment is not None:
                    on_fragment(fragment)

            logger.info(f"Response complete ({len(response_text)} chars)")
            return response_text

        except Exception:
            logger.exception("Streaming response failed")
            self._status.error = STREAM_ERROR_MESSAGE
            self._store.append(Message.from_ai(STREAM_ERROR_MESSAGE, prefix="error"))
            return None

        finally:
            self._status.busy = False
