"""Chat endpoints for the active conversation.

Streams AI responses as Server-Sent Events and exposes the message list,
busy flag and error banner of the single session.
"""

import asyncio
import logging
from collections.abc import AsyncGenerator

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import StreamingResponse

from src.models.schemas import ChatRequest, ChatState, StreamChunk, StreamStatus
from src.session.controller import SessionController, get_session_controller
from src.session.errors import INIT_ERROR_MESSAGE

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chat", tags=["chat"])

BUSY_DETAIL = "A response is already being generated"


async def session_controller() -> SessionController:
    """Return the shared controller, created on the event loop thread."""
    return get_session_controller()


def _chat_state(controller: SessionController) -> ChatState:
    return ChatState(
        messages=list(controller.messages),
        busy=controller.busy,
        error=controller.error,
    )


def _sse(chunk: StreamChunk) -> str:
    """Format a chunk as one Server-Sent Events data line."""
    return f"data: {chunk.model_dump_json()}\n\n"


def _ensure_idle(controller: SessionController) -> None:
    """Reject requests while a turn is streaming.

    Raises:
        HTTPException: 409 if a response is in flight.
    """
    if controller.busy:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=BUSY_DETAIL)


@router.get("", response_model=ChatState)
async def get_chat(
    controller: SessionController = Depends(session_controller),
) -> ChatState:
    """Return the current messages, busy flag and error banner."""
    return _chat_state(controller)


@router.post("/stream")
async def stream_chat(
    request: ChatRequest,
    controller: SessionController = Depends(session_controller),
) -> StreamingResponse:
    """Send a message and stream the AI response.

    Each fragment is sent as a ``data:`` line holding a StreamChunk. The last
    chunk has ``done=true`` and carries the error text if the turn failed.

    Raises:
        409: A response is already being generated.
        422: Empty or whitespace-only message.
        503: The chat session failed to initialize.
    """
    if not controller.is_ready:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=controller.error or INIT_ERROR_MESSAGE,
        )
    _ensure_idle(controller)

    async def event_stream() -> AsyncGenerator[str]:
        queue: asyncio.Queue[str | None] = asyncio.Queue()

        yield _sse(StreamChunk(content="", done=False, status=StreamStatus.RECEIVED))

        task = asyncio.create_task(
            controller.send_message(request.message, on_fragment=queue.put_nowait)
        )
        task.add_done_callback(lambda _: queue.put_nowait(None))

        while (fragment := await queue.get()) is not None:
            yield _sse(
                StreamChunk(content=fragment, done=False, status=StreamStatus.GENERATING)
            )

        accepted = await task
        error = controller.error if accepted else BUSY_DETAIL
        if error:
            logger.warning(f"Chat stream finished with error: {error}")
        yield _sse(
            StreamChunk(
                content="",
                done=True,
                status=StreamStatus.ERROR if error else StreamStatus.COMPLETE,
                error=error,
            )
        )

    return StreamingResponse(event_stream(), media_type="text/event-stream")


@router.delete("", response_model=ChatState)
async def clear_chat(
    controller: SessionController = Depends(session_controller),
) -> ChatState:
    """Clear the conversation and its stored history.

    Raises:
        409: A response is being generated.
    """
    _ensure_idle(controller)
    controller.clear()
    return _chat_state(controller)
