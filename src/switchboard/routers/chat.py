"""Chat API endpoints.

This module provides endpoints for chat interactions with sessions,
including non-streaming and streaming responses via SSE. A session is
created the first time a message is sent to its id.
"""

import asyncio
import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sse_starlette.sse import EventSourceResponse

from switchboard.dependencies import get_assistant
from switchboard.models.chat import (
    ChatRequest,
    ChatResponse,
    DoneEvent,
    ErrorEvent,
    MessageCompleteEvent,
    ToolCallEvent,
    ToolCallInfo,
    ToolResultEvent,
)
from switchboard.services import Assistant, LoopEvent, TurnResult

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/chat", tags=["chat"])


def _to_response(result: TurnResult) -> ChatResponse:
    return ChatResponse(
        session_id=result.session_id,
        ok=result.ok,
        content=result.content,
        model=result.model,
        message_id=result.message_id,
        error_kind=result.error_kind.value if result.error_kind else None,
        tool_calls_executed=[ToolCallInfo.from_record(r) for r in result.tool_calls],
        eval_count=result.eval_count,
        prompt_eval_count=result.prompt_eval_count,
    )


def _loop_event_to_sse(event: LoopEvent) -> dict[str, str]:
    if event.type == "tool_call":
        data = ToolCallEvent(
            tool_name=event.tool_name,
            arguments=event.data.get("arguments"),
        )
    else:
        record = event.data["record"]
        data = ToolResultEvent(
            tool_name=event.tool_name,
            ok=record.ok,
            result=record.result,
            error_kind=record.error_kind.value if record.error_kind else None,
            error_message=record.error_message,
        )
    return {"event": event.type, "data": data.model_dump_json()}


@router.post("/{session_id}", response_model=ChatResponse)
async def chat_non_streaming(
    session_id: str,
    request_body: ChatRequest,
    assistant: Annotated[Assistant, Depends(get_assistant)],
) -> ChatResponse:
    """Send a message to a session and receive the assistant's answer.

    Oracle and tool failures do not produce an HTTP error: the response has
    ok=false, a user-facing fallback in `content` and the failure reason in
    `error_kind`.

    Args:
        session_id: The session ID to chat in (created if new)
        request_body: Chat request containing the message
        assistant: Injected Assistant

    Returns:
        ChatResponse with the final answer and the tool calls made
    """
    logger.info(f"Chat turn requested for session {session_id}")
    result = await assistant.chat(session_id, request_body.message)
    return _to_response(result)


@router.post("/{session_id}/stream")
async def chat_streaming(
    session_id: str,
    request_body: ChatRequest,
    request: Request,
    assistant: Annotated[Assistant, Depends(get_assistant)],
) -> EventSourceResponse:
    """Run a turn and report its progress via Server-Sent Events (SSE).

    Args:
        session_id: The session ID to chat in (created if new)
        request_body: Chat request containing the message
        request: FastAPI request object
        assistant: Injected Assistant

    Returns:
        EventSourceResponse with SSE events

    SSE Events:
        - tool_call: A tool is about to be dispatched
        - tool_result: A tool finished (successfully or not)
        - message_complete: The final answer was stored
        - error: The turn failed; carries the user-facing fallback
        - done: Stream is complete
    """
    queue: asyncio.Queue[LoopEvent] = asyncio.Queue()

    async def on_event(event: LoopEvent) -> None:
        await queue.put(event)

    async def event_generator():
        """Relay loop events while the turn runs, then its outcome."""
        turn = asyncio.create_task(
            assistant.chat(session_id, request_body.message, on_event=on_event)
        )

        try:
            while not turn.done() or not queue.empty():
                if await request.is_disconnected():
                    logger.warning(
                        f"Client disconnected during streaming for session {session_id}"
                    )
                    break
                try:
                    event = await asyncio.wait_for(queue.get(), timeout=0.1)
                except asyncio.TimeoutError:
                    continue
                yield _loop_event_to_sse(event)

            # The turn keeps running after a disconnect so the session stays consistent
            result = await turn

            if result.ok:
                complete = MessageCompleteEvent(
                    message_id=result.message_id or "",
                    content=result.content,
                    model=result.model,
                    eval_count=result.eval_count,
                    prompt_eval_count=result.prompt_eval_count,
                )
                yield {"event": "message_complete", "data": complete.model_dump_json()}
            else:
                error = ErrorEvent(
                    code=result.error_kind.value if result.error_kind else "internal_error",
                    message=result.content,
                )
                yield {"event": "error", "data": error.model_dump_json()}

            yield {
                "event": "done",
                "data": DoneEvent(session_id=session_id).model_dump_json(),
            }
        except asyncio.CancelledError:
            logger.warning(f"Streaming cancelled for session {session_id}")
            raise

    return EventSourceResponse(event_generator())
