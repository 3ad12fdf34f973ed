"""Pydantic models for chat API requests and responses.

This module defines the request and response schemas for the chat endpoints,
including the Server-Sent Events emitted by the streaming endpoint.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from switchboard.services.tool_loop import ToolCallRecord


class ChatRequest(BaseModel):
    """Request body for chat endpoints.

    Used by both POST /api/v1/chat/{session_id} (non-streaming)
    and POST /api/v1/chat/{session_id}/stream (streaming).
    """

    message: str = Field(min_length=1, description="The user message to send.")

    model_config = ConfigDict(
        json_schema_extra={"examples": [{"message": "What is 2+2?"}]}
    )


class ToolCallInfo(BaseModel):
    """One tool call executed while producing a response."""

    name: str = Field(description="Tool name")
    arguments: Any = Field(default=None, description="Arguments supplied by the model")
    ok: bool = Field(description="Whether the tool succeeded")
    error_kind: str | None = Field(
        default=None,
        description="invalid_arguments, tool_error or unknown_tool when the call failed",
    )
    error_message: str | None = Field(default=None, description="Failure detail")

    @classmethod
    def from_record(cls, record: ToolCallRecord) -> "ToolCallInfo":
        return cls(
            name=record.name,
            arguments=record.arguments,
            ok=record.ok,
            error_kind=record.error_kind.value if record.error_kind else None,
            error_message=record.error_message,
        )


class ChatResponse(BaseModel):
    """Response body for the non-streaming chat endpoint."""

    session_id: str = Field(description="Session identifier")
    ok: bool = Field(description="False when the turn failed and content is a fallback")
    content: str = Field(description="Text to show the user")
    model: str = Field(description="Model that handled the turn")
    message_id: str | None = Field(
        default=None, description="Id of the stored assistant message (null on failure)"
    )
    error_kind: str | None = Field(default=None, description="Why the turn failed")
    tool_calls_executed: list[ToolCallInfo] = Field(
        default_factory=list,
        description="Tools executed while producing this response",
    )
    eval_count: int | None = Field(default=None, description="Number of tokens generated")
    prompt_eval_count: int | None = Field(
        default=None, description="Number of tokens in the prompt"
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "session_id": "telegram-42",
                "ok": True,
                "content": "2 + 2 is 4.",
                "model": "llama3.1:8b",
                "message_id": "f1e2d3c4b5",
                "error_kind": None,
                "tool_calls_executed": [
                    {"name": "add", "arguments": {"a": 2, "b": 2}, "ok": True}
                ],
                "eval_count": 12,
                "prompt_eval_count": 230,
            }
        }
    )


# --- SSE events ---


class ToolCallEvent(BaseModel):
    """Emitted before a tool is dispatched."""

    tool_name: str
    arguments: Any = None


class ToolResultEvent(BaseModel):
    """Emitted after a tool has been dispatched."""

    tool_name: str
    ok: bool
    result: Any = None
    error_kind: str | None = None
    error_message: str | None = None


class MessageCompleteEvent(BaseModel):
    """Emitted once the final answer has been stored."""

    message_id: str
    content: str
    model: str
    eval_count: int | None = None
    prompt_eval_count: int | None = None


class ErrorEvent(BaseModel):
    """Emitted when the turn fails; `message` is safe to show to the user."""

    code: str
    message: str
    details: dict[str, Any] = Field(default_factory=dict)


class DoneEvent(BaseModel):
    """Emitted last, whatever the outcome."""

    session_id: str
