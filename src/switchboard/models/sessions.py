"""Pydantic models for session API responses."""

from pydantic import BaseModel, Field

from switchboard.sessions import ConversationSession


class MessageItem(BaseModel):
    """One entry of a session transcript."""

    role: str = Field(description="system, user or assistant")
    content: str = Field(description="Message content")
    message_id: str = Field(description="Unique message identifier")
    timestamp: str = Field(description="ISO 8601 timestamp")
    model: str | None = Field(default=None, description="Model (assistant messages only)")


class SessionSummary(BaseModel):
    """Short description of a session for listings."""

    session_id: str
    created_at: str
    updated_at: str
    message_count: int
    preview: str = Field(default="", description="Start of the first user message")

    @classmethod
    def from_session(cls, session: ConversationSession) -> "SessionSummary":
        return cls(
            session_id=session.session_id,
            created_at=session.created_at,
            updated_at=session.updated_at,
            message_count=session.message_count,
            preview=session.get_preview(),
        )


class SessionListResponse(BaseModel):
    """Response for GET /api/v1/sessions."""

    sessions: list[SessionSummary] = Field(default_factory=list)


class SessionDetailResponse(BaseModel):
    """Response for GET /api/v1/sessions/{session_id}."""

    session_id: str
    created_at: str
    updated_at: str
    messages: list[MessageItem] = Field(default_factory=list)

    @classmethod
    def from_session(cls, session: ConversationSession) -> "SessionDetailResponse":
        return cls(
            session_id=session.session_id,
            created_at=session.created_at,
            updated_at=session.updated_at,
            messages=[
                MessageItem(
                    role=message.role,
                    content=message.content,
                    message_id=message.message_id,
                    timestamp=message.timestamp,
                    model=getattr(message, "model", None) or None,
                )
                for message in session.messages
            ],
        )
