"""Sessions router.

This module provides REST API endpoints for:
- Listing live sessions
- Retrieving a session transcript
- Clearing a session's history
- Deleting sessions

Sessions are created implicitly by the first chat message.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from switchboard.dependencies import get_assistant
from switchboard.errors import SessionNotFoundError
from switchboard.models.sessions import (
    SessionDetailResponse,
    SessionListResponse,
    SessionSummary,
)
from switchboard.services import Assistant

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/sessions", tags=["sessions"])


def _session_not_found(session_id: str) -> HTTPException:
    return HTTPException(
        status_code=404,
        detail={
            "error": {
                "code": "session_not_found",
                "message": f"Session {session_id} not found",
                "details": {"session_id": session_id},
            }
        },
    )


@router.get("", response_model=SessionListResponse, summary="List all sessions")
async def list_sessions(
    assistant: Annotated[Assistant, Depends(get_assistant)],
) -> SessionListResponse:
    """List all sessions, most recently updated first."""
    sessions = assistant.sessions.list_sessions()
    return SessionListResponse(sessions=[SessionSummary.from_session(s) for s in sessions])


@router.get(
    "/{session_id}",
    response_model=SessionDetailResponse,
    summary="Get a session transcript",
)
async def get_session(
    session_id: str,
    assistant: Annotated[Assistant, Depends(get_assistant)],
) -> SessionDetailResponse:
    """Return a session with its persisted messages.

    Intermediate tool-call entries are never stored, so the transcript holds
    only the system prompt and the user/assistant exchanges.

    Raises:
        HTTPException: 404 if session not found
    """
    try:
        session = assistant.sessions.get_session(session_id)
    except SessionNotFoundError:
        raise _session_not_found(session_id)
    return SessionDetailResponse.from_session(session)


@router.delete(
    "/{session_id}/messages",
    response_model=SessionDetailResponse,
    summary="Clear a session's history",
)
async def clear_session_history(
    session_id: str,
    assistant: Annotated[Assistant, Depends(get_assistant)],
) -> SessionDetailResponse:
    """Reset a session to only its system prompt.

    Raises:
        HTTPException: 404 if session not found
    """
    try:
        session = await assistant.clear_history(session_id)
    except SessionNotFoundError:
        raise _session_not_found(session_id)
    logger.info(f"Cleared history of session {session_id}")
    return SessionDetailResponse.from_session(session)


@router.delete(
    "/{session_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a session",
)
async def delete_session(
    session_id: str,
    assistant: Annotated[Assistant, Depends(get_assistant)],
) -> None:
    """Forget a session entirely.

    Raises:
        HTTPException: 404 if session not found
    """
    try:
        assistant.sessions.delete_session(session_id)
    except SessionNotFoundError:
        raise _session_not_found(session_id)
