"""SessionManager: in-memory registry of conversation sessions.

This module provides the SessionManager class which handles:
- Creating sessions on first use, seeded with the assistant's system prompt
- Listing sessions, newest first
- Retrieving and deleting sessions
"""

import logging

from switchboard.errors import SessionNotFoundError
from switchboard.sessions.session import ConversationSession

logger = logging.getLogger(__name__)


class SessionManager:
    """Owns every live ConversationSession, keyed by session id.

    Sessions are independent: each one has its own transcript and turn lock,
    so turns of different sessions may run concurrently.
    """

    def __init__(self, system_prompt: str) -> None:
        """Initialize the SessionManager.

        Args:
            system_prompt: Prompt new sessions are seeded with
        """
        self.system_prompt = system_prompt
        self._sessions: dict[str, ConversationSession] = {}

    def get_or_create(self, session_id: str) -> ConversationSession:
        """Return the session for `session_id`, creating it if needed."""
        session = self._sessions.get(session_id)
        if session is None:
            session = ConversationSession(session_id, self.system_prompt)
            self._sessions[session_id] = session
            logger.info(f"Created new session {session_id}")
        return session

    def get_session(self, session_id: str) -> ConversationSession:
        """Get a specific session by ID.

        Raises:
            SessionNotFoundError: If the session doesn't exist
        """
        try:
            return self._sessions[session_id]
        except KeyError:
            raise SessionNotFoundError(f"Session {session_id} not found") from None

    def list_sessions(self) -> list[ConversationSession]:
        """List all sessions, sorted by updated_at descending."""
        return sorted(
            self._sessions.values(),
            key=lambda s: s.updated_at,
            reverse=True,
        )

    def delete_session(self, session_id: str) -> None:
        """Forget a session.

        Raises:
            SessionNotFoundError: If the session doesn't exist
        """
        if session_id not in self._sessions:
            raise SessionNotFoundError(f"Session {session_id} not found")
        del self._sessions[session_id]
        logger.info(f"Deleted session {session_id}")
