"""History retention policy.

Sessions grow without bound unless a retention policy is configured. The
policy evicts whole turns, oldest first, and always keeps the system prompt.
"""

import logging

from switchboard.sessions.session import ConversationSession

logger = logging.getLogger(__name__)


class HistoryRetentionPolicy:
    """Keeps at most `max_turns` turns in a session.

    Attributes:
        max_turns: Number of most recent turns to retain, or None to keep all
    """

    def __init__(self, max_turns: int | None = None) -> None:
        if max_turns is not None and max_turns < 1:
            raise ValueError("max_turns must be at least 1 when set")
        self.max_turns = max_turns

    @property
    def unbounded(self) -> bool:
        return self.max_turns is None

    def apply(self, session: ConversationSession) -> int:
        """Evict turns beyond the limit.

        Returns:
            Number of entries removed from the session
        """
        if self.max_turns is None:
            return 0

        removed = session.evict_oldest_turns(self.max_turns)
        if removed:
            logger.info(
                f"Retention evicted {removed} entries from session {session.session_id} "
                f"(max_turns={self.max_turns})"
            )
        return removed
