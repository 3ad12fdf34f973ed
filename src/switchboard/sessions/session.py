"""ConversationSession class for managing a single conversation.

This module provides the ConversationSession class which handles:
- Seeding the transcript with the system prompt
- Appending user and assistant entries
- Clearing history back to the system prompt
- Explicit eviction of old turns
- Serializing turns for one session via a per-session lock
"""

import asyncio
import logging
import uuid
from dataclasses import asdict
from datetime import datetime, timezone
from typing import Any

from switchboard.sessions.types import (
    AssistantMessage,
    Message,
    SystemMessage,
    UserMessage,
)

logger = logging.getLogger(__name__)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def generate_id() -> str:
    """Generate a new unique identifier.

    Returns:
        10-character hexadecimal string
    """
    return uuid.uuid4().hex[:10]


class ConversationSession:
    """Ordered transcript of one conversation (one user or channel).

    The first entry is always the current system prompt. Entries are only
    appended; the transcript shrinks only through clear() or an explicit
    evict_oldest_turns() call.

    Attributes:
        session_id: Identifier chosen by the transport (chat id, user id, ...)
        messages: The transcript, system prompt first
        turn_lock: Held for the duration of a turn so turns never interleave
    """

    def __init__(self, session_id: str, system_prompt: str) -> None:
        """Initialize a ConversationSession.

        Args:
            session_id: Unique session identifier
            system_prompt: Content of the seeding system message
        """
        self.session_id = session_id
        self.created_at = _now()
        self.updated_at = self.created_at
        self.turn_lock = asyncio.Lock()
        self.messages: list[Message] = [self._system_message(system_prompt)]

    @staticmethod
    def _system_message(content: str) -> SystemMessage:
        return SystemMessage(content=content, message_id=generate_id(), timestamp=_now())

    @property
    def system_prompt(self) -> str:
        return self.messages[0].content

    @property
    def message_count(self) -> int:
        return len(self.messages)

    def add_message(self, message: Message) -> None:
        """Append a message to the transcript.

        Args:
            message: The message to add

        Raises:
            ValueError: If a system message is appended after creation
        """
        if isinstance(message, SystemMessage):
            raise ValueError("The system prompt is fixed when the session is created")
        self.messages.append(message)
        self.updated_at = _now()

    def add_user_message(self, content: str) -> UserMessage:
        message = UserMessage(content=content, message_id=generate_id(), timestamp=_now())
        self.add_message(message)
        return message

    def add_assistant_message(
        self,
        content: str,
        model: str = "",
        eval_count: int | None = None,
        prompt_eval_count: int | None = None,
    ) -> AssistantMessage:
        message = AssistantMessage(
            content=content,
            model=model,
            message_id=generate_id(),
            timestamp=_now(),
            eval_count=eval_count,
            prompt_eval_count=prompt_eval_count,
        )
        self.add_message(message)
        return message

    def clear(self) -> None:
        """Reset the transcript to exactly the system prompt."""
        self.messages = self.messages[:1]
        self.updated_at = _now()
        logger.info(f"Cleared history of session {self.session_id}")

    def evict_oldest_turns(self, keep_turns: int) -> int:
        """Drop the oldest turns so at most `keep_turns` user turns remain.

        A turn starts at a user entry and runs up to the next one. The system
        prompt is never evicted.

        Args:
            keep_turns: Number of most recent turns to keep (>= 0)

        Returns:
            Number of entries removed
        """
        if keep_turns < 0:
            raise ValueError("keep_turns must not be negative")

        turn_starts = [
            index
            for index, message in enumerate(self.messages)
            if isinstance(message, UserMessage)
        ]
        excess = len(turn_starts) - keep_turns
        if excess <= 0:
            return 0

        cut = turn_starts[excess] if excess < len(turn_starts) else len(self.messages)
        removed = cut - 1
        self.messages = self.messages[:1] + self.messages[cut:]
        self.updated_at = _now()
        logger.debug(f"Evicted {removed} entries from session {self.session_id}")
        return removed

    def to_ollama_format(self) -> list[dict[str, Any]]:
        """Convert the transcript to the oracle's message format."""
        return [{"role": message.role, "content": message.content} for message in self.messages]

    def to_dict(self) -> dict[str, Any]:
        """Convert session to a dictionary for JSON serialization."""
        return {
            "session_id": self.session_id,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
            "message_count": self.message_count,
            "messages": [asdict(message) for message in self.messages],
        }

    def get_preview(self, max_length: int = 100) -> str:
        """Get a preview of the session (first user message).

        Args:
            max_length: Maximum length of the preview

        Returns:
            Preview string, truncated if necessary
        """
        for message in self.messages:
            if isinstance(message, UserMessage):
                content = message.content
                if len(content) > max_length:
                    return content[: max_length - 3] + "..."
                return content
        return ""
