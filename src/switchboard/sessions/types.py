"""Data types for conversation sessions.

This module defines the message entries that make up a session transcript.
"""

from dataclasses import dataclass


@dataclass
class UserMessage:
    """A message from the user."""

    role: str = "user"
    content: str = ""
    message_id: str = ""
    timestamp: str = ""

    def __post_init__(self) -> None:
        """Validate role is always 'user'."""
        self.role = "user"


@dataclass
class SystemMessage:
    """A system prompt message."""

    role: str = "system"
    content: str = ""
    message_id: str = ""
    timestamp: str = ""

    def __post_init__(self) -> None:
        """Validate role is always 'system'."""
        self.role = "system"


@dataclass
class AssistantMessage:
    """A final response from the assistant."""

    role: str = "assistant"
    content: str = ""
    model: str = ""
    message_id: str = ""
    timestamp: str = ""
    eval_count: int | None = None
    prompt_eval_count: int | None = None

    def __post_init__(self) -> None:
        """Validate role is always 'assistant'."""
        self.role = "assistant"


# Union type for all persisted message types
Message = UserMessage | SystemMessage | AssistantMessage
