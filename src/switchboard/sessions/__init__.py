"""Conversation session management for switchboard.

This package provides the per-conversation transcript and the in-memory
registry of live sessions.
"""

from switchboard.sessions.manager import SessionManager
from switchboard.sessions.session import ConversationSession
from switchboard.sessions.types import (
    AssistantMessage,
    Message,
    SystemMessage,
    UserMessage,
)

__all__ = [
    # Core classes
    "ConversationSession",
    "SessionManager",
    # Message types
    "Message",
    "UserMessage",
    "SystemMessage",
    "AssistantMessage",
]
