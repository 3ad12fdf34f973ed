"""Pydantic models for API request and response schemas.

This package contains all Pydantic models used for validating and
serializing API requests and responses across all endpoints.
"""

from switchboard.models.agents import (
    AgentCallRequest,
    AgentCallResponse,
    AgentInfo,
    AgentListResponse,
)
from switchboard.models.chat import ChatRequest, ChatResponse, ToolCallInfo
from switchboard.models.health import HealthResponse
from switchboard.models.sessions import (
    SessionDetailResponse,
    SessionListResponse,
    SessionSummary,
)

__all__ = [
    "AgentCallRequest",
    "AgentCallResponse",
    "AgentInfo",
    "AgentListResponse",
    "ChatRequest",
    "ChatResponse",
    "HealthResponse",
    "SessionDetailResponse",
    "SessionListResponse",
    "SessionSummary",
    "ToolCallInfo",
]
