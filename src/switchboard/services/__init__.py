"""Business logic services for switchboard.

This package contains the coordinating assistant, the oracle/tool loop it
runs, single-agent calls, history retention and system prompt composition.
"""

from switchboard.services.agent_runner import AgentResponse, AgentRunner
from switchboard.services.assistant import Assistant, TurnResult
from switchboard.services.retention import HistoryRetentionPolicy
from switchboard.services.tool_loop import LoopEvent, ToolCallRecord, ToolLoop

__all__ = [
    "AgentResponse",
    "AgentRunner",
    "Assistant",
    "HistoryRetentionPolicy",
    "LoopEvent",
    "ToolCallRecord",
    "ToolLoop",
    "TurnResult",
]
