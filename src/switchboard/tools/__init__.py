"""Tool declaration, registration, and dispatch layer.

This package turns typed schemas and implementations into tool descriptors,
merges them into a read-only registry, and dispatches oracle tool calls to
them, converting every outcome into a tagged result.
"""

from switchboard.tools.builder import ToolDescriptor, build_tool
from switchboard.tools.dispatcher import ToolDispatcher
from switchboard.tools.registry import ToolRegistry
from switchboard.tools.results import Failure, Success, ToolInvocationResult

__all__ = [
    "ToolDescriptor",
    "build_tool",
    "ToolDispatcher",
    "ToolRegistry",
    "Success",
    "Failure",
    "ToolInvocationResult",
]
