"""Tool dispatch by name.

The dispatcher is the boundary between the oracle loop and capability code.
Whatever happens inside a tool, the caller gets back exactly one tagged
result.
"""

import logging
from typing import Any

from switchboard.errors import ErrorKind
from switchboard.tools.registry import ToolRegistry
from switchboard.tools.results import Failure, ToolInvocationResult

logger = logging.getLogger(__name__)


class ToolDispatcher:
    """Locates tools in a registry and invokes them.

    Attributes:
        registry: The registry tools are looked up in
    """

    def __init__(self, registry: ToolRegistry) -> None:
        self.registry = registry

    async def dispatch(self, tool_name: str, raw_payload: Any) -> ToolInvocationResult:
        """Validate and run one tool call.

        Args:
            tool_name: Name selected by the oracle
            raw_payload: Untyped arguments (mapping or JSON string)

        Returns:
            Success with the tool's return value, or Failure with kind
            UNKNOWN_TOOL, INVALID_ARGUMENTS or TOOL_ERROR
        """
        tool = self.registry.get(tool_name)
        if tool is None:
            # The oracle only sees advertised names, so this is a catalog mismatch
            logger.error(
                f"Oracle requested unknown tool '{tool_name}'. "
                f"Registered tools: {sorted(self.registry)}"
            )
            return Failure(
                kind=ErrorKind.UNKNOWN_TOOL,
                message=f"Tool '{tool_name}' does not exist",
            )

        logger.debug(
            f"Dispatching '{tool_name}' (provider: {self.registry.owner_of(tool_name)})"
        )
        return await tool.invoke(raw_payload)
