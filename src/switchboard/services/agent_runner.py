"""Single-agent calls.

Runs a request against one provider in isolation: the provider's own system
prompt, only its tools, and no persisted history.
"""

import asyncio
import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from switchboard.agents.provider import CapabilityProvider
from switchboard.errors import (
    AgentNotFoundError,
    ErrorKind,
    OracleUnavailableError,
    ToolLoopLimitError,
)
from switchboard.services.tool_loop import Oracle, ToolLoop
from switchboard.tools.dispatcher import ToolDispatcher
from switchboard.tools.registry import ToolRegistry

logger = logging.getLogger(__name__)


@dataclass
class AgentResponse:
    """Result of a single-agent call.

    Attributes:
        success: Whether the agent produced an answer
        content: The answer, or a short failure notice
        error: {"code": ErrorKind value or "internal_error", "message": detail}
               on failure
    """

    success: bool
    content: str
    error: dict[str, Any] | None = None


class AgentRunner:
    """Calls providers one at a time, each with its own tool loop."""

    def __init__(
        self,
        oracle: Oracle,
        providers: Iterable[CapabilityProvider],
        model: str,
        max_tool_iterations: int = 10,
        timeout_seconds: float | None = 120.0,
    ) -> None:
        self.timeout_seconds = timeout_seconds
        self._agents: dict[str, tuple[CapabilityProvider, ToolLoop]] = {}

        for provider in providers:
            loop = ToolLoop(
                oracle=oracle,
                dispatcher=ToolDispatcher(ToolRegistry([provider])),
                model=model,
                max_iterations=max_tool_iterations,
            )
            self._agents[provider.name] = (provider, loop)

    def agent_names(self) -> list[str]:
        return list(self._agents)

    async def call_agent(self, name: str, text: str) -> AgentResponse:
        """Ask a single provider to handle `text`.

        Raises:
            AgentNotFoundError: If no provider has that name
        """
        if name not in self._agents:
            raise AgentNotFoundError(f"Agent '{name}' not found")

        provider, loop = self._agents[name]
        messages = [
            {"role": "system", "content": provider.system_prompt},
            {"role": "user", "content": text},
        ]

        try:
            outcome = await asyncio.wait_for(loop.run(messages), timeout=self.timeout_seconds)
        except asyncio.TimeoutError:
            return self._failed(provider, ErrorKind.TIMEOUT.value, "Agent call timed out")
        except (OracleUnavailableError, ToolLoopLimitError) as e:
            kind = (
                ErrorKind.ITERATION_LIMIT
                if isinstance(e, ToolLoopLimitError)
                else ErrorKind.ORACLE_UNAVAILABLE
            )
            return self._failed(provider, kind.value, str(e))
        except Exception as e:
            logger.exception(f"Unexpected error in agent '{name}'")
            return self._failed(provider, "internal_error", str(e) or type(e).__name__)

        content = outcome.reply.content or f"{provider.name} was unable to generate a response."
        logger.info(
            f"Agent '{name}' answered after {len(outcome.tool_calls)} tool calls"
        )
        return AgentResponse(success=True, content=content)

    @staticmethod
    def _failed(provider: CapabilityProvider, code: str, message: str) -> AgentResponse:
        logger.error(f"Error in {provider.name}: {message}")
        return AgentResponse(
            success=False,
            content=f"{provider.name} encountered an error.",
            error={"code": code, "message": message},
        )
