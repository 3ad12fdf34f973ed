"""Oracle/tool loop.

The loop alternates between asking the oracle for a completion and
dispatching the tool calls it selects, until the oracle answers with plain
text. Intermediate tool-call and tool-response entries live only in the
loop's working transcript; callers decide what to persist.
"""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any, Protocol

from pydantic_core import to_json

from switchboard.errors import ErrorKind, ToolLoopLimitError
from switchboard.ollama.types import OracleReply
from switchboard.tools.dispatcher import ToolDispatcher
from switchboard.tools.results import Failure, ToolInvocationResult

logger = logging.getLogger(__name__)


class Oracle(Protocol):
    """The completion service boundary (see OllamaClient.complete)."""

    async def complete(
        self,
        model: str,
        messages: list[dict[str, Any]],
        tools: list[dict[str, Any]] | None = None,
        options: dict[str, Any] | None = None,
    ) -> OracleReply: ...


@dataclass
class ToolCallRecord:
    """What happened to one tool call during a turn."""

    name: str
    arguments: Any
    ok: bool
    result: Any = None
    error_kind: ErrorKind | None = None
    error_message: str | None = None

    @classmethod
    def from_result(cls, name: str, arguments: Any, result: ToolInvocationResult) -> "ToolCallRecord":
        if isinstance(result, Failure):
            return cls(
                name=name,
                arguments=arguments,
                ok=False,
                error_kind=result.kind,
                error_message=result.message,
            )
        return cls(name=name, arguments=arguments, ok=True, result=result.value)


@dataclass
class LoopEvent:
    """Progress notification emitted while a loop runs.

    Attributes:
        type: "tool_call" before dispatch, "tool_result" after
        tool_name: Tool concerned
        data: Event payload (arguments, or the call record)
    """

    type: str
    tool_name: str
    data: dict[str, Any] = field(default_factory=dict)


EventCallback = Callable[[LoopEvent], Awaitable[None]]


@dataclass
class LoopOutcome:
    """Result of a loop that reached a final answer."""

    reply: OracleReply
    tool_calls: list[ToolCallRecord]
    iterations: int


def serialize_result(result: ToolInvocationResult) -> str:
    """Render a tagged result as the content of a tool-response message."""
    return to_json(result.to_payload(), fallback=str).decode()


class ToolLoop:
    """Drives one oracle conversation with a fixed tool catalog.

    Attributes:
        oracle: Completion service
        dispatcher: Dispatcher over the tools offered to the oracle
        model: Model name passed to the oracle
        max_iterations: Maximum number of oracle calls per run
    """

    def __init__(
        self,
        oracle: Oracle,
        dispatcher: ToolDispatcher,
        model: str,
        max_iterations: int = 10,
    ) -> None:
        if max_iterations < 1:
            raise ValueError("max_iterations must be at least 1")
        self.oracle = oracle
        self.dispatcher = dispatcher
        self.model = model
        self.max_iterations = max_iterations
        self._tools = dispatcher.registry.advertisements()

    async def run(
        self,
        messages: list[dict[str, Any]],
        on_event: EventCallback | None = None,
    ) -> LoopOutcome:
        """Run the loop until the oracle produces a final answer.

        Every tool call in a batch is dispatched in order, and every result,
        failures included, is handed back to the oracle.

        Args:
            messages: Initial transcript in oracle format (not modified)
            on_event: Optional coroutine called for each tool call and result

        Returns:
            LoopOutcome with the final reply and a record of each tool call

        Raises:
            OracleUnavailableError: If the oracle call fails
            ToolLoopLimitError: If no final answer arrives within max_iterations
        """
        transcript = list(messages)
        records: list[ToolCallRecord] = []

        for iteration in range(1, self.max_iterations + 1):
            reply = await self.oracle.complete(
                model=self.model,
                messages=transcript,
                tools=self._tools or None,
            )

            if reply.is_final:
                logger.debug(
                    f"Final answer after {iteration} oracle calls and {len(records)} tool calls"
                )
                return LoopOutcome(reply=reply, tool_calls=records, iterations=iteration)

            transcript.append(
                {
                    "role": "assistant",
                    "content": reply.content,
                    "tool_calls": [call.to_message_format() for call in reply.tool_calls],
                }
            )

            for call in reply.tool_calls:
                if on_event is not None:
                    await on_event(
                        LoopEvent("tool_call", call.name, {"arguments": call.arguments})
                    )

                result = await self.dispatcher.dispatch(call.name, call.arguments)
                record = ToolCallRecord.from_result(call.name, call.arguments, result)
                records.append(record)

                transcript.append(
                    {
                        "role": "tool",
                        "tool_name": call.name,
                        "content": serialize_result(result),
                    }
                )

                if on_event is not None:
                    await on_event(LoopEvent("tool_result", call.name, {"record": record}))

        logger.warning(f"Tool loop hit its cap of {self.max_iterations} oracle calls")
        raise ToolLoopLimitError(self.max_iterations)
