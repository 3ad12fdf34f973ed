"""Type definitions for the oracle boundary.

This module contains the dataclasses used to represent a completion reply:
either final text, or a batch of tool calls the model wants executed.
"""

import json
from dataclasses import dataclass, field
from typing import Any


@dataclass
class ToolCallRequest:
    """A single tool call selected by the model.

    Attributes:
        name: Name of the tool to invoke
        arguments: Raw, unvalidated arguments (mapping or JSON string)
    """

    name: str
    arguments: Any = None

    def to_message_format(self) -> dict[str, Any]:
        """Render the call the way it is echoed back in an assistant message.

        Ollama expects arguments as a mapping, so JSON strings are decoded and
        anything unparseable is echoed as an empty mapping.
        """
        arguments = self.arguments
        if isinstance(arguments, str):
            try:
                arguments = json.loads(arguments)
            except json.JSONDecodeError:
                arguments = None
        if not isinstance(arguments, dict):
            arguments = {}
        return {"function": {"name": self.name, "arguments": arguments}}


@dataclass
class OracleReply:
    """One completion from the model.

    Attributes:
        content: Text produced by the model (may be empty when calling tools)
        tool_calls: Tool calls requested in this completion, in order
        eval_count: Number of tokens generated, if reported
        prompt_eval_count: Number of prompt tokens, if reported
    """

    content: str = ""
    tool_calls: list[ToolCallRequest] = field(default_factory=list)
    eval_count: int | None = None
    prompt_eval_count: int | None = None

    @property
    def is_final(self) -> bool:
        """True when the model answered without requesting any tool."""
        return not self.tool_calls

    @staticmethod
    def from_ollama_response(response: Any) -> "OracleReply":
        """Create an OracleReply from an Ollama chat response.

        Args:
            response: Ollama ChatResponse object or an equivalent dict

        Returns:
            OracleReply: Parsed reply
        """
        if hasattr(response, "model_dump"):
            data = response.model_dump()
        elif isinstance(response, dict):
            data = response
        else:
            data = vars(response)

        message = data.get("message") or {}
        tool_calls = []
        for call in message.get("tool_calls") or []:
            function = call.get("function") or {}
            name = function.get("name")
            if not name:
                continue
            tool_calls.append(
                ToolCallRequest(name=name, arguments=function.get("arguments"))
            )

        return OracleReply(
            content=message.get("content") or "",
            tool_calls=tool_calls,
            eval_count=data.get("eval_count"),
            prompt_eval_count=data.get("prompt_eval_count"),
        )
