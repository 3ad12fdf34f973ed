"""Tagged results returned across the tool dispatch boundary.

A tool invocation always produces exactly one of Success or Failure. The
oracle loop treats a Failure as text to reason over, never as an exception.
"""

from dataclasses import dataclass
from typing import Any

from switchboard.errors import ErrorKind


@dataclass(frozen=True)
class Success:
    """A tool returned normally. `value` is the implementation's return value."""

    value: Any
    ok: bool = True

    def to_payload(self) -> dict[str, Any]:
        return {"result": self.value}


@dataclass(frozen=True)
class Failure:
    """A tool invocation failed before, during, or instead of running."""

    kind: ErrorKind
    message: str
    cause: BaseException | None = None
    ok: bool = False

    def to_payload(self) -> dict[str, Any]:
        return {"error": {"kind": self.kind.value, "message": self.message}}


ToolInvocationResult = Success | Failure
