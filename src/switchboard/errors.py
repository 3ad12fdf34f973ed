"""Exception types and user-facing failure phrasing for switchboard.

Capability-level failures never travel as exceptions past the dispatcher;
they are converted to tagged results (see switchboard.tools.results). The
exceptions below cover the remaining cases: configuration problems detected
at startup, oracle-boundary failures, and loop limits.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Classification of failures seen by the dispatcher and the assistant."""

    # Tool level
    INVALID_ARGUMENTS = "invalid_arguments"
    TOOL_ERROR = "tool_error"
    UNKNOWN_TOOL = "unknown_tool"

    # Turn level
    ORACLE_UNAVAILABLE = "oracle_unavailable"
    TIMEOUT = "timeout"
    ITERATION_LIMIT = "iteration_limit"


class SwitchboardError(Exception):
    """Base class for all switchboard errors."""


class ConfigurationError(SwitchboardError):
    """Irrecoverable configuration problem detected at startup."""


class DuplicateToolError(ConfigurationError):
    """Two tools were registered under the same name."""

    def __init__(self, tool_name: str, first_owner: str, second_owner: str) -> None:
        self.tool_name = tool_name
        self.first_owner = first_owner
        self.second_owner = second_owner
        super().__init__(
            f"Tool '{tool_name}' is declared by both '{first_owner}' "
            f"and '{second_owner}'"
        )


class OracleUnavailableError(SwitchboardError):
    """The completion service could not produce a reply."""


class ToolLoopLimitError(SwitchboardError):
    """The oracle kept requesting tools past the configured iteration cap."""

    def __init__(self, max_iterations: int) -> None:
        self.max_iterations = max_iterations
        super().__init__(
            f"Oracle did not produce a final answer within {max_iterations} iterations"
        )


class AgentNotFoundError(SwitchboardError):
    """No capability provider is registered under the requested name."""


class SessionNotFoundError(SwitchboardError):
    """No conversation session exists under the requested id."""


# Canned phrasing used only at the outermost boundary, when a turn is handed
# back to the caller. Tool failures go back to the oracle and never end a turn.
_USER_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.ORACLE_UNAVAILABLE: "I was unable to process your request.",
    ErrorKind.TIMEOUT: "That took longer than expected. Please try again.",
    ErrorKind.ITERATION_LIMIT: (
        "I couldn't finish that request in a reasonable number of steps. "
        "Could you break it into smaller parts?"
    ),
}

GENERIC_APOLOGY = "Sorry, something went wrong on my side. Please try again."


def user_message(kind: ErrorKind | None) -> str:
    """Return the short user-facing phrase for a failure kind.

    Unknown or internal kinds get a generic apology without detail.
    """
    if kind is None:
        return GENERIC_APOLOGY
    return _USER_MESSAGES.get(kind, GENERIC_APOLOGY)
