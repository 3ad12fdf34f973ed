"""switchboard: a conversational coordinator for tool-providing agents.

This package routes free-form requests to capability providers through a
language model, validating and dispatching the tool calls it selects, and
serves the assistant over a REST and SSE API.
"""

__version__ = "0.1.0"

from switchboard.app import create_app  # noqa: E402

__all__ = ["create_app", "__version__"]
