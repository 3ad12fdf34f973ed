"""Ollama client wrapper and oracle boundary.

This package provides the async client used to ask the language model for
completions and tool selections.
"""

from switchboard.ollama.client import OllamaClient
from switchboard.ollama.types import OracleReply, ToolCallRequest

__all__ = ["OllamaClient", "OracleReply", "ToolCallRequest"]
