"""Async Ollama client wrapper.

This module provides an async wrapper around the ollama.AsyncClient that
serves as the oracle boundary: given a transcript and a tool catalog, it
returns either final text or a batch of tool calls. The client is designed to
be created once at startup and reused.
"""

import logging
from typing import Any

import ollama

from switchboard.errors import OracleUnavailableError
from switchboard.ollama.types import OracleReply

logger = logging.getLogger(__name__)


class OllamaClient:
    """Async client for the Ollama chat API.

    Attributes:
        host: The Ollama server URL (e.g., "http://localhost:11434")
        _client: The underlying ollama.AsyncClient instance
    """

    def __init__(self, host: str) -> None:
        """Initialize the Ollama client.

        Args:
            host: The Ollama server URL
        """
        self.host = host
        self._client = ollama.AsyncClient(host=host)
        logger.info(f"OllamaClient initialized with host: {host}")

    async def check_connection(self) -> bool:
        """Check if the Ollama server is reachable.

        Returns:
            bool: True if connection is successful, False otherwise
        """
        try:
            await self._client.list()
            logger.debug("Ollama connection check: successful")
            return True
        except Exception as e:
            logger.warning(f"Ollama connection check failed: {e}")
            return False

    async def complete(
        self,
        model: str,
        messages: list[dict[str, Any]],
        tools: list[dict[str, Any]] | None = None,
        options: dict[str, Any] | None = None,
    ) -> OracleReply:
        """Request one completion, optionally offering tools.

        Args:
            model: The model name to use
            messages: Transcript in Ollama format:
                      [{"role": "user", "content": "..."}, ...]
            tools: Function-tool declarations the model may call
            options: Optional model parameters (temperature, etc.)

        Returns:
            OracleReply: Final text, or the tool calls the model selected

        Raises:
            OracleUnavailableError: If the Ollama API request fails
        """
        logger.debug(
            f"Requesting completion from {model}: {len(messages)} messages, "
            f"{len(tools or [])} tools"
        )
        try:
            response = await self._client.chat(
                model=model,
                messages=messages,
                tools=tools or None,
                options=options,
                stream=False,
            )
        except Exception as e:
            logger.error(f"Ollama completion failed: {e}")
            raise OracleUnavailableError(f"Failed to get response from Ollama: {e}") from e

        reply = OracleReply.from_ollama_response(response)
        logger.debug(
            f"Completion received: {len(reply.content)} characters, "
            f"{len(reply.tool_calls)} tool calls"
        )
        return reply

    async def close(self) -> None:
        """Close the client and clean up resources.

        ollama.AsyncClient uses httpx internally and needs no explicit cleanup
        in current versions.
        """
        logger.debug("OllamaClient closed")
