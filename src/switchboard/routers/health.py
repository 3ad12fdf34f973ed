"""Health check endpoint router."""

import logging

from fastapi import APIRouter, Request

from switchboard import __version__
from switchboard.models.health import HealthResponse
from switchboard.ollama import OllamaClient

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    """Health check endpoint.

    Returns the current health status and version of switchboard, the
    oracle's reachability and the size of the assistant's tool registry.

    Args:
        request: The FastAPI request object.

    Returns:
        HealthResponse: Health status and version information.
    """
    ollama_connected = None
    ollama_host = None
    agent_count = 0
    tool_count = 0

    if hasattr(request.app.state, "ollama_client"):
        ollama_client: OllamaClient = request.app.state.ollama_client
        ollama_host = ollama_client.host

        try:
            ollama_connected = await ollama_client.check_connection()
            logger.debug(f"Ollama connectivity check: {ollama_connected}")
        except Exception as e:
            logger.warning(f"Ollama connectivity check failed: {e}")
            ollama_connected = False

    if hasattr(request.app.state, "assistant"):
        agent_count = len(request.app.state.assistant.providers)
        tool_count = len(request.app.state.assistant.registry)

    return HealthResponse(
        status="ok",
        version=__version__,
        ollama_connected=ollama_connected,
        ollama_host=ollama_host,
        agent_count=agent_count,
        tool_count=tool_count,
    )
