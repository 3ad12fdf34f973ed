"""Health check response model."""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response model for the health check endpoint.

    Attributes:
        status: Health status indicator ("ok" or "error").
        version: The version of switchboard.
        ollama_connected: Whether the oracle is reachable, if a client exists.
        ollama_host: The Ollama host URL, if a client exists.
        agent_count: Number of enabled agents.
        tool_count: Number of tools in the assistant's registry.
    """

    status: str = Field(..., description="Health status of the service")
    version: str = Field(..., description="Version of switchboard")
    ollama_connected: bool | None = Field(
        default=None, description="Whether Ollama is connected"
    )
    ollama_host: str | None = Field(default=None, description="Ollama host URL")
    agent_count: int = Field(default=0, description="Number of enabled agents")
    tool_count: int = Field(default=0, description="Number of registered tools")
