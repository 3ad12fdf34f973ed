"""Dependency injection providers for FastAPI endpoints.

This module provides FastAPI dependency functions that are used across
multiple routers to inject common dependencies like settings and services.
"""

from functools import lru_cache

from fastapi import HTTPException, Request

from switchboard.config import SwitchboardSettings
from switchboard.services import AgentRunner, Assistant


@lru_cache
def get_settings() -> SwitchboardSettings:
    """Get the application settings instance.

    This function is cached so that the same settings instance is reused
    across all requests. Settings are loaded from environment variables
    with the SWITCHBOARD_ prefix.

    Returns:
        SwitchboardSettings: The application configuration settings.
    """
    return SwitchboardSettings()


def _not_ready(component: str) -> HTTPException:
    return HTTPException(
        status_code=503,
        detail={
            "error": {
                "code": "service_unavailable",
                "message": f"{component} not initialized",
                "details": {},
            }
        },
    )


def get_assistant(request: Request) -> Assistant:
    """Get the Assistant created during application startup.

    Raises:
        HTTPException: If the assistant is not initialized (503 Service Unavailable).
    """
    if not hasattr(request.app.state, "assistant"):
        raise _not_ready("Assistant")
    return request.app.state.assistant


def get_agent_runner(request: Request) -> AgentRunner:
    """Get the AgentRunner created during application startup.

    Raises:
        HTTPException: If the runner is not initialized (503 Service Unavailable).
    """
    if not hasattr(request.app.state, "agent_runner"):
        raise _not_ready("Agent runner")
    return request.app.state.agent_runner
