"""FastAPI application factory and lifespan management.

This module contains the create_app() factory function that creates and configures
the FastAPI application instance, including lifespan management for startup/shutdown
and router registration.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from switchboard import __version__
from switchboard.agents import (
    CapabilityProvider,
    build_calculator_provider,
    build_news_provider,
    build_scratchpad_provider,
    build_translation_provider,
)
from switchboard.config import AVAILABLE_AGENTS, SwitchboardSettings
from switchboard.errors import ConfigurationError
from switchboard.ollama import OllamaClient
from switchboard.routers import agents, chat, health, sessions
from switchboard.services import AgentRunner, Assistant, HistoryRetentionPolicy
from switchboard.services.system_prompts import read_prompt_file

logger = logging.getLogger(__name__)


def build_providers(
    settings: SwitchboardSettings,
    oracle: OllamaClient,
    http_client: httpx.AsyncClient,
) -> list[CapabilityProvider]:
    """Instantiate the providers listed in settings.enabled_agents.

    Raises:
        ConfigurationError: If an unknown agent is requested
    """
    unknown = sorted(set(settings.enabled_agents) - set(AVAILABLE_AGENTS))
    if unknown:
        raise ConfigurationError(
            f"Unknown agents in configuration: {unknown}. Available: {list(AVAILABLE_AGENTS)}"
        )

    providers: list[CapabilityProvider] = []
    for name in settings.enabled_agents:
        if name == "calculator":
            providers.append(build_calculator_provider())
        elif name == "scratchpad":
            providers.append(build_scratchpad_provider(settings.resolved_scratchpad_dir))
        elif name == "translation":
            providers.append(
                build_translation_provider(oracle, settings.resolved_translation_model)
            )
        elif name == "news":
            providers.append(build_news_provider(http_client, settings.news_base_url))

    logger.info(f"Enabled agents: {[p.name for p in providers]}")
    return providers


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Lifespan context manager for FastAPI application.

    Expensive, read-only objects (the Ollama client, the providers, the
    assistant and its tool registry) are created once at startup and stored
    in app.state for reuse across all requests.

    Args:
        app: The FastAPI application instance.

    Yields:
        None: Control is yielded while the app is running.
    """
    settings: SwitchboardSettings = app.state.settings

    app.state.ollama_client = OllamaClient(host=settings.ollama_host)
    app.state.http_client = httpx.AsyncClient(timeout=30.0)
    logger.info(f"Initialized Ollama client with host: {settings.ollama_host}")

    persona = None
    if settings.resolved_system_prompt_path is not None:
        persona = read_prompt_file(settings.resolved_system_prompt_path)

    providers = build_providers(settings, app.state.ollama_client, app.state.http_client)

    # Duplicate tool names raise here and abort startup
    app.state.assistant = Assistant(
        oracle=app.state.ollama_client,
        providers=providers,
        model=settings.model,
        max_tool_iterations=settings.max_tool_iterations,
        turn_timeout_seconds=settings.turn_timeout_seconds,
        retention=HistoryRetentionPolicy(settings.history_max_turns),
        assistant_name=settings.assistant_name,
        user_name=settings.user_name,
        persona=persona,
    )
    app.state.agent_runner = AgentRunner(
        oracle=app.state.ollama_client,
        providers=providers,
        model=settings.model,
        max_tool_iterations=settings.max_tool_iterations,
        timeout_seconds=settings.turn_timeout_seconds,
    )

    connected = await app.state.ollama_client.check_connection()
    if connected:
        logger.info("Successfully connected to Ollama")
    else:
        logger.warning("Could not connect to Ollama - check if server is running")

    yield

    await app.state.http_client.aclose()
    await app.state.ollama_client.close()
    logger.info("Clients closed")


def create_app(settings: SwitchboardSettings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Optional SwitchboardSettings instance. If not provided,
                  settings will be loaded from environment variables.

    Returns:
        FastAPI: Configured FastAPI application instance.
    """
    if settings is None:
        from switchboard.dependencies import get_settings

        settings = get_settings()

    app = FastAPI(
        title="switchboard",
        description="Conversational coordinator that routes requests to tool-providing agents",
        version=__version__,
        lifespan=lifespan,
    )

    # Store settings in app.state for lifespan access
    app.state.settings = settings

    # Note: FastAPI's type hints for add_middleware are overly strict
    app.add_middleware(
        CORSMiddleware,  # type: ignore[arg-type]
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router)
    app.include_router(agents.router)
    app.include_router(sessions.router)
    app.include_router(chat.router)

    return app
