"""Pytest configuration and shared fixtures for switchboard tests.

This module provides common fixtures used across all test modules,
including a scripted fake oracle, test app creation and async client setup.
"""

from typing import Any

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from switchboard import create_app
from switchboard.config import SwitchboardSettings
from switchboard.ollama import OracleReply


class ScriptedOracle:
    """Fake oracle replaying a fixed list of replies.

    Items may be OracleReply instances or exceptions (raised when reached).
    Every call's arguments are recorded in `calls`.
    """

    def __init__(self, replies: list[Any] | None = None) -> None:
        self.replies = list(replies or [])
        self.calls: list[dict[str, Any]] = []

    async def complete(self, model, messages, tools=None, options=None) -> OracleReply:
        self.calls.append(
            {"model": model, "messages": list(messages), "tools": tools, "options": options}
        )
        if not self.replies:
            raise AssertionError("ScriptedOracle ran out of replies")
        reply = self.replies.pop(0)
        if isinstance(reply, BaseException):
            raise reply
        return reply


@pytest.fixture
def scripted_oracle():
    """Create an empty ScriptedOracle; tests fill `replies`."""
    return ScriptedOracle()


@pytest.fixture
def test_settings(tmp_path):
    """Create test settings with an isolated data directory.

    Args:
        tmp_path: Pytest fixture providing a temporary directory.

    Returns:
        SwitchboardSettings: Settings instance configured for testing.
    """
    return SwitchboardSettings(
        host="127.0.0.1",
        port=8000,
        ollama_host="http://localhost:11434",
        model="llama3.1:8b",
        data_dir=str(tmp_path),
        scratchpad_dir="scratchpad",
        log_level="DEBUG",
        cors_origins=["*"],
    )


@pytest.fixture
def test_app(test_settings):
    """Create a FastAPI test application instance.

    Args:
        test_settings: Test settings fixture.

    Returns:
        FastAPI: Configured test application.
    """
    return create_app(settings=test_settings)


@pytest_asyncio.fixture
async def async_client(test_app):
    """Create an async HTTP client for testing FastAPI endpoints.

    Args:
        test_app: Test application fixture.

    Yields:
        AsyncClient: Async HTTP client for making test requests.
    """
    # Trigger the lifespan startup manually for tests
    async with test_app.router.lifespan_context(test_app):
        transport = ASGITransport(app=test_app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client
