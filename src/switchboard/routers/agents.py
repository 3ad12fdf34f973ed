"""Agents router.

Lists the enabled agents with their capabilities and lets a client call a
single agent directly, bypassing the coordinating assistant.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException

from switchboard.dependencies import get_agent_runner, get_assistant
from switchboard.errors import AgentNotFoundError
from switchboard.models.agents import (
    AgentCallRequest,
    AgentCallResponse,
    AgentInfo,
    AgentListResponse,
)
from switchboard.services import AgentRunner, Assistant

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/agents", tags=["agents"])


def _agent_not_found(name: str) -> HTTPException:
    return HTTPException(
        status_code=404,
        detail={
            "error": {
                "code": "agent_not_found",
                "message": f"Agent '{name}' not found",
                "details": {"agent": name},
            }
        },
    )


@router.get("", response_model=AgentListResponse, summary="List agents")
async def list_agents(
    assistant: Annotated[Assistant, Depends(get_assistant)],
) -> AgentListResponse:
    """List the agents the assistant can delegate to, with their tools."""
    return AgentListResponse(
        agents=[AgentInfo.from_summary(s) for s in assistant.available_agents()]
    )


@router.get("/{name}", response_model=AgentInfo, summary="Get agent details")
async def get_agent(
    name: str,
    assistant: Annotated[Assistant, Depends(get_assistant)],
) -> AgentInfo:
    """Describe a single agent.

    Raises:
        HTTPException: 404 if no agent has that name
    """
    try:
        provider = assistant.get_provider(name)
    except AgentNotFoundError:
        raise _agent_not_found(name)
    return AgentInfo.from_summary(provider.summary())


@router.post("/{name}/call", response_model=AgentCallResponse, summary="Call one agent")
async def call_agent(
    name: str,
    request: AgentCallRequest,
    runner: Annotated[AgentRunner, Depends(get_agent_runner)],
) -> AgentCallResponse:
    """Send a request to one agent, using only that agent's prompt and tools.

    Nothing is stored: single-agent calls have no session.

    Raises:
        HTTPException: 404 if no agent has that name
    """
    try:
        response = await runner.call_agent(name, request.message)
    except AgentNotFoundError:
        raise _agent_not_found(name)

    return AgentCallResponse(
        agent=name,
        success=response.success,
        content=response.content,
        error=response.error,
    )
