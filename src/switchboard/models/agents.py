"""Pydantic models for the agents API."""

from pydantic import BaseModel, Field

from switchboard.agents import ProviderSummary


class CapabilityInfo(BaseModel):
    """One tool advertised by an agent."""

    name: str
    description: str


class AgentInfo(BaseModel):
    """An agent and the capabilities it offers."""

    name: str
    description: str
    capabilities: list[CapabilityInfo] = Field(default_factory=list)

    @classmethod
    def from_summary(cls, summary: ProviderSummary) -> "AgentInfo":
        return cls(
            name=summary.name,
            description=summary.description,
            capabilities=[
                CapabilityInfo(name=c.name, description=c.description)
                for c in summary.capabilities
            ],
        )


class AgentListResponse(BaseModel):
    """Response for GET /api/v1/agents."""

    agents: list[AgentInfo] = Field(default_factory=list)


class AgentCallRequest(BaseModel):
    """Request body for POST /api/v1/agents/{name}/call."""

    message: str = Field(min_length=1, description="Request for the agent")


class AgentCallResponse(BaseModel):
    """Response for POST /api/v1/agents/{name}/call."""

    agent: str
    success: bool
    content: str
    error: dict | None = None
