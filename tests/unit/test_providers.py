"""Unit tests for capability providers and the calculator agent."""

import pytest
from pydantic import BaseModel

from switchboard.agents import CapabilityProvider, build_calculator_provider
from switchboard.errors import DuplicateToolError, ErrorKind
from switchboard.tools import Failure, Success, ToolDispatcher, ToolRegistry, build_tool


class NoteArgs(BaseModel):
    """Take a note"""

    text: str


def test_provider_summary_lists_capabilities():
    """Test that a provider describes itself and its tools."""
    provider = build_calculator_provider()

    summary = provider.summary()

    assert summary.name == "Calculator"
    assert summary.description.startswith("A mathematical agent")
    assert [c.name for c in summary.capabilities] == ["add", "subtract", "multiply", "divide"]
    assert summary.capabilities[0].description == "Add two numbers together"


def test_provider_without_tools():
    """Test that a provider may own no tools at all."""
    provider = CapabilityProvider(
        name="Coordinator", description="Delegates", system_prompt="Be helpful."
    )

    assert provider.tools() == ()
    assert provider.summary().capabilities == []


def test_provider_rejects_duplicate_tool_names():
    """Test that one provider cannot declare a name twice."""
    with pytest.raises(DuplicateToolError):
        CapabilityProvider(
            name="Notes",
            description="Notes",
            system_prompt="",
            tools=[
                build_tool("note", NoteArgs, lambda args: args.text),
                build_tool("note", NoteArgs, lambda args: args.text),
            ],
        )


def test_provider_tools_are_immutable():
    """Test that the tool set is fixed after construction."""
    tools = [build_tool("note", NoteArgs, lambda args: args.text)]
    provider = CapabilityProvider(name="Notes", description="", system_prompt="", tools=tools)

    tools.append(build_tool("other", NoteArgs, lambda args: args.text))

    assert len(provider.tools()) == 1
    assert isinstance(provider.tools(), tuple)


@pytest.fixture
def calculator():
    return ToolDispatcher(ToolRegistry([build_calculator_provider()]))


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "tool,a,b,expected",
    [
        ("add", 2, 2, 4),
        ("subtract", 10, 4, 6),
        ("multiply", 3, 2.5, 7.5),
        ("divide", 9, 3, 3),
    ],
)
async def test_calculator_operations(calculator, tool, a, b, expected):
    """Test each calculator tool."""
    result = await calculator.dispatch(tool, {"a": a, "b": b})

    assert isinstance(result, Success)
    assert result.value == expected


@pytest.mark.asyncio
async def test_calculator_division_by_zero(calculator):
    """Test that division by zero is reported as a tool error."""
    result = await calculator.dispatch("divide", {"a": 1, "b": 0})

    assert isinstance(result, Failure)
    assert result.kind == ErrorKind.TOOL_ERROR
    assert result.message == "Division by zero"
