"""Unit tests for the oracle/tool loop."""

import json

import pytest

from switchboard.agents import build_calculator_provider
from switchboard.errors import ErrorKind, OracleUnavailableError, ToolLoopLimitError
from switchboard.ollama import OracleReply, ToolCallRequest
from switchboard.services import ToolLoop
from switchboard.tools import ToolDispatcher, ToolRegistry


def _calls(*calls: tuple[str, dict]) -> OracleReply:
    return OracleReply(tool_calls=[ToolCallRequest(name, args) for name, args in calls])


@pytest.fixture
def dispatcher():
    return ToolDispatcher(ToolRegistry([build_calculator_provider()]))


def _loop(oracle, dispatcher, max_iterations=10) -> ToolLoop:
    return ToolLoop(oracle=oracle, dispatcher=dispatcher, model="m", max_iterations=max_iterations)


def test_loop_rejects_non_positive_cap(scripted_oracle, dispatcher):
    """Test that the iteration cap must allow at least one oracle call."""
    with pytest.raises(ValueError):
        _loop(scripted_oracle, dispatcher, max_iterations=0)


@pytest.mark.asyncio
async def test_final_answer_without_tools(scripted_oracle, dispatcher):
    """Test that a plain answer ends the loop after one call."""
    scripted_oracle.replies = [OracleReply(content="Hi there")]

    outcome = await _loop(scripted_oracle, dispatcher).run(
        [{"role": "user", "content": "Hello"}]
    )

    assert outcome.reply.content == "Hi there"
    assert outcome.tool_calls == []
    assert outcome.iterations == 1
    assert len(scripted_oracle.calls[0]["tools"]) == 4


@pytest.mark.asyncio
async def test_tool_result_is_fed_back(scripted_oracle, dispatcher):
    """Test one tool round trip."""
    scripted_oracle.replies = [
        _calls(("add", {"a": 2, "b": 2})),
        OracleReply(content="2 + 2 is 4."),
    ]
    messages = [{"role": "user", "content": "What is 2+2?"}]

    outcome = await _loop(scripted_oracle, dispatcher).run(messages)

    assert outcome.reply.content == "2 + 2 is 4."
    assert outcome.iterations == 2
    assert [r.name for r in outcome.tool_calls] == ["add"]
    assert outcome.tool_calls[0].ok is True
    assert outcome.tool_calls[0].result == 4

    second = scripted_oracle.calls[1]["messages"]
    assert second[1]["role"] == "assistant"
    assert second[1]["tool_calls"] == [
        {"function": {"name": "add", "arguments": {"a": 2, "b": 2}}}
    ]
    assert second[2]["role"] == "tool"
    assert second[2]["tool_name"] == "add"
    assert json.loads(second[2]["content"]) == {"result": 4.0}

    # The caller's transcript is untouched
    assert messages == [{"role": "user", "content": "What is 2+2?"}]


@pytest.mark.asyncio
async def test_failures_do_not_abort_the_batch(scripted_oracle, dispatcher):
    """Test that every call in a batch runs and every result is returned."""
    scripted_oracle.replies = [
        _calls(
            ("divide", {"a": 1, "b": 0}),
            ("teleport", {}),
            ("add", {"a": "one", "b": 2}),
            ("multiply", {"a": 3, "b": 3}),
        ),
        OracleReply(content="Done."),
    ]

    outcome = await _loop(scripted_oracle, dispatcher).run([{"role": "user", "content": "x"}])

    kinds = [r.error_kind for r in outcome.tool_calls]
    assert kinds == [
        ErrorKind.TOOL_ERROR,
        ErrorKind.UNKNOWN_TOOL,
        ErrorKind.INVALID_ARGUMENTS,
        None,
    ]

    tool_messages = [m for m in scripted_oracle.calls[1]["messages"] if m["role"] == "tool"]
    assert len(tool_messages) == 4
    assert json.loads(tool_messages[0]["content"])["error"]["kind"] == "tool_error"
    assert json.loads(tool_messages[1]["content"])["error"]["kind"] == "unknown_tool"
    assert json.loads(tool_messages[3]["content"]) == {"result": 9.0}


@pytest.mark.asyncio
async def test_events_are_emitted_in_order(scripted_oracle, dispatcher):
    """Test progress notifications around each dispatch."""
    scripted_oracle.replies = [
        _calls(("add", {"a": 1, "b": 1}), ("subtract", {"a": 5, "b": 1})),
        OracleReply(content="ok"),
    ]
    events = []

    async def on_event(event):
        events.append((event.type, event.tool_name))

    await _loop(scripted_oracle, dispatcher).run(
        [{"role": "user", "content": "x"}], on_event=on_event
    )

    assert events == [
        ("tool_call", "add"),
        ("tool_result", "add"),
        ("tool_call", "subtract"),
        ("tool_result", "subtract"),
    ]


@pytest.mark.asyncio
async def test_iteration_cap(scripted_oracle, dispatcher):
    """Test that a model that never stops calling tools is cut off."""
    scripted_oracle.replies = [_calls(("add", {"a": 1, "b": 1})) for _ in range(3)]

    with pytest.raises(ToolLoopLimitError) as exc_info:
        await _loop(scripted_oracle, dispatcher, max_iterations=3).run(
            [{"role": "user", "content": "x"}]
        )

    assert exc_info.value.max_iterations == 3
    assert len(scripted_oracle.calls) == 3


@pytest.mark.asyncio
async def test_oracle_error_propagates(scripted_oracle, dispatcher):
    """Test that oracle failures are left to the caller."""
    scripted_oracle.replies = [OracleUnavailableError("down")]

    with pytest.raises(OracleUnavailableError):
        await _loop(scripted_oracle, dispatcher).run([{"role": "user", "content": "x"}])
