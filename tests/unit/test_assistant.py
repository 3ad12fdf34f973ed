"""Unit tests for the coordinating Assistant."""

import asyncio
import time

import pytest
from pydantic import BaseModel

from switchboard.agents import CapabilityProvider, build_calculator_provider
from switchboard.errors import (
    AgentNotFoundError,
    DuplicateToolError,
    ErrorKind,
    OracleUnavailableError,
    SessionNotFoundError,
    user_message,
)
from switchboard.ollama import OracleReply, ToolCallRequest
from switchboard.services import Assistant, HistoryRetentionPolicy
from switchboard.services.assistant import EMPTY_ANSWER
from switchboard.tools import build_tool


def _call(name: str, **arguments) -> OracleReply:
    return OracleReply(tool_calls=[ToolCallRequest(name, arguments)])


def _assistant(oracle, **kwargs) -> Assistant:
    return Assistant(
        oracle=oracle,
        providers=[build_calculator_provider()],
        model="llama3.1:8b",
        **kwargs,
    )


def test_assistant_profile_has_no_tools(scripted_oracle):
    """Test that the assistant offers sibling tools but owns none."""
    assistant = _assistant(scripted_oracle)

    assert assistant.profile.tools() == ()
    assert list(assistant.registry) == ["add", "subtract", "multiply", "divide"]


def test_system_prompt_lists_agents(scripted_oracle):
    """Test that the composed prompt names agents and their capabilities."""
    assistant = _assistant(scripted_oracle, assistant_name="Ada", user_name="Sam")

    assert "You are Ada" in assistant.system_prompt
    assert "- Calculator:" in assistant.system_prompt
    assert "  - divide:" in assistant.system_prompt
    assert "The user's name is Sam." in assistant.system_prompt


def test_duplicate_tools_fail_construction(scripted_oracle):
    """Test that two providers declaring one name cannot be composed."""
    with pytest.raises(DuplicateToolError):
        Assistant(
            oracle=scripted_oracle,
            providers=[build_calculator_provider(), build_calculator_provider()],
            model="m",
        )


def test_available_agents_and_lookup(scripted_oracle):
    """Test provider discovery."""
    assistant = _assistant(scripted_oracle)

    assert [s.name for s in assistant.available_agents()] == ["Calculator"]
    assert assistant.get_provider("Calculator").name == "Calculator"
    with pytest.raises(AgentNotFoundError):
        assistant.get_provider("Weather")


@pytest.mark.asyncio
async def test_turn_with_tool_grows_history_by_two(scripted_oracle):
    """Test that tool traffic is not persisted: only user + answer are added."""
    scripted_oracle.replies = [_call("add", a=2, b=2), OracleReply(content="2 + 2 is 4.")]
    assistant = _assistant(scripted_oracle)

    result = await assistant.chat("chat-1", "What is 2+2?")

    session = assistant.sessions.get_session("chat-1")
    assert result.ok is True
    assert result.content == "2 + 2 is 4."
    assert result.message_id == session.messages[-1].message_id
    assert [r.name for r in result.tool_calls] == ["add"]
    assert [m.role for m in session.messages] == ["system", "user", "assistant"]
    assert session.messages[1].content == "What is 2+2?"


@pytest.mark.asyncio
async def test_oracle_sees_date_hint_but_session_does_not(scripted_oracle):
    """Test that the current date is sent but never stored."""
    scripted_oracle.replies = [OracleReply(content="It's Friday.")]
    assistant = _assistant(scripted_oracle)

    await assistant.chat("chat-1", "What day is it?")

    sent = scripted_oracle.calls[0]["messages"]
    assert sent[0]["content"] == assistant.system_prompt
    assert sent[-1]["role"] == "system"
    assert sent[-1]["content"].startswith("Current date and time:")
    session = assistant.sessions.get_session("chat-1")
    assert all("Current date and time" not in m.content for m in session.messages)


@pytest.mark.asyncio
async def test_second_turn_sends_full_history(scripted_oracle):
    """Test that prior turns are part of the next oracle call."""
    scripted_oracle.replies = [OracleReply(content="Hi Sam"), OracleReply(content="Sam")]
    assistant = _assistant(scripted_oracle)

    await assistant.chat("chat-1", "I'm Sam")
    await assistant.chat("chat-1", "What's my name?")

    sent = [m["content"] for m in scripted_oracle.calls[1]["messages"]]
    assert sent[1:4] == ["I'm Sam", "Hi Sam", "What's my name?"]


@pytest.mark.asyncio
async def test_oracle_failure_keeps_user_message_only(scripted_oracle):
    """Test that a failed turn stores the user message and no answer."""
    scripted_oracle.replies = [OracleUnavailableError("connection refused")]
    assistant = _assistant(scripted_oracle)

    result = await assistant.chat("chat-1", "Hello?")

    session = assistant.sessions.get_session("chat-1")
    assert result.ok is False
    assert result.error_kind == ErrorKind.ORACLE_UNAVAILABLE
    assert result.content == user_message(ErrorKind.ORACLE_UNAVAILABLE)
    assert result.message_id is None
    assert [m.role for m in session.messages] == ["system", "user"]


@pytest.mark.asyncio
async def test_failure_text_does_not_leak_details(scripted_oracle):
    """Test that internal error text never reaches the user."""
    scripted_oracle.replies = [RuntimeError("secret stack detail")]
    assistant = _assistant(scripted_oracle)

    result = await assistant.chat("chat-1", "Hello?")

    assert result.ok is False
    assert result.error_kind is None
    assert "secret" not in result.content


@pytest.mark.asyncio
async def test_iteration_limit(scripted_oracle):
    """Test that a runaway tool loop fails the turn."""
    scripted_oracle.replies = [_call("add", a=1, b=1) for _ in range(2)]
    assistant = _assistant(scripted_oracle, max_tool_iterations=2)

    result = await assistant.chat("chat-1", "Count forever")

    assert result.ok is False
    assert result.error_kind == ErrorKind.ITERATION_LIMIT
    assert assistant.sessions.get_session("chat-1").message_count == 2


@pytest.mark.asyncio
async def test_turn_timeout():
    """Test that a slow oracle fails the turn with TIMEOUT."""

    class SlowOracle:
        async def complete(self, model, messages, tools=None, options=None):
            await asyncio.sleep(5)
            return OracleReply(content="too late")

    assistant = _assistant(SlowOracle(), turn_timeout_seconds=0.05)

    result = await assistant.chat("chat-1", "Hurry")

    assert result.ok is False
    assert result.error_kind == ErrorKind.TIMEOUT
    assert assistant.sessions.get_session("chat-1").message_count == 2


@pytest.mark.asyncio
async def test_empty_answer_gets_fallback_text(scripted_oracle):
    """Test that an empty final reply is replaced."""
    scripted_oracle.replies = [OracleReply(content="")]
    assistant = _assistant(scripted_oracle)

    result = await assistant.chat("chat-1", "...")

    assert result.ok is True
    assert result.content == EMPTY_ANSWER


@pytest.mark.asyncio
async def test_clear_history_resets_to_system_prompt(scripted_oracle):
    """Test clearing a session."""
    scripted_oracle.replies = [OracleReply(content="a"), OracleReply(content="b")]
    assistant = _assistant(scripted_oracle)
    await assistant.chat("chat-1", "one")
    await assistant.chat("chat-1", "two")

    session = await assistant.clear_history("chat-1")

    assert session.message_count == 1
    assert session.messages[0].content == assistant.system_prompt


@pytest.mark.asyncio
async def test_clear_history_unknown_session(scripted_oracle):
    """Test clearing a session that doesn't exist."""
    assistant = _assistant(scripted_oracle)

    with pytest.raises(SessionNotFoundError):
        await assistant.clear_history("ghost")


@pytest.mark.asyncio
async def test_retention_policy_applied_after_turn(scripted_oracle):
    """Test that old turns are evicted when retention is bounded."""
    scripted_oracle.replies = [OracleReply(content=f"answer {i}") for i in range(3)]
    assistant = _assistant(scripted_oracle, retention=HistoryRetentionPolicy(max_turns=2))

    for i in range(3):
        await assistant.chat("chat-1", f"question {i}")

    contents = [m.content for m in assistant.sessions.get_session("chat-1").messages]
    assert contents[1:] == ["question 1", "answer 1", "question 2", "answer 2"]


class _GateArgs(BaseModel):
    """Wait for the test to open the gate"""

    label: str


@pytest.mark.asyncio
async def test_sessions_do_not_interleave():
    """Test that concurrent sessions keep independent, well-formed transcripts."""
    gate = asyncio.Event()

    async def wait_at_gate(args: _GateArgs) -> str:
        await gate.wait()
        return args.label

    provider = CapabilityProvider(
        name="Gate",
        description="Blocks until released",
        system_prompt="",
        tools=[build_tool("wait", _GateArgs, wait_at_gate)],
    )

    class EchoOracle:
        """Calls the gate tool once, then echoes the last user message."""

        async def complete(self, model, messages, tools=None, options=None):
            if messages[-1]["role"] == "tool":
                last_user = [m for m in messages if m["role"] == "user"][-1]
                return OracleReply(content=f"echo: {last_user['content']}")
            return OracleReply(tool_calls=[ToolCallRequest("wait", {"label": "x"})])

    assistant = Assistant(oracle=EchoOracle(), providers=[provider], model="m")

    first = asyncio.create_task(assistant.chat("alice", "from alice"))
    second = asyncio.create_task(assistant.chat("bob", "from bob"))
    await asyncio.sleep(0.01)
    gate.set()
    results = await asyncio.gather(first, second)

    assert [r.content for r in results] == ["echo: from alice", "echo: from bob"]
    for session_id in ("alice", "bob"):
        session = assistant.sessions.get_session(session_id)
        assert [m.role for m in session.messages] == ["system", "user", "assistant"]
        assert session.messages[2].content == f"echo: from {session_id}"


@pytest.mark.asyncio
async def test_same_session_turns_are_serialized(scripted_oracle):
    """Test that two turns in one session never interleave."""
    scripted_oracle.replies = [OracleReply(content="first"), OracleReply(content="second")]
    assistant = _assistant(scripted_oracle)

    await asyncio.gather(
        assistant.chat("chat-1", "one"),
        assistant.chat("chat-1", "two"),
    )

    roles = [m.role for m in assistant.sessions.get_session("chat-1").messages]
    assert roles == ["system", "user", "assistant", "user", "assistant"]


class _SleepArgs(BaseModel):
    """Block the calling thread for a while"""

    seconds: float


@pytest.mark.asyncio
async def test_slow_sync_tool_does_not_block_other_sessions():
    """Test that a blocking sync tool in one session leaves other turns responsive."""

    def sleep(args: _SleepArgs) -> str:
        time.sleep(args.seconds)
        return "rested"

    provider = CapabilityProvider(
        name="Sleeper",
        description="Blocks its worker thread",
        system_prompt="",
        tools=[build_tool("sleep", _SleepArgs, sleep)],
    )

    class SleepyOracle:
        """Asks for the sleep tool when the user says 'slow', else answers at once."""

        async def complete(self, model, messages, tools=None, options=None):
            if messages[-1]["role"] == "tool":
                return OracleReply(content="done sleeping")
            last_user = [m for m in messages if m["role"] == "user"][-1]
            if last_user["content"] == "slow":
                return OracleReply(tool_calls=[ToolCallRequest("sleep", {"seconds": 0.5})])
            return OracleReply(content="quick answer")

    assistant = Assistant(oracle=SleepyOracle(), providers=[provider], model="m")

    slow = asyncio.create_task(assistant.chat("alice", "slow"))
    await asyncio.sleep(0.05)

    started = time.perf_counter()
    quick = await assistant.chat("bob", "fast")
    elapsed = time.perf_counter() - started

    assert quick.content == "quick answer"
    assert elapsed < 0.2
    assert (await slow).content == "done sleeping"
