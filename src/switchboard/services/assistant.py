"""The coordinating assistant.

The assistant is the single conversational entry point. It is described by a
provider with no tools of its own, merges the tools of all sibling providers
into one registry, and runs each user turn through the oracle/tool loop.

Turn lifecycle:
1. Accept: the user message is appended to the session.
2. Plan/act: the oracle may call any number of tools before answering.
3. Finalize: the final answer is appended and returned.

If the oracle fails, the turn times out, or the loop hits its cap, no
assistant entry is appended and a canned fallback is returned instead. The
user message stays in the session so the next turn has full context.
"""

import asyncio
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from switchboard.agents.provider import CapabilityProvider, ProviderSummary
from switchboard.errors import (
    AgentNotFoundError,
    ErrorKind,
    OracleUnavailableError,
    ToolLoopLimitError,
    user_message,
)
from switchboard.services.retention import HistoryRetentionPolicy
from switchboard.services.system_prompts import compose_system_prompt, current_datetime_hint
from switchboard.services.tool_loop import EventCallback, Oracle, ToolCallRecord, ToolLoop
from switchboard.sessions.manager import SessionManager
from switchboard.sessions.session import ConversationSession
from switchboard.tools.dispatcher import ToolDispatcher
from switchboard.tools.registry import ToolRegistry

logger = logging.getLogger(__name__)

ASSISTANT_NAME = "Personal Assistant"
ASSISTANT_DESCRIPTION = (
    "A coordinator that understands user needs and delegates to specialized agents"
)
EMPTY_ANSWER = "I was unable to process your request."


@dataclass
class TurnResult:
    """Outcome of one turn, as handed back to the transport.

    Attributes:
        session_id: Session the turn ran in
        ok: False when the turn failed and `content` is a fallback phrase
        content: Text to show the user
        model: Model that produced the answer
        message_id: Id of the appended assistant entry (None on failure)
        tool_calls: Every tool call dispatched during the turn
        error_kind: Why the turn failed, if it did
        eval_count: Tokens generated in the final completion, if reported
        prompt_eval_count: Prompt tokens of the final completion, if reported
    """

    session_id: str
    ok: bool
    content: str
    model: str
    message_id: str | None = None
    tool_calls: list[ToolCallRecord] = field(default_factory=list)
    error_kind: ErrorKind | None = None
    eval_count: int | None = None
    prompt_eval_count: int | None = None


class Assistant:
    """Coordinator composing sibling capability providers.

    Attributes:
        profile: The assistant's own provider description (no tools)
        providers: Sibling providers whose tools are offered to the oracle
        registry: Merged, read-only tool registry
        dispatcher: Dispatcher over `registry`
        sessions: Live conversation sessions
        retention: History retention policy applied after each turn

    Raises:
        DuplicateToolError: If two providers declare the same tool name
    """

    def __init__(
        self,
        oracle: Oracle,
        providers: Iterable[CapabilityProvider],
        model: str,
        max_tool_iterations: int = 10,
        turn_timeout_seconds: float | None = 120.0,
        retention: HistoryRetentionPolicy | None = None,
        assistant_name: str = "Mei",
        user_name: str | None = None,
        persona: str | None = None,
    ) -> None:
        self.providers = tuple(providers)
        self.model = model
        self.turn_timeout_seconds = turn_timeout_seconds
        self.retention = retention or HistoryRetentionPolicy()

        self.registry = ToolRegistry(self.providers)
        self.dispatcher = ToolDispatcher(self.registry)
        self._loop = ToolLoop(
            oracle=oracle,
            dispatcher=self.dispatcher,
            model=model,
            max_iterations=max_tool_iterations,
        )

        self.profile = CapabilityProvider(
            name=ASSISTANT_NAME,
            description=ASSISTANT_DESCRIPTION,
            system_prompt=compose_system_prompt(
                self.available_agents(),
                assistant_name=assistant_name,
                user_name=user_name,
                persona=persona,
            ),
            tools=(),
        )
        self.sessions = SessionManager(self.profile.system_prompt)

        logger.info(
            f"Assistant ready with {len(self.providers)} agents and "
            f"{len(self.registry)} tools (model: {model})"
        )

    @property
    def system_prompt(self) -> str:
        return self.profile.system_prompt

    def available_agents(self) -> list[ProviderSummary]:
        """Summaries of every sibling provider, in registration order."""
        return [provider.summary() for provider in self.providers]

    def get_provider(self, name: str) -> CapabilityProvider:
        """Look up a sibling provider by name.

        Raises:
            AgentNotFoundError: If no provider has that name
        """
        for provider in self.providers:
            if provider.name == name:
                return provider
        raise AgentNotFoundError(f"Agent '{name}' not found")

    async def chat(
        self,
        session_id: str,
        text: str,
        on_event: EventCallback | None = None,
    ) -> TurnResult:
        """Run one turn in the session `session_id`, creating it if needed."""
        session = self.sessions.get_or_create(session_id)
        return await self.process(session, text, on_event=on_event)

    async def process(
        self,
        session: ConversationSession,
        text: str,
        on_event: EventCallback | None = None,
    ) -> TurnResult:
        """Run one turn: accept, plan/act, finalize.

        Turns for the same session are serialized on the session's lock;
        turns for different sessions run concurrently.

        Args:
            session: Session to run the turn in
            text: Inbound user text
            on_event: Optional coroutine notified of each tool call and result

        Returns:
            TurnResult. Never raises for oracle or tool failures.
        """
        async with session.turn_lock:
            session.add_user_message(text)
            transcript = session.to_ollama_format() + [current_datetime_hint()]

            try:
                outcome = await asyncio.wait_for(
                    self._loop.run(transcript, on_event=on_event),
                    timeout=self.turn_timeout_seconds,
                )
            except asyncio.TimeoutError:
                logger.error(
                    f"Turn in session {session.session_id} timed out after "
                    f"{self.turn_timeout_seconds}s"
                )
                return self._failed_turn(session, ErrorKind.TIMEOUT)
            except ToolLoopLimitError as e:
                logger.error(f"Turn in session {session.session_id} failed: {e}")
                return self._failed_turn(session, ErrorKind.ITERATION_LIMIT)
            except OracleUnavailableError as e:
                logger.error(f"Oracle unavailable for session {session.session_id}: {e}")
                return self._failed_turn(session, ErrorKind.ORACLE_UNAVAILABLE)
            except Exception:
                logger.exception(f"Unexpected error in session {session.session_id}")
                return self._failed_turn(session, None)

            reply = outcome.reply
            content = reply.content or EMPTY_ANSWER
            message = session.add_assistant_message(
                content,
                model=self.model,
                eval_count=reply.eval_count,
                prompt_eval_count=reply.prompt_eval_count,
            )
            self.retention.apply(session)

            logger.info(
                f"Turn completed in session {session.session_id}: "
                f"{len(outcome.tool_calls)} tool calls, {len(content)} characters"
            )
            return TurnResult(
                session_id=session.session_id,
                ok=True,
                content=content,
                model=self.model,
                message_id=message.message_id,
                tool_calls=outcome.tool_calls,
                eval_count=reply.eval_count,
                prompt_eval_count=reply.prompt_eval_count,
            )

    def _failed_turn(self, session: ConversationSession, kind: ErrorKind | None) -> TurnResult:
        return TurnResult(
            session_id=session.session_id,
            ok=False,
            content=user_message(kind),
            model=self.model,
            error_kind=kind,
        )

    async def clear_history(self, session_id: str) -> ConversationSession:
        """Reset a session to just its system prompt.

        Waits for any turn in progress in that session to finish first.

        Raises:
            SessionNotFoundError: If the session doesn't exist
        """
        session = self.sessions.get_session(session_id)
        async with session.turn_lock:
            session.clear()
        return session
