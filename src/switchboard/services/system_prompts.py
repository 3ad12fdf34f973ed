"""System prompt composition for the assistant.

The assistant's system prompt is built from a persona (a default text, or a
markdown file supplied through configuration) followed by a catalog of the
available agents and their capabilities.
"""

import logging
from datetime import datetime
from pathlib import Path

from switchboard.agents.provider import ProviderSummary

logger = logging.getLogger(__name__)

DEFAULT_PERSONA = """You are {assistant_name}, an intelligent AI assistant that coordinates with specialized agents to solve user problems.

About you:
- Your name is {assistant_name}
- You are friendly, professional, and efficient
- You communicate clearly and concisely
- You take initiative to help solve problems

Before responding, carefully consider:
1. What is the user really trying to accomplish?
2. Which agent(s) have the capabilities needed?
3. How to break down complex requests into steps for the agents to handle?

When a tool reports an error, decide whether to retry with corrected arguments,
try a different tool, or explain the problem to the user.

Always explain what actions you took and the results clearly to the user."""


def read_prompt_file(path: Path) -> str:
    """Read a persona prompt from a markdown file.

    Args:
        path: Path to the .md file

    Returns:
        The file content, stripped

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is empty
    """
    if not path.is_file():
        raise FileNotFoundError(f"System prompt file not found: {path}")

    content = path.read_text(encoding="utf-8").strip()
    if not content:
        raise ValueError(f"System prompt file is empty: {path}")

    logger.info(f"Loaded system prompt from {path}")
    return content


def format_agent_catalog(summaries: list[ProviderSummary]) -> str:
    """Render provider summaries as a bullet list for the system prompt."""
    lines = ["Available agents:"]
    for summary in summaries:
        lines.append(f"- {summary.name}: {summary.description}")
        for capability in summary.capabilities:
            lines.append(f"  - {capability.name}: {capability.description}")
    return "\n".join(lines)


def compose_system_prompt(
    summaries: list[ProviderSummary],
    assistant_name: str = "Mei",
    user_name: str | None = None,
    persona: str | None = None,
) -> str:
    """Build the assistant's system prompt.

    Args:
        summaries: Summaries of the providers the assistant can use
        assistant_name: Name the assistant introduces itself with
        user_name: How to address the user, if known
        persona: Persona text replacing the default one. May reference
                 {assistant_name}.

    Returns:
        The complete system prompt
    """
    template = persona or DEFAULT_PERSONA
    parts = [template.replace("{assistant_name}", assistant_name)]

    if summaries:
        parts.append(format_agent_catalog(summaries))
    if user_name:
        parts.append(f"The user's name is {user_name}.")

    return "\n\n".join(parts)


def current_datetime_hint(now: datetime | None = None) -> dict[str, str]:
    """Transient system message carrying the current date and time.

    Sent with every oracle call and never stored in the session.
    """
    now = now or datetime.now().astimezone()
    return {
        "role": "system",
        "content": f"Current date and time: {now.strftime('%A, %Y-%m-%d %H:%M %Z').strip()}",
    }
