"""Translation provider backed by the language model itself."""

import logging
from datetime import datetime, timezone

from pydantic import BaseModel, Field

from switchboard.agents.provider import CapabilityProvider
from switchboard.tools.builder import build_tool

logger = logging.getLogger(__name__)


class TranslateArgs(BaseModel):
    """Translate text between languages"""

    text: str = Field(description="Text to translate")
    targetLanguage: str = Field(description="Target language for translation")
    preserveFormatting: bool = Field(
        default=True, description="Whether to preserve text formatting"
    )


class Translator:
    """Runs translations as single, tool-free completions.

    Args:
        oracle: Object with an async `complete(model, messages, ...)` method
        model: Model used for translations
    """

    def __init__(self, oracle, model: str) -> None:
        self.oracle = oracle
        self.model = model

    async def translate(self, args: TranslateArgs) -> dict:
        formatting = " that preserves text formatting" if args.preserveFormatting else ""
        messages = [
            {
                "role": "system",
                "content": (
                    f"You are a precise translator{formatting}. "
                    f"Translate to {args.targetLanguage} and start your response with "
                    '"Translated from [detected language]:". '
                    "Maintain the original meaning and context."
                ),
            },
            {"role": "user", "content": args.text},
        ]
        reply = await self.oracle.complete(
            model=self.model, messages=messages, options={"temperature": 0.2}
        )
        if not reply.content:
            raise RuntimeError("Failed to translate text")
        logger.debug(f"Translated {len(args.text)} characters to {args.targetLanguage}")
        return {
            "translation": reply.content,
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        }


def build_translation_provider(oracle, model: str) -> CapabilityProvider:
    """Create the Translation provider."""
    translator = Translator(oracle, model)
    return CapabilityProvider(
        name="Translation",
        description="An agent that provides accurate language translation services",
        system_prompt=(
            "You are a translation assistant focused on accurate and natural-sounding "
            "translations. Always identify the source language and include it in your "
            "response. Preserve the original meaning, tone, and context while adapting "
            "to target language conventions. When uncertain, prioritize clarity over "
            "literal translation."
        ),
        tools=[build_tool("translate", TranslateArgs, translator.translate)],
    )
