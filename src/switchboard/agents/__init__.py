"""Capability providers (agents).

This package defines the provider contract and the providers bundled with
switchboard. Each bundled provider is built by a factory function so the
application can pick which ones to enable at startup.
"""

from switchboard.agents.calculator import build_calculator_provider
from switchboard.agents.news import build_news_provider
from switchboard.agents.provider import Capability, CapabilityProvider, ProviderSummary
from switchboard.agents.scratchpad import build_scratchpad_provider
from switchboard.agents.translation import build_translation_provider

__all__ = [
    "Capability",
    "CapabilityProvider",
    "ProviderSummary",
    "build_calculator_provider",
    "build_news_provider",
    "build_scratchpad_provider",
    "build_translation_provider",
]
