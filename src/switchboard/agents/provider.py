"""Capability provider contract.

A provider (agent) is a plain bundle: a name, a description, a system prompt
fragment describing how its tools should be used, and an ordered set of tools
it owns exclusively. Providers are siblings; none of them calls into another.
The assistant composes them by holding a sequence of providers.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field

from switchboard.errors import DuplicateToolError
from switchboard.tools.builder import ToolDescriptor


@dataclass(frozen=True)
class Capability:
    """One advertised operation of a provider."""

    name: str
    description: str


@dataclass(frozen=True)
class ProviderSummary:
    """How a provider describes itself to a coordinator or to the oracle."""

    name: str
    description: str
    capabilities: list[Capability] = field(default_factory=list)


class CapabilityProvider:
    """A named, immutable bundle of related tools.

    Args:
        name: Human-readable provider name (e.g. "Calculator")
        description: One-line summary of what the provider does
        system_prompt: Behavioural prompt used when the provider is called
                       on its own
        tools: Tools owned by this provider, in advertisement order

    Raises:
        DuplicateToolError: If two of the given tools share a name
    """

    def __init__(
        self,
        name: str,
        description: str,
        system_prompt: str,
        tools: Iterable[ToolDescriptor] = (),
    ) -> None:
        self._name = name
        self._description = description
        self._system_prompt = system_prompt
        self._tools = tuple(tools)

        seen: set[str] = set()
        for tool in self._tools:
            if tool.name in seen:
                raise DuplicateToolError(tool.name, name, name)
            seen.add(tool.name)

    @property
    def name(self) -> str:
        return self._name

    @property
    def description(self) -> str:
        return self._description

    @property
    def system_prompt(self) -> str:
        return self._system_prompt

    def tools(self) -> tuple[ToolDescriptor, ...]:
        """The provider's tools, in declaration order."""
        return self._tools

    def summary(self) -> ProviderSummary:
        """Describe the provider independently of any invocation."""
        return ProviderSummary(
            name=self._name,
            description=self._description,
            capabilities=[
                Capability(name=tool.name, description=tool.description)
                for tool in self._tools
            ],
        )

    def __repr__(self) -> str:
        return f"CapabilityProvider(name={self._name!r}, tools={len(self._tools)})"
