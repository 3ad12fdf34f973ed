"""Read-only tool registry built from capability providers.

The registry is assembled once, when the assistant is constructed, from the
union of all providers' tools. Name collisions are a configuration error and
are reported at construction time, never per call.
"""

import logging
from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType
from typing import Any, Protocol

from switchboard.errors import DuplicateToolError
from switchboard.tools.builder import ToolDescriptor

logger = logging.getLogger(__name__)


class ToolSource(Protocol):
    """Anything that owns a named, ordered set of tools."""

    @property
    def name(self) -> str: ...

    def tools(self) -> tuple[ToolDescriptor, ...]: ...


class ToolRegistry(Mapping[str, ToolDescriptor]):
    """Immutable mapping of tool name to ToolDescriptor.

    Iteration order follows registration order: providers in the order given,
    tools in each provider's declared order.
    """

    def __init__(self, sources: Iterable[ToolSource] = ()) -> None:
        tools: dict[str, ToolDescriptor] = {}
        owners: dict[str, str] = {}

        for source in sources:
            for tool in source.tools():
                if tool.name in tools:
                    raise DuplicateToolError(tool.name, owners[tool.name], source.name)
                tools[tool.name] = tool
                owners[tool.name] = source.name

        self._tools = MappingProxyType(tools)
        self._owners = MappingProxyType(owners)
        logger.info(f"Tool registry built with {len(tools)} tools")

    def __getitem__(self, name: str) -> ToolDescriptor:
        return self._tools[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._tools)

    def __len__(self) -> int:
        return len(self._tools)

    def owner_of(self, name: str) -> str | None:
        """Name of the provider that declared a tool, if registered."""
        return self._owners.get(name)

    def advertisements(self) -> list[dict[str, Any]]:
        """Function-tool declarations for every registered tool, in order."""
        return [tool.advertisement() for tool in self._tools.values()]
