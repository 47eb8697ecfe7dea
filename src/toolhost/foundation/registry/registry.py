"""Central registry for tool discovery and lookup.

The registry provides:
- Tool registration with fail-fast duplicate detection
- Exact, case-sensitive lookup by name
- Listing in registration order for discovery
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass

from toolhost.foundation.core import ParameterSpec, ToolDescriptor
from toolhost.foundation.errors import ConfigurationError, Err, ErrorCode, Ok, Result, ToolError

Handler = Callable[..., object]


@dataclass(frozen=True, slots=True)
class RegisteredTool:
    """A descriptor paired with the callable that implements it."""

    descriptor: ToolDescriptor
    handler: Handler

    @property
    def name(self) -> str:
        return self.descriptor.name


class ToolRegistry:
    """Authoritative table of invocable tools.

    Built once at startup by explicit registration calls; read-only afterwards.

    Example:
        >>> registry = ToolRegistry()
        >>> registry.add("Echo", "Returns the text unchanged", lambda t: t,
        ...              param("text", ParamKind.STRING))
        >>> registry.resolve("Echo").unwrap().handler("hi")
        'hi'
    """

    __slots__ = ("_tools",)

    def __init__(self) -> None:
        self._tools: dict[str, RegisteredTool] = {}

    def register(self, descriptor: ToolDescriptor, handler: Handler) -> None:
        """Register a tool. A duplicate name is a configuration error."""
        if descriptor.name in self._tools:
            raise ConfigurationError(f"Tool '{descriptor.name}' already registered")
        if not callable(handler):
            raise ConfigurationError(f"Handler for tool '{descriptor.name}' is not callable")
        self._tools[descriptor.name] = RegisteredTool(descriptor, handler)

    def add(
        self,
        name: str,
        description: str,
        handler: Handler,
        *params: ParameterSpec,
        category: str = "general",
    ) -> ToolDescriptor:
        """Build a descriptor from parts and register it. Returns the descriptor."""
        descriptor = ToolDescriptor(name=name, description=description, category=category, parameters=params)
        self.register(descriptor, handler)
        return descriptor

    def list(self) -> list[ToolDescriptor]:
        """All descriptors in registration order."""
        return [t.descriptor for t in self._tools.values()]

    def resolve(self, name: str) -> Result[RegisteredTool, ToolError]:
        """Exact-name lookup. Err carries a NOT_FOUND ToolError naming the tool."""
        if (tool := self._tools.get(name)) is not None:
            return Ok(tool)
        return Err(ToolError.create(name or "<unnamed>", f"Tool '{name}' not found", ErrorCode.NOT_FOUND, recoverable=False))

    def categories(self) -> set[str]:
        return {t.descriptor.category for t in self._tools.values()}

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    def __iter__(self) -> Iterator[RegisteredTool]:
        return iter(self._tools.values())
