"""Dispatch of tool calls: name + argument bag → ResponseEnvelope.

The dispatcher is the only place a request touches a handler. It resolves
the tool, binds arguments to the declared parameters, invokes the handler
exactly once and converts whatever happens into an envelope. Nothing raised
by a handler escapes `dispatch`.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Mapping

from toolhost.foundation.core import ParameterSpec, coerce
from toolhost.foundation.errors import Err, ErrorCode, Ok, Result, ToolError, ToolException, traverse
from toolhost.foundation.registry import RegisteredTool, ToolRegistry

from .envelope import ResponseEnvelope

logger = logging.getLogger("toolhost.dispatch")


def bind_arguments(tool: RegisteredTool, arguments: Mapping[str, object]) -> Result[list[object], ToolError]:
    """Resolve the ordered argument list for `tool` from a loosely typed bag.

    Unknown keys are ignored and a None value counts as absent. The first
    invalid or missing parameter, in declared order, produces the error.
    """
    name = tool.name

    def bind(spec: ParameterSpec) -> Result[object, ToolError]:
        value = arguments.get(spec.name)
        if value is None:
            if spec.required:
                return Err(ToolError.create(
                    name, f"Missing required parameter '{spec.name}' ({spec.kind})",
                    ErrorCode.INVALID_PARAMS, recoverable=False,
                ))
            return Ok(spec.default)
        return coerce(spec.kind, value).map_err(lambda reason: ToolError.create(
            name, f"Invalid value for parameter '{spec.name}': {reason}",
            ErrorCode.INVALID_PARAMS, recoverable=False,
        ))

    return traverse(tool.descriptor.parameters, bind)


class Dispatcher:
    """Turns (tool name, argument bag) requests into envelopes.

    Args:
        registry: Tool table to resolve names against
        include_trace: Attach tracebacks to fault envelopes (debug mode)

    Example:
        >>> dispatcher = Dispatcher(build_registry())
        >>> dispatcher.dispatch("Add", {"a": 2, "b": 3}).first.value["result"]
        5.0
    """

    __slots__ = ("_registry", "_include_trace")

    def __init__(self, registry: ToolRegistry, *, include_trace: bool = False) -> None:
        self._registry = registry
        self._include_trace = include_trace

    @property
    def registry(self) -> ToolRegistry:
        return self._registry

    def dispatch(self, name: str, arguments: Mapping[str, object] | None = None) -> ResponseEnvelope:
        start = time.perf_counter()
        envelope = self._dispatch(name, arguments or {})
        duration_ms = (time.perf_counter() - start) * 1000
        if envelope.is_error:
            logger.warning(f"[{name}] ERROR {envelope.error_code} ({duration_ms:.1f}ms)")
        else:
            logger.info(f"[{name}] OK parts={len(envelope.content)} ({duration_ms:.1f}ms)")
        return envelope

    async def adispatch(self, name: str, arguments: Mapping[str, object] | None = None) -> ResponseEnvelope:
        """Run `dispatch` in a worker thread so blocking handlers don't stall the event loop."""
        return await asyncio.to_thread(self.dispatch, name, arguments)

    def _dispatch(self, name: str, arguments: Mapping[str, object]) -> ResponseEnvelope:
        resolved = self._registry.resolve(name)
        if resolved.is_err():
            return ResponseEnvelope.failure(resolved.unwrap_err())
        tool = resolved.unwrap()

        bound = bind_arguments(tool, arguments)
        if bound.is_err():
            return ResponseEnvelope.failure(bound.unwrap_err())

        try:
            value = tool.handler(*bound.unwrap())
        except ToolException as e:
            return ResponseEnvelope.failure(e.error)
        except Exception as e:
            logger.exception(f"[{name}] EXCEPTION: {e}")
            return ResponseEnvelope.failure(
                ToolError.from_exception(name, e, "Execution failed", include_trace=self._include_trace)
            )

        try:
            return ResponseEnvelope.of(value)
        except Exception as e:
            logger.exception(f"[{name}] result not serializable: {e}")
            return ResponseEnvelope.failure(ToolError.from_exception(name, e, "Result encoding failed", recoverable=False))
