"""Tool servers: expose a registry to clients.

`ToolServer` holds the transport-independent request handling: one request
mapping in, one response mapping out. `JsonLinesServer` runs it over a pair
of byte streams (stdin/stdout by default), one JSON object per line:

    → {"id": 1, "method": "tools/list"}
    ← {"id": 1, "result": {"tools": [...]}}
    → {"id": 2, "method": "tools/call", "params": {"name": "Add", "arguments": {"a": 2, "b": 3}}}
    ← {"id": 2, "result": {"content": [{"kind": "data", "value": {...}}], "is_error": false, ...}}

Requests that can't be routed (bad JSON, unknown method, no tool name) get
an ``error`` response; the loop keeps going. Tool failures are not request
errors: they come back as a ``result`` envelope with ``is_error`` set.

Example:
    >>> server = JsonLinesServer("toolhost", Dispatcher(build_registry()))
    >>> server.run()  # blocks until stdin closes
"""

from __future__ import annotations

import logging
import sys
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import IO, Any

import orjson

from toolhost.foundation.errors import ErrorCode
from toolhost.runtime import Dispatcher, ResponseEnvelope, encode

logger = logging.getLogger("toolhost.server")

METHOD_LIST = "tools/list"
METHOD_CALL = "tools/call"


def error_response(request_id: object, code: ErrorCode, message: str) -> dict[str, Any]:
    return {"id": request_id, "error": {"code": str(code), "message": message}}


# ═══════════════════════════════════════════════════════════════════════════════
# Abstract Server
# ═══════════════════════════════════════════════════════════════════════════════


class ToolServer(ABC):
    """Abstract base for tool servers.

    Subclasses supply the transport; request routing lives here so every
    transport answers identically.
    """

    __slots__ = ("_name", "_dispatcher")

    def __init__(self, name: str, dispatcher: Dispatcher) -> None:
        self._name = name
        self._dispatcher = dispatcher

    @property
    def name(self) -> str:
        return self._name

    @property
    def dispatcher(self) -> Dispatcher:
        return self._dispatcher

    @abstractmethod
    def run(self, **kwargs: object) -> None:
        """Start the server (blocking)."""
        ...

    def list_tools(self) -> list[dict[str, Any]]:
        """All tool descriptors in JSON form, in registration order."""
        return [d.model_dump(mode="json") for d in self._dispatcher.registry.list()]

    def invoke(self, tool_name: str, arguments: Mapping[str, object]) -> ResponseEnvelope:
        return self._dispatcher.dispatch(tool_name, arguments)

    def handle(self, request: Mapping[str, Any]) -> dict[str, Any]:
        """Route one decoded request to a response mapping. Never raises."""
        request_id = request.get("id")
        method = request.get("method")
        params = request.get("params") or {}
        if not isinstance(params, Mapping):
            return error_response(request_id, ErrorCode.INVALID_PARAMS, "'params' must be an object")

        if method == METHOD_LIST:
            return {"id": request_id, "result": {"tools": self.list_tools()}}
        if method != METHOD_CALL:
            return error_response(request_id, ErrorCode.NOT_FOUND, f"Unknown method: {method!r}")

        name = params.get("name")
        if not isinstance(name, str) or not name:
            return error_response(request_id, ErrorCode.INVALID_PARAMS, "Missing tool name")
        arguments = params.get("arguments") or {}
        if not isinstance(arguments, Mapping):
            return error_response(request_id, ErrorCode.INVALID_PARAMS, "'arguments' must be an object")
        return {"id": request_id, "result": self.invoke(name, arguments).model_dump(mode="json")}

    def handle_line(self, line: bytes | str) -> bytes:
        """Decode one request line and encode its response (without the newline)."""
        try:
            request = orjson.loads(line)
        except orjson.JSONDecodeError as e:
            logger.warning(f"Malformed request line: {e}")
            return encode(error_response(None, ErrorCode.PARSE_ERROR, f"Malformed JSON: {e}"))
        if not isinstance(request, dict):
            return encode(error_response(None, ErrorCode.INVALID_PARAMS, "Request must be a JSON object"))
        return encode(self.handle(request))


# ═══════════════════════════════════════════════════════════════════════════════
# JSON-lines Adapter (stdio)
# ═══════════════════════════════════════════════════════════════════════════════


class JsonLinesServer(ToolServer):
    """Serves requests one at a time over newline-delimited JSON streams.

    Example:
        >>> JsonLinesServer("tools", dispatcher).run(input=proc_in, output=proc_out)
    """

    __slots__ = ()

    def run(self, input: IO[bytes] | None = None, output: IO[bytes] | None = None, **_: object) -> None:  # noqa: A002
        """Read requests until EOF.

        Args:
            input: Request stream (default: stdin)
            output: Response stream (default: stdout)
        """
        source = input or sys.stdin.buffer
        sink = output or sys.stdout.buffer
        logger.info(f"[{self._name}] serving {len(self._dispatcher.registry)} tools")

        served = 0
        for raw in source:
            line = raw.strip()
            if not line:
                continue
            sink.write(self.handle_line(line) + b"\n")
            sink.flush()
            served += 1

        logger.info(f"[{self._name}] input closed after {served} requests")


# ═══════════════════════════════════════════════════════════════════════════════
# Entry Point
# ═══════════════════════════════════════════════════════════════════════════════


def serve_stdio() -> None:
    """Build the standard tool set from settings and serve it on stdin/stdout."""
    from toolhost.foundation.config import get_settings
    from toolhost.runtime.observability import configure_from_settings
    from toolhost.tools import CatalogClient, build_registry

    settings = get_settings()
    configure_from_settings(settings.logging)

    with CatalogClient.from_settings(settings.catalog) as catalog:
        registry = build_registry(settings, catalog_client=catalog)
        dispatcher = Dispatcher(registry, include_trace=settings.debug)
        server = JsonLinesServer(settings.server.name, dispatcher)
        try:
            server.run()
        except KeyboardInterrupt:
            logger.info(f"[{server.name}] interrupted")


def main() -> None:
    serve_stdio()
