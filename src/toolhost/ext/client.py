"""Client side of the JSON-lines tool protocol.

A ToolClient talks to a server through a Channel:

- SubprocessChannel spawns the server executable and exchanges JSON lines
  over its stdin/stdout.
- LocalChannel calls a ToolServer in-process, still going through the
  codec so responses look exactly like they would over a pipe.

Example:
    >>> with ToolClient(SubprocessChannel()) as client:
    ...     print([t.name for t in client.list_tools()])
    ...     result = client.call_tool_as("Add", {"a": 2, "b": 3}, CalculationResult)
    ...     print(result.result)
    5.0
"""

from __future__ import annotations

import itertools
import logging
import subprocess
import sys
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any, Protocol, TypeVar

import orjson
from pydantic import TypeAdapter

from toolhost.foundation.core import ToolDescriptor
from toolhost.foundation.errors import ErrorCode, ToolError, ToolException
from toolhost.runtime import DataPart, ResponseEnvelope, decode, decode_envelope, encode

from .server import METHOD_CALL, METHOD_LIST

if TYPE_CHECKING:
    from .server import ToolServer

T = TypeVar("T")

logger = logging.getLogger("toolhost.client")

NO_CONTENT = "(no content)"


class ChannelError(Exception):
    """Transport failure: server not running, pipe closed, garbled reply."""


class ProtocolError(ChannelError):
    """The server answered a request with an ``error`` response."""

    def __init__(self, code: str, message: str) -> None:
        self.code = code
        self.message = message
        super().__init__(f"[{code}] {message}")


# ═══════════════════════════════════════════════════════════════════════════════
# Channels
# ═══════════════════════════════════════════════════════════════════════════════


class Channel(Protocol):
    def open(self) -> None: ...
    def close(self) -> None: ...
    def request(self, message: Mapping[str, Any]) -> dict[str, Any]: ...


class SubprocessChannel:
    """Runs the server as a child process.

    Args:
        server_path: Server executable. Default: this interpreter with ``-m toolhost``
        args: Extra command-line arguments for the server
        env: Environment for the child (default: inherit)
        shutdown_timeout: Seconds to wait for the child to exit before killing it
    """

    __slots__ = ("_command", "_env", "_shutdown_timeout", "_proc")

    def __init__(
        self,
        server_path: str | None = None,
        args: Sequence[str] = (),
        *,
        env: Mapping[str, str] | None = None,
        shutdown_timeout: float = 5.0,
    ) -> None:
        base = [server_path] if server_path else [sys.executable, "-m", "toolhost"]
        self._command = [*base, *args]
        self._env = dict(env) if env is not None else None
        self._shutdown_timeout = shutdown_timeout
        self._proc: subprocess.Popen[bytes] | None = None

    @property
    def command(self) -> list[str]:
        return list(self._command)

    def open(self) -> None:
        if self._proc is not None:
            return
        try:
            self._proc = subprocess.Popen(self._command, stdin=subprocess.PIPE, stdout=subprocess.PIPE, env=self._env)
        except OSError as e:
            raise ChannelError(f"Failed to start server {self._command[0]!r}: {e}") from e
        logger.debug(f"Started server pid={self._proc.pid}: {' '.join(self._command)}")

    def close(self) -> None:
        if (proc := self._proc) is None:
            return
        self._proc = None
        if proc.stdin:
            proc.stdin.close()
        try:
            proc.wait(timeout=self._shutdown_timeout)
        except subprocess.TimeoutExpired:
            logger.warning(f"Server pid={proc.pid} did not exit, killing")
            proc.kill()
            proc.wait()
        if proc.stdout:
            proc.stdout.close()

    def request(self, message: Mapping[str, Any]) -> dict[str, Any]:
        proc = self._proc
        if proc is None or proc.stdin is None or proc.stdout is None:
            raise ChannelError("Channel is not open")
        try:
            proc.stdin.write(encode(dict(message)) + b"\n")
            proc.stdin.flush()
        except (BrokenPipeError, OSError) as e:
            raise ChannelError(f"Server input closed: {e}") from e
        line = proc.stdout.readline()
        if not line:
            raise ChannelError(f"Server exited (code {proc.poll()})")
        return _parse_reply(line)


class LocalChannel:
    """Calls a ToolServer in the same process."""

    __slots__ = ("_server",)

    def __init__(self, server: ToolServer) -> None:
        self._server = server

    def open(self) -> None:
        pass

    def close(self) -> None:
        pass

    def request(self, message: Mapping[str, Any]) -> dict[str, Any]:
        return _parse_reply(self._server.handle_line(encode(dict(message))))


def _parse_reply(line: bytes) -> dict[str, Any]:
    try:
        reply = decode(line)
    except orjson.JSONDecodeError as e:
        raise ChannelError(f"Malformed reply from server: {e}") from e
    if not isinstance(reply, dict):
        raise ChannelError(f"Reply is not an object: {reply!r}")
    return reply


# ═══════════════════════════════════════════════════════════════════════════════
# Client
# ═══════════════════════════════════════════════════════════════════════════════


class ToolClient:
    """Lists and calls tools on a server.

    Use as a context manager, or call `connect()` / `disconnect()` yourself.
    """

    __slots__ = ("_channel", "_ids", "_connected")

    def __init__(self, channel: Channel) -> None:
        self._channel = channel
        self._ids = itertools.count(1)
        self._connected = False

    @property
    def connected(self) -> bool:
        return self._connected

    def connect(self) -> None:
        if not self._connected:
            self._channel.open()
            self._connected = True

    def disconnect(self) -> None:
        if self._connected:
            self._connected = False
            self._channel.close()

    def __enter__(self) -> ToolClient:
        self.connect()
        return self

    def __exit__(self, *_: object) -> None:
        self.disconnect()

    def _request(self, method: str, params: Mapping[str, Any] | None = None) -> Any:
        if not self._connected:
            raise ChannelError("Client is not connected")
        request_id = next(self._ids)
        message: dict[str, Any] = {"id": request_id, "method": method}
        if params is not None:
            message["params"] = dict(params)

        reply = self._channel.request(message)
        # Unparseable requests are answered with id null
        if (error := reply.get("error")) is not None and reply.get("id") in (request_id, None):
            raise ProtocolError(str(error.get("code", ErrorCode.UNKNOWN)), str(error.get("message", "")))
        if reply.get("id") != request_id:
            raise ChannelError(f"Reply id {reply.get('id')!r} does not match request id {request_id}")
        if "result" not in reply:
            raise ChannelError("Reply carries neither result nor error")
        return reply["result"]

    def list_tools(self) -> list[ToolDescriptor]:
        result = self._request(METHOD_LIST)
        return [ToolDescriptor.model_validate(t) for t in result.get("tools", [])]

    def call_tool(self, name: str, arguments: Mapping[str, object] | None = None) -> ResponseEnvelope:
        return decode_envelope(self._request(METHOD_CALL, {"name": name, "arguments": dict(arguments or {})}))

    def call_tool_as(self, name: str, arguments: Mapping[str, object] | None, type_: type[T] | Any) -> T | None:
        """Call a tool and decode its first content part into `type_`.

        Returns None when the tool produced no content.

        Raises:
            ToolException: If the server answered with an error envelope
        """
        envelope = self.call_tool(name, arguments)
        if envelope.is_error:
            raise ToolException(ToolError.create(
                name, envelope.text() or "Tool call failed", envelope.error_code or ErrorCode.UNKNOWN,
            ))
        if (part := envelope.first) is None:
            return None
        return TypeAdapter(type_).validate_python(part.value)

    @staticmethod
    def format_response(envelope: ResponseEnvelope) -> str:
        """Human-readable rendering: text verbatim, data as indented JSON, parts separated by a blank line."""
        if envelope.is_empty:
            return NO_CONTENT
        return "\n\n".join(
            orjson.dumps(p.value, option=orjson.OPT_INDENT_2).decode() if isinstance(p, DataPart) else p.value
            for p in envelope.content
        )
