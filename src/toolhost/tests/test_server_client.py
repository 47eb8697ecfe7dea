"""Tests for the JSON-lines server and the client helper."""

from __future__ import annotations

import io
import math
import os
import sys
from collections.abc import Iterator, Mapping
from pathlib import Path
from typing import Any

import orjson
import pytest

import toolhost
from toolhost.ext import (
    ChannelError,
    JsonLinesServer,
    LocalChannel,
    ProtocolError,
    SubprocessChannel,
    ToolClient,
)
from toolhost.foundation.errors import ErrorCode, ToolError, ToolException
from toolhost.records import CalculationResult, TodoItem
from toolhost.runtime import DataPart, Dispatcher, ResponseEnvelope, TextPart


@pytest.fixture
def server(dispatcher: Dispatcher) -> JsonLinesServer:
    return JsonLinesServer("test-host", dispatcher)


@pytest.fixture
def client(server: JsonLinesServer) -> Iterator[ToolClient]:
    with ToolClient(LocalChannel(server)) as c:
        yield c


# ═════════════════════════════════════════════════════════════════════════════
# Server request handling
# ═════════════════════════════════════════════════════════════════════════════


def test_list_tools_request(server: JsonLinesServer) -> None:
    response = server.handle({"id": 1, "method": "tools/list"})
    assert response["id"] == 1
    tools = response["result"]["tools"]
    assert len(tools) == len(server.dispatcher.registry)
    add = next(t for t in tools if t["name"] == "Add")
    assert add["category"] == "calculator"
    assert add["input_schema"]["required"] == ["a", "b"]


def test_call_request_returns_envelope(server: JsonLinesServer) -> None:
    response = server.handle({"id": "x", "method": "tools/call", "params": {"name": "ReverseText", "arguments": {"text": "abc"}}})
    assert response == {
        "id": "x",
        "result": {"content": [{"kind": "text", "value": "cba"}], "is_error": False, "error_code": None},
    }


def test_tool_failure_is_a_result_not_an_error(server: JsonLinesServer) -> None:
    response = server.handle({"id": 2, "method": "tools/call", "params": {"name": "Nope"}})
    assert "error" not in response
    assert response["result"]["is_error"] is True
    assert response["result"]["error_code"] == "NOT_FOUND"


@pytest.mark.parametrize("request_,code", [
    ({"id": 3, "method": "tools/delete"}, "NOT_FOUND"),
    ({"id": 3, "method": "tools/call", "params": {}}, "INVALID_PARAMS"),
    ({"id": 3, "method": "tools/call", "params": {"name": ""}}, "INVALID_PARAMS"),
    ({"id": 3, "method": "tools/call", "params": {"name": "Add", "arguments": [1, 2]}}, "INVALID_PARAMS"),
    ({"id": 3, "method": "tools/call", "params": "Add"}, "INVALID_PARAMS"),
])
def test_unroutable_requests(server: JsonLinesServer, request_: dict[str, Any], code: str) -> None:
    response = server.handle(request_)
    assert response["id"] == 3
    assert response["error"]["code"] == code
    assert response["error"]["message"]


def test_malformed_line(server: JsonLinesServer) -> None:
    response = orjson.loads(server.handle_line(b"{not json"))
    assert response["id"] is None
    assert response["error"]["code"] == "PARSE_ERROR"


def test_non_object_line(server: JsonLinesServer) -> None:
    response = orjson.loads(server.handle_line(b"[1, 2]"))
    assert response["error"]["code"] == "INVALID_PARAMS"


def test_run_loop_answers_each_line_and_survives_garbage(server: JsonLinesServer) -> None:
    requests = b"\n".join([
        orjson.dumps({"id": 1, "method": "tools/call", "params": {"name": "Add", "arguments": {"a": 1, "b": 2}}}),
        b"",
        b"garbage",
        orjson.dumps({"id": 2, "method": "tools/call", "params": {"name": "Slugify", "arguments": {"text": "A B"}}}),
    ]) + b"\n"
    output = io.BytesIO()
    server.run(input=io.BytesIO(requests), output=output)

    responses = [orjson.loads(line) for line in output.getvalue().splitlines()]
    assert [r["id"] for r in responses] == [1, None, 2]
    assert responses[0]["result"]["content"][0]["value"]["result"] == 3.0
    assert "error" in responses[1]
    assert responses[2]["result"]["content"][0]["value"] == "a-b"


# ═════════════════════════════════════════════════════════════════════════════
# Client
# ═════════════════════════════════════════════════════════════════════════════


def test_client_lists_descriptors(client: ToolClient) -> None:
    tools = client.list_tools()
    names = [t.name for t in tools]
    assert names[:2] == ["Add", "Subtract"]
    truncate = next(t for t in tools if t.name == "Truncate")
    assert [p.name for p in truncate.parameters] == ["text", "maxLength", "addEllipsis"]
    assert truncate.parameters[2].default is True


def test_call_tool_as_record(client: ToolClient) -> None:
    result = client.call_tool_as("Add", {"a": 5, "b": 3}, CalculationResult)
    assert result.result == 8
    assert result.expression == "5 + 3"


def test_call_tool_as_preserves_nan(client: ToolClient) -> None:
    result = client.call_tool_as("SquareRoot", {"number": -9}, CalculationResult)
    assert math.isnan(result.result)
    assert result.is_error


def test_call_tool_as_list(client: ToolClient) -> None:
    client.call_tool("CreateTodo", {"title": "one"})
    client.call_tool("CreateTodo", {"title": "two", "priority": "low"})
    todos = client.call_tool_as("GetTodos", {}, list[TodoItem])
    assert [t.title for t in todos] == ["two", "one"]
    assert todos[0].priority == "Low"


def test_call_tool_as_scalar_and_empty(client: ToolClient) -> None:
    assert client.call_tool_as("DeleteTodo", {"id": "missing"}, bool) is False
    assert client.call_tool_as("CompleteTodo", {"id": "missing"}, TodoItem) is None


def test_call_tool_as_raises_on_error_envelope(client: ToolClient) -> None:
    with pytest.raises(ToolException) as excinfo:
        client.call_tool_as("Divide", {"a": 1}, CalculationResult)
    assert excinfo.value.error.code is ErrorCode.INVALID_PARAMS
    assert "Missing required parameter 'b'" in excinfo.value.error.message


def test_client_requires_connection(server: JsonLinesServer) -> None:
    client = ToolClient(LocalChannel(server))
    with pytest.raises(ChannelError, match="not connected"):
        client.list_tools()
    client.connect()
    assert client.connected
    client.disconnect()
    assert not client.connected


class _ScriptedChannel:
    """Channel answering every request with a fixed reply."""

    def __init__(self, reply: dict[str, Any]) -> None:
        self.reply = reply
        self.sent: list[Mapping[str, Any]] = []

    def open(self) -> None: ...

    def close(self) -> None: ...

    def request(self, message: Mapping[str, Any]) -> dict[str, Any]:
        self.sent.append(message)
        return self.reply


def test_error_reply_raises_protocol_error() -> None:
    channel = _ScriptedChannel({"id": 1, "error": {"code": "NOT_FOUND", "message": "Unknown method"}})
    with ToolClient(channel) as client, pytest.raises(ProtocolError) as excinfo:
        client.list_tools()
    assert excinfo.value.code == "NOT_FOUND"
    assert channel.sent == [{"id": 1, "method": "tools/list"}]


def test_mismatched_reply_id() -> None:
    with ToolClient(_ScriptedChannel({"id": 99, "result": {"tools": []}})) as client, pytest.raises(ChannelError):
        client.list_tools()


# ═════════════════════════════════════════════════════════════════════════════
# format_response
# ═════════════════════════════════════════════════════════════════════════════


def test_format_empty() -> None:
    assert ToolClient.format_response(ResponseEnvelope()) == "(no content)"


def test_format_parts() -> None:
    envelope = ResponseEnvelope(content=(TextPart(value="hello"), DataPart(value={"a": 1})))
    assert ToolClient.format_response(envelope) == 'hello\n\n{\n  "a": 1\n}'


def test_format_error_envelope() -> None:
    envelope = ResponseEnvelope.failure(ToolError.create("X", "boom", ErrorCode.UNKNOWN))
    assert ToolClient.format_response(envelope) == "Tool Error (X) [UNKNOWN]: boom"


# ═════════════════════════════════════════════════════════════════════════════
# Subprocess
# ═════════════════════════════════════════════════════════════════════════════


def test_subprocess_channel_command() -> None:
    assert SubprocessChannel().command == [sys.executable, "-m", "toolhost"]
    assert SubprocessChannel("/opt/bin/toolhost-server", ["--quiet"]).command == ["/opt/bin/toolhost-server", "--quiet"]


def test_subprocess_missing_executable() -> None:
    channel = SubprocessChannel("/nonexistent/toolhost-server")
    with pytest.raises(ChannelError, match="Failed to start"):
        ToolClient(channel).connect()


def test_subprocess_roundtrip() -> None:
    src = str(Path(toolhost.__file__).resolve().parents[1])
    env = {**os.environ, "PYTHONPATH": os.pathsep.join(filter(None, [src, os.environ.get("PYTHONPATH")]))}

    with ToolClient(SubprocessChannel(env=env, shutdown_timeout=10)) as client:
        assert "GetWeather" in [t.name for t in client.list_tools()]
        assert client.call_tool_as("Multiply", {"a": 4, "b": 2.5}, CalculationResult).result == 10
        created = client.call_tool_as("CreateProduct", {"name": "Pen", "price": 1.5}, dict)
        assert created["id"] == 1
        assert client.call_tool_as("GetProduct", {"id": 1}, dict)["name"] == "Pen"
