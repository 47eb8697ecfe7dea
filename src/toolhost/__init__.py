"""Toolhost - A registry of named tools served over JSON lines.

Tools are plain functions registered with a descriptor (name, description,
ordered typed parameters). The dispatcher resolves a call by name, coerces a
loosely typed argument bag to the declared parameters, runs the handler and
wraps whatever comes back (or goes wrong) in a ResponseEnvelope.

Quick Start (in-process):
    >>> from toolhost import Dispatcher, build_registry
    >>>
    >>> dispatcher = Dispatcher(build_registry())
    >>> envelope = dispatcher.dispatch("Add", {"a": 5, "b": 3})
    >>> envelope.first.value["result"]
    8.0

Custom Tools:
    >>> from toolhost import ParamKind, ToolRegistry, param
    >>>
    >>> registry = ToolRegistry()
    >>> registry.add("Echo", "Returns the text unchanged", lambda text: text,
    ...              param("text", ParamKind.STRING, "Text to echo"))

Server (stdio):
    $ python -m toolhost

Client:
    >>> from toolhost import SubprocessChannel, ToolClient
    >>> with ToolClient(SubprocessChannel()) as client:
    ...     todo = client.call_tool_as("CreateTodo", {"title": "Write docs"}, TodoItem)
"""

from __future__ import annotations

__version__ = "0.1.0"

# Core
from .foundation.core import ParamKind, ParameterSpec, ToolDescriptor, coerce, param

# Errors
from .foundation.errors import (
    ConfigurationError,
    Err,
    ErrorCode,
    Ok,
    Result,
    ToolError,
    ToolException,
    classify_exception,
)

# Registry
from .foundation.registry import RegisteredTool, ToolRegistry

# Config
from .foundation.config import HostSettings, clear_settings_cache, get_settings

# Runtime
from .runtime import (
    DataPart,
    Dispatcher,
    ResponseEnvelope,
    TextPart,
    configure_logging,
    decode_envelope,
    encode_envelope,
)

# Records
from .records import (
    CalculationResult,
    Priority,
    ProductInput,
    ProductItem,
    TextStats,
    TodoItem,
    TodoStats,
    WeatherInfo,
)

# Built-in tools
from .tools import build_registry

# Server / client
from .ext import (
    JsonLinesServer,
    LocalChannel,
    SubprocessChannel,
    ToolClient,
    ToolServer,
)

__all__ = [
    # Version
    "__version__",
    # Core
    "ParamKind",
    "ParameterSpec",
    "ToolDescriptor",
    "coerce",
    "param",
    # Errors
    "ErrorCode",
    "ToolError",
    "ToolException",
    "ConfigurationError",
    "classify_exception",
    "Result",
    "Ok",
    "Err",
    # Registry
    "ToolRegistry",
    "RegisteredTool",
    # Config
    "HostSettings",
    "get_settings",
    "clear_settings_cache",
    # Runtime
    "Dispatcher",
    "ResponseEnvelope",
    "TextPart",
    "DataPart",
    "encode_envelope",
    "decode_envelope",
    "configure_logging",
    # Records
    "CalculationResult",
    "WeatherInfo",
    "TextStats",
    "Priority",
    "TodoItem",
    "TodoStats",
    "ProductInput",
    "ProductItem",
    # Tools
    "build_registry",
    # Server / client
    "ToolServer",
    "JsonLinesServer",
    "ToolClient",
    "SubprocessChannel",
    "LocalChannel",
]
