"""Transport adapters: the JSON-lines server and its client."""

from .client import Channel, ChannelError, LocalChannel, ProtocolError, SubprocessChannel, ToolClient
from .server import JsonLinesServer, ToolServer, serve_stdio

__all__ = [
    "ToolServer", "JsonLinesServer", "serve_stdio",
    "ToolClient", "Channel", "SubprocessChannel", "LocalChannel",
    "ChannelError", "ProtocolError",
]
