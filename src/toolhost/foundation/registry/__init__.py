"""Tool registry: name → descriptor + handler."""

from .registry import Handler, RegisteredTool, ToolRegistry

__all__ = ["Handler", "RegisteredTool", "ToolRegistry"]
