"""Foundation - Core building blocks for toolhost.

Contains: tool descriptors and coercion, error handling, registry, testing, config.
"""

from __future__ import annotations

__all__ = [
    # Core
    "ToolDescriptor", "ParameterSpec", "ParamKind", "coerce", "param",
    # Errors
    "ErrorCode", "ToolError", "ToolException", "ConfigurationError", "classify_exception",
    "Result", "Ok", "Err", "traverse",
    # Registry
    "ToolRegistry", "RegisteredTool", "Handler",
    # Testing
    "MockCatalogAPI",
    # Config
    "HostSettings", "get_settings", "clear_settings_cache",
    "CatalogSettings", "LoggingSettings", "ServerSettings",
]


def __getattr__(name: str):
    """Lazy imports to avoid circular dependencies."""
    if name in ("ToolDescriptor", "ParameterSpec", "ParamKind", "coerce", "param"):
        from . import core
        return getattr(core, name)

    if name in ("ErrorCode", "ToolError", "ToolException", "ConfigurationError", "classify_exception",
                "Result", "Ok", "Err", "traverse"):
        from . import errors
        return getattr(errors, name)

    if name in ("ToolRegistry", "RegisteredTool", "Handler"):
        from . import registry
        return getattr(registry, name)

    if name == "MockCatalogAPI":
        from . import testing
        return getattr(testing, name)

    if name in ("HostSettings", "get_settings", "clear_settings_cache",
                "CatalogSettings", "LoggingSettings", "ServerSettings"):
        from . import config
        return getattr(config, name)

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
