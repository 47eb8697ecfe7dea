"""Standardized error handling for tool invocation.

Provides error codes and structured error responses returned to callers.
Protocol errors (unknown tool, bad arguments) and execution faults are both
expressed as ToolError so the dispatcher can render them uniformly.
"""

from __future__ import annotations

import traceback
from enum import StrEnum
from functools import lru_cache
from typing import Annotated, Self

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator


class ErrorCode(StrEnum):
    """Standard error codes for tool failures."""
    INVALID_PARAMS = "INVALID_PARAMS"
    NOT_FOUND = "NOT_FOUND"
    NETWORK_ERROR = "NETWORK_ERROR"
    TIMEOUT = "TIMEOUT"
    PARSE_ERROR = "PARSE_ERROR"
    EXTERNAL_SERVICE_ERROR = "EXTERNAL_SERVICE_ERROR"
    PERMISSION_DENIED = "PERMISSION_DENIED"
    UNKNOWN = "UNKNOWN"


# Pattern -> code, checked in insertion order
_PATTERN_CODES: dict[str, ErrorCode] = {
    "timeout": ErrorCode.TIMEOUT,
    "connect": ErrorCode.NETWORK_ERROR,
    "network": ErrorCode.NETWORK_ERROR,
    "permission": ErrorCode.PERMISSION_DENIED,
    "forbidden": ErrorCode.PERMISSION_DENIED,
    "httpstatus": ErrorCode.EXTERNAL_SERVICE_ERROR,
    "parse": ErrorCode.PARSE_ERROR,
    "json": ErrorCode.PARSE_ERROR,
    "decode": ErrorCode.PARSE_ERROR,
    "validation": ErrorCode.INVALID_PARAMS,
    "value": ErrorCode.INVALID_PARAMS,
    "type": ErrorCode.INVALID_PARAMS,
    "key": ErrorCode.NOT_FOUND,
}
_PATTERN_KEYS = tuple(_PATTERN_CODES)


@lru_cache(maxsize=256)
def _classify_cached(exc_key: str) -> ErrorCode:
    haystack = exc_key.lower()
    for pattern in _PATTERN_KEYS:
        if pattern in haystack:
            return _PATTERN_CODES[pattern]
    return ErrorCode.UNKNOWN


def classify_exception(exc: BaseException) -> ErrorCode:
    """Map an exception to an error code by matching on its type name."""
    return _classify_cached(type(exc).__name__)


class ToolError(BaseModel):
    """Structured error response for tool failures.

    Attributes:
        tool_name: Name of the tool that failed (or was requested)
        message: Human-readable error message
        code: Machine-readable error code
        recoverable: Whether calling again might succeed
        details: Optional detailed information (e.g., stack trace)
    """

    model_config = ConfigDict(
        frozen=True,
        str_strip_whitespace=True,
        validate_default=True,
        json_schema_extra={
            "title": "Tool Error",
            "examples": [{
                "tool_name": "Divide",
                "message": "Missing required parameter 'b' (float)",
                "code": "INVALID_PARAMS",
                "recoverable": False,
            }],
        },
    )

    tool_name: Annotated[str, Field(min_length=1)]
    message: Annotated[str, Field(min_length=1)]
    code: ErrorCode = ErrorCode.UNKNOWN
    recoverable: bool = True
    details: str | None = None

    @field_validator("message", mode="before")
    @classmethod
    def _ensure_message(cls, v: str | Exception) -> str:
        """Accept Exception objects and extract message."""
        return (str(v) or type(v).__name__) if isinstance(v, Exception) else v

    @computed_field
    @property
    def is_protocol_error(self) -> bool:
        """Whether the request itself was malformed (never reached a handler)."""
        return self.code in (ErrorCode.NOT_FOUND, ErrorCode.INVALID_PARAMS) and not self.recoverable

    @classmethod
    def create(
        cls,
        tool_name: str,
        message: str,
        code: ErrorCode = ErrorCode.UNKNOWN,
        *,
        recoverable: bool = True,
        details: str | None = None,
    ) -> Self:
        """Factory method for construction."""
        return cls(tool_name=tool_name, message=message, code=code, recoverable=recoverable, details=details)

    @classmethod
    def from_exception(
        cls,
        tool_name: str,
        exc: Exception,
        context: str = "",
        *,
        recoverable: bool = True,
        include_trace: bool = False,
    ) -> Self:
        """Create from exception with auto-classification."""
        text = str(exc) or type(exc).__name__
        return cls(
            tool_name=tool_name,
            message=f"{context}: {text}" if context else text,
            code=classify_exception(exc),
            recoverable=recoverable,
            details=traceback.format_exc() if include_trace else None,
        )

    def render(self) -> str:
        """Format error as a single line of text for the caller."""
        out = f"Tool Error ({self.tool_name}) [{self.code}]: {self.message}"
        return f"{out}\n\nDetails:\n{self.details}" if self.details else out

    __str__ = render


class ToolException(Exception):
    """Exception wrapping a ToolError for raising from handlers."""

    __slots__ = ("error",)

    def __init__(self, error: ToolError) -> None:
        self.error = error
        super().__init__(error.message)

    @classmethod
    def create(cls, tool_name: str, message: str, code: ErrorCode = ErrorCode.UNKNOWN, *, recoverable: bool = True) -> Self:
        return cls(ToolError(tool_name=tool_name, message=message, code=code, recoverable=recoverable))


class ConfigurationError(Exception):
    """Invalid tool table (duplicate name, bad default). Raised at startup, never per request."""
