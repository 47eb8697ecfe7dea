"""Unified error handling for toolhost.

- ErrorCode: Standard error codes for tool failures
- ToolError/ToolException: Structured errors and exceptions
- ConfigurationError: Fatal tool-table mistakes detected at startup
- Result/Ok/Err: Tagged success/failure values
"""

from .errors import ConfigurationError, ErrorCode, ToolError, ToolException, classify_exception
from .result import Err, Ok, Result, traverse

__all__ = [
    "ErrorCode", "ToolError", "ToolException", "ConfigurationError", "classify_exception",
    "Result", "Ok", "Err", "traverse",
]
