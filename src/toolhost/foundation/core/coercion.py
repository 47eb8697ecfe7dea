"""Argument coercion shared by every tool.

Each ParamKind maps to a pydantic TypeAdapter run in lax mode, so "5" becomes
5 for an integer parameter and "true" becomes True for a boolean one. Coercion
never raises: the outcome is a Result carrying either the converted value or a
short reason string.
"""

from __future__ import annotations

from decimal import Decimal
from enum import StrEnum
from typing import Annotated

from pydantic import Field, StrictStr, TypeAdapter, ValidationError

from toolhost.foundation.errors import Err, Ok, Result


class ParamKind(StrEnum):
    """Declared type of a tool parameter."""
    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    DECIMAL = "decimal"
    BOOLEAN = "boolean"


_ADAPTERS: dict[ParamKind, TypeAdapter[object]] = {
    ParamKind.STRING: TypeAdapter(StrictStr),
    ParamKind.INTEGER: TypeAdapter(int),
    ParamKind.FLOAT: TypeAdapter(float),
    ParamKind.DECIMAL: TypeAdapter(Annotated[Decimal, Field(allow_inf_nan=False)]),
    ParamKind.BOOLEAN: TypeAdapter(bool),
}

_NUMERIC = frozenset({ParamKind.INTEGER, ParamKind.FLOAT, ParamKind.DECIMAL})


def coerce(kind: ParamKind, value: object) -> Result[object, str]:
    """Convert a loosely typed argument to the Python type for `kind`.

    Example:
        >>> coerce(ParamKind.INTEGER, "42")
        Ok(42)
        >>> coerce(ParamKind.INTEGER, "forty-two").is_err()
        True
    """
    if isinstance(value, bool) and kind in _NUMERIC:
        return Err(f"expected {kind}, got boolean")
    try:
        return Ok(_ADAPTERS[kind].validate_python(value))
    except ValidationError as e:
        reason = e.errors(include_url=False)[0]["msg"] if e.error_count() else str(e)
        return Err(f"expected {kind}, got {type(value).__name__} ({reason})")
