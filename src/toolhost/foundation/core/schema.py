"""Tool descriptors and parameter specifications.

A ToolDescriptor is what clients see when they list tools: a unique name, a
description for humans (or models) choosing between tools, and the ordered
parameters the handler takes. Both types are frozen pydantic models so they
serialize straight onto the wire and cannot change after registration.
"""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator

from toolhost.foundation.errors import ConfigurationError

from .coercion import ParamKind, coerce

_JSON_TYPES: dict[ParamKind, str] = {
    ParamKind.STRING: "string",
    ParamKind.INTEGER: "integer",
    ParamKind.FLOAT: "number",
    ParamKind.DECIMAL: "number",
    ParamKind.BOOLEAN: "boolean",
}


class ParameterSpec(BaseModel):
    """One declared parameter of a tool.

    A parameter is either required (no default) or optional with a default
    of the declared kind. `None` is an allowed default for optional
    parameters and means "caller did not supply it".
    """

    model_config = ConfigDict(frozen=True)

    name: Annotated[str, Field(min_length=1)]
    kind: ParamKind
    required: bool = True
    default: Any = None
    description: str = ""

    @model_validator(mode="before")
    @classmethod
    def _check_default(cls, data: Any) -> Any:
        if not isinstance(data, dict) or data.get("default") is None:
            return data
        name = data.get("name", "?")
        if data.get("required", True):
            raise ConfigurationError(f"Parameter '{name}' is required and cannot declare a default")
        result = coerce(ParamKind(data["kind"]), data["default"])
        if result.is_err():
            raise ConfigurationError(f"Default for parameter '{name}' does not match its kind: {result.unwrap_err()}")
        return {**data, "default": result.unwrap()}

    @property
    def json_schema(self) -> dict[str, object]:
        schema: dict[str, object] = {"type": _JSON_TYPES[self.kind]}
        if self.description:
            schema["description"] = self.description
        if not self.required and self.default is not None:
            schema["default"] = self.default if self.kind is not ParamKind.DECIMAL else float(self.default)
        return schema


class ToolDescriptor(BaseModel):
    """Immutable description of a registered tool.

    Attributes:
        name: Unique, case-sensitive lookup key (e.g., "CreateTodo")
        description: What the tool does
        category: Tool family used for grouping in listings
        parameters: Ordered parameter specs; handlers receive arguments in this order
    """

    model_config = ConfigDict(frozen=True)

    name: Annotated[str, Field(min_length=1)]
    description: Annotated[str, Field(min_length=1)]
    category: str = "general"
    parameters: tuple[ParameterSpec, ...] = ()

    @model_validator(mode="after")
    def _unique_params(self) -> ToolDescriptor:
        names = [p.name for p in self.parameters]
        if len(names) != len(set(names)):
            raise ConfigurationError(f"Tool '{self.name}' declares a parameter twice: {names}")
        return self

    @computed_field
    @property
    def input_schema(self) -> dict[str, object]:
        """JSON-schema style view of the parameters, for clients that build forms or prompts."""
        return {
            "type": "object",
            "properties": {p.name: p.json_schema for p in self.parameters},
            "required": [p.name for p in self.parameters if p.required],
        }


_REQUIRED = object()


def param(name: str, kind: ParamKind, description: str = "", *, default: Any = _REQUIRED) -> ParameterSpec:
    """Build a ParameterSpec. Omitting `default` makes the parameter required.

    Example:
        >>> param("days", ParamKind.INTEGER, "Forecast length", default=3).required
        False
    """
    if default is _REQUIRED:
        return ParameterSpec(name=name, kind=kind, description=description)
    return ParameterSpec(name=name, kind=kind, required=False, default=default, description=description)
