"""Response envelopes and their JSON codec.

A tool call always answers with a ResponseEnvelope: an ordered list of
content parts plus an error tag. Parts are a tagged union discriminated on
``kind``:

    {"kind": "text", "value": "hello"}
    {"kind": "data", "value": {"id": 2, "name": "Widget", ...}}

Encoding goes through orjson; handler return values are converted to JSON
form first with pydantic so records, datetimes and Decimals come out the
same way everywhere.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Self, Union

import orjson
from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic_core import to_jsonable_python

from toolhost.foundation.errors import ErrorCode, ToolError


class TextPart(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["text"] = "text"
    value: str


class DataPart(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["data"] = "data"
    value: Any = None


ContentPart = Annotated[Union[TextPart, DataPart], Field(discriminator="kind")]


class ResponseEnvelope(BaseModel):
    """Ordered content parts returned for one tool call.

    An empty `content` means the tool returned nothing; it is not an error.
    Errors set `is_error` and `error_code` and carry one text part.
    """

    model_config = ConfigDict(frozen=True)

    content: tuple[ContentPart, ...] = ()
    is_error: bool = False
    error_code: ErrorCode | None = None

    @classmethod
    def of(cls, value: object) -> Self:
        """Wrap a handler's return value."""
        return cls(content=to_content(value))

    @classmethod
    def failure(cls, error: ToolError) -> Self:
        return cls(content=(TextPart(value=error.render()),), is_error=True, error_code=error.code)

    @property
    def is_empty(self) -> bool:
        return not self.content

    @property
    def first(self) -> TextPart | DataPart | None:
        return self.content[0] if self.content else None

    def text(self) -> str:
        """Concatenate all text parts."""
        return "\n".join(p.value for p in self.content if isinstance(p, TextPart))


def to_jsonable(value: object) -> Any:
    """JSON form of a handler value: records by alias, datetimes as ISO strings."""
    return to_jsonable_python(value, by_alias=True)


def to_content(value: object) -> tuple[TextPart | DataPart, ...]:
    """None → no parts, str → one text part, anything else → one data part."""
    if value is None:
        return ()
    if isinstance(value, str):
        return (TextPart(value=value),)
    return (DataPart(value=to_jsonable(value)),)


# ─────────────────────────────────────────────────────────────────────────────
# Codec
# ─────────────────────────────────────────────────────────────────────────────

_EnvelopeAdapter: TypeAdapter[ResponseEnvelope] = TypeAdapter(ResponseEnvelope)


def encode(data: object) -> bytes:
    """Serialize a JSON-compatible value (or pydantic model) to one line of UTF-8 JSON."""
    if isinstance(data, BaseModel):
        data = data.model_dump(mode="json", by_alias=True)
    return orjson.dumps(data, default=to_jsonable)


def decode(data: bytes | str) -> Any:
    return orjson.loads(data)


def encode_envelope(envelope: ResponseEnvelope) -> bytes:
    return encode(envelope)


def decode_envelope(data: bytes | str | dict[str, Any]) -> ResponseEnvelope:
    """Parse an envelope from raw JSON or an already-decoded mapping."""
    payload = data if isinstance(data, dict) else decode(data)
    return _EnvelopeAdapter.validate_python(payload)
