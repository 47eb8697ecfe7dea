"""Domain records shared by tool handlers and clients.

All records serialize with camelCase keys (``isCompleted``, ``windSpeed``)
and accept either camelCase or snake_case on input, so a client can decode
a data part straight back into the same type the handler returned.
"""

from __future__ import annotations

import math
import uuid
from datetime import UTC, datetime
from decimal import Decimal
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator
from pydantic.alias_generators import to_camel


def utcnow() -> datetime:
    return datetime.now(UTC)


class Record(BaseModel):
    """Base for wire records: camelCase aliases, populate by either name."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ─────────────────────────────────────────────────────────────────────────────
# Value records (fresh per call, no identity)
# ─────────────────────────────────────────────────────────────────────────────


class CalculationResult(Record):
    """Outcome of an arithmetic tool.

    Arithmetic errors are data: `result` is NaN and `operation` carries the
    error label (e.g. "Division Error: Cannot divide by zero").
    """

    model_config = ConfigDict(frozen=True)

    expression: str
    result: float
    operation: str
    timestamp: datetime = Field(default_factory=utcnow)

    @property
    def is_error(self) -> bool:
        return math.isnan(self.result)

    @field_serializer("result", when_used="json")
    def _finite_or_tag(self, v: float) -> float | str:
        # JSON has no NaN/Infinity literals
        if math.isnan(v):
            return "NaN"
        if math.isinf(v):
            return "Infinity" if v > 0 else "-Infinity"
        return v

    @field_validator("result", mode="before")
    @classmethod
    def _parse_tag(cls, v: object) -> object:
        return float(v) if isinstance(v, str) else v


class WeatherInfo(Record):
    """Simulated weather snapshot for one location and day."""

    model_config = ConfigDict(frozen=True)

    location: str
    temperature: float
    unit: str
    condition: str
    humidity: int
    wind_speed: float
    timestamp: datetime = Field(default_factory=utcnow)


class TextStats(Record):
    """Counts produced by AnalyzeText."""

    model_config = ConfigDict(frozen=True)

    words: int = 0
    characters: int = 0
    characters_without_spaces: int = 0
    lines: int = 0
    sentences: int = 0
    paragraphs: int = 0


# ─────────────────────────────────────────────────────────────────────────────
# Todo
# ─────────────────────────────────────────────────────────────────────────────


class Priority(StrEnum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"

    @classmethod
    def parse(cls, value: str | None) -> Priority | None:
        """Case-insensitive lookup; None for blank or unknown values."""
        if not value:
            return None
        wanted = value.strip().lower()
        return next((p for p in cls if p.value.lower() == wanted), None)


class TodoItem(Record):
    """A task owned by the todo store. Mutated only through the store's lock."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    title: str
    description: str = ""
    is_completed: bool = False
    created_at: datetime = Field(default_factory=utcnow)
    completed_at: datetime | None = None
    priority: Priority = Priority.MEDIUM


class PriorityBreakdown(Record):
    model_config = ConfigDict(frozen=True)

    high: int = 0
    medium: int = 0
    low: int = 0


class TodoStats(Record):
    """Summary of the todo list. `by_priority` counts pending items only."""

    model_config = ConfigDict(frozen=True)

    total: int
    completed: int
    pending: int
    by_priority: PriorityBreakdown


# ─────────────────────────────────────────────────────────────────────────────
# Product
# ─────────────────────────────────────────────────────────────────────────────


class ProductInput(Record):
    """Body sent to the catalog API on create and update."""

    name: str
    price: Decimal = Field(allow_inf_nan=False)
    description: str | None = None
    is_active: bool = True

    @field_serializer("price", when_used="json")
    def _price_number(self, v: Decimal) -> float:
        return float(v)


class ProductItem(ProductInput):
    """A product. The in-memory store and the catalog API each own a separate id space."""

    id: int
