"""Logging setup for the tool host.

Modules log through stdlib loggers under the ``toolhost`` namespace
(``toolhost.dispatch``, ``toolhost.server``, ``toolhost.catalog``...).
`configure_logging` attaches a single stderr handler to that namespace,
rendering either human-readable lines or JSON lines via orjson.

stdout is reserved for the JSON-lines transport, so no handler ever writes there.

Example:
    >>> configure_logging(level="DEBUG")               # text on stderr
    >>> configure_logging(format="json", level="INFO")  # JSON lines on stderr
"""

from __future__ import annotations

import logging
import sys
from datetime import UTC, datetime
from typing import TYPE_CHECKING, TextIO

import orjson

if TYPE_CHECKING:
    from toolhost.foundation.config import LoggingSettings

ROOT_LOGGER = "toolhost"
_TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# Attributes every LogRecord has; anything else came from `extra=`
_RESERVED = frozenset(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """One JSON object per record for log aggregation."""

    def format(self, record: logging.LogRecord) -> str:
        data: dict[str, object] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname.lower(),
            "logger": record.name,
            "event": record.getMessage(),
        }
        data.update({k: v for k, v in vars(record).items() if k not in _RESERVED})
        if record.exc_info:
            data["exc_info"] = self.formatException(record.exc_info)
        return orjson.dumps(data, default=str, option=orjson.OPT_NON_STR_KEYS).decode()


def configure_logging(
    format: str = "text",  # noqa: A002 - matches LoggingSettings.format
    level: str = "INFO",
    *,
    output: TextIO | None = None,
) -> logging.Logger:
    """Configure the ``toolhost`` logger. Safe to call more than once; the previous handler is replaced.

    Args:
        format: "text" (human) or "json" (machine)
        level: Minimum level name
        output: Stream to write to (default: stderr)
    """
    match format:
        case "text": formatter: logging.Formatter = logging.Formatter(_TEXT_FORMAT)
        case "json": formatter = JsonFormatter()
        case _: raise ValueError(f"Unknown log format: {format}. Use 'text' or 'json'")

    log = logging.getLogger(ROOT_LOGGER)
    for handler in [h for h in log.handlers if getattr(h, "_toolhost", False)]:
        log.removeHandler(handler)

    handler = logging.StreamHandler(output or sys.stderr)
    handler.setFormatter(formatter)
    handler._toolhost = True  # type: ignore[attr-defined]
    log.addHandler(handler)
    log.setLevel(getattr(logging, level.upper(), logging.INFO))
    log.propagate = False
    return log


def configure_from_settings(settings: LoggingSettings) -> logging.Logger:
    return configure_logging(settings.format, settings.level)
