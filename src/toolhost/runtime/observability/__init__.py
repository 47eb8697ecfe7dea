"""Observability: logging configuration for the ``toolhost`` logger tree."""

from .logging import JsonFormatter, configure_from_settings, configure_logging

__all__ = ["JsonFormatter", "configure_from_settings", "configure_logging"]
