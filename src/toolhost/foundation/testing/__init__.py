"""Testing utilities for toolhost.

- MockCatalogAPI: in-memory product catalog served through httpx.MockTransport
"""

from .mock import MockCatalogAPI

__all__ = ["MockCatalogAPI"]
