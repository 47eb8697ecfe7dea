"""Shared fixtures: a standard registry wired to fresh stores and a fake catalog."""

from __future__ import annotations

import os
from collections.abc import Iterator
from datetime import UTC, datetime

import pytest

from toolhost.foundation.config import clear_settings_cache
from toolhost.foundation.registry import ToolRegistry
from toolhost.foundation.testing import MockCatalogAPI
from toolhost.runtime import Dispatcher
from toolhost.tools import CatalogClient, ProductStore, TodoStore, WeatherTools, build_registry

FIXED_NOW = datetime(2024, 3, 15, 12, 0, tzinfo=UTC)


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def catalog_api() -> MockCatalogAPI:
    return MockCatalogAPI()


@pytest.fixture
def catalog_client(catalog_api: MockCatalogAPI) -> Iterator[CatalogClient]:
    with CatalogClient(transport=catalog_api.transport) as client:
        yield client


@pytest.fixture
def todo_store() -> TodoStore:
    return TodoStore()


@pytest.fixture
def product_store() -> ProductStore:
    return ProductStore()


@pytest.fixture
def registry(catalog_client: CatalogClient, todo_store: TodoStore, product_store: ProductStore) -> ToolRegistry:
    return build_registry(
        catalog_client=catalog_client,
        todo_store=todo_store,
        product_store=product_store,
        weather=WeatherTools(clock=lambda: FIXED_NOW),
    )


@pytest.fixture
def dispatcher(registry: ToolRegistry) -> Dispatcher:
    return Dispatcher(registry)


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    for var in [v for v in os.environ if v.startswith("TOOLHOST_")]:
        monkeypatch.delenv(var)
    clear_settings_cache()
    yield
    clear_settings_cache()
