"""Built-in tools for toolhost.

`build_registry` assembles the standard tool set. Stateful families take
their state objects as arguments, so tests and embedders can share or
inspect them; anything not supplied is created fresh.

Quick Start:
    >>> from toolhost.tools import build_registry
    >>> registry = build_registry()
    >>> "CreateTodo" in registry
    True
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from toolhost.foundation.registry import ToolRegistry

from .prebuilt import (
    CatalogClient,
    CatalogTools,
    ProductStore,
    ProductTools,
    TodoStore,
    TodoTools,
    WeatherTools,
    register_calculator_tools,
    register_catalog_tools,
    register_product_tools,
    register_text_tools,
    register_todo_tools,
    register_weather_tools,
)

if TYPE_CHECKING:
    from toolhost.foundation.config import HostSettings


def build_registry(
    settings: HostSettings | None = None,
    *,
    catalog_client: CatalogClient | None = None,
    todo_store: TodoStore | None = None,
    product_store: ProductStore | None = None,
    weather: WeatherTools | None = None,
) -> ToolRegistry:
    """Create a registry holding every standard tool.

    Args:
        settings: Host settings; the catalog client is built from `settings.catalog`
            unless `catalog_client` is given (default: `get_settings()`)
        catalog_client: HTTP client for the catalog API
        todo_store: Shared todo collection
        product_store: Shared product collection
        weather: Weather handlers (inject a fixed clock here)

    Raises:
        ConfigurationError: If two tools share a name or a parameter default is invalid
    """
    if catalog_client is None:
        if settings is None:
            from toolhost.foundation.config import get_settings
            settings = get_settings()
        catalog_client = CatalogClient.from_settings(settings.catalog)

    registry = ToolRegistry()
    register_calculator_tools(registry)
    register_weather_tools(registry, weather)
    register_todo_tools(registry, TodoTools(todo_store))
    register_product_tools(registry, ProductTools(product_store))
    register_catalog_tools(registry, CatalogTools(catalog_client))
    register_text_tools(registry)
    return registry


__all__ = [
    "build_registry",
    "CatalogClient",
    "CatalogTools",
    "ProductStore",
    "ProductTools",
    "TodoStore",
    "TodoTools",
    "WeatherTools",
]
