"""Product catalog tools proxying an external REST service.

No local state: every call goes to the catalog API over a synchronous
httpx.Client. Single-item lookups and writes report failure as data
(None / False); listing failures propagate and become fault envelopes.

REST contract:
    GET    /products        → [ProductItem]
    GET    /products/{id}   → ProductItem | 404
    POST   /products        → 201 + ProductItem
    PUT    /products/{id}   → 204 | 404
    DELETE /products/{id}   → 204 | 404
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import TYPE_CHECKING

import httpx
from pydantic import TypeAdapter

from toolhost.foundation.core import ParamKind, param
from toolhost.foundation.registry import ToolRegistry
from toolhost.records import ProductInput, ProductItem

if TYPE_CHECKING:
    from toolhost.foundation.config import CatalogSettings

logger = logging.getLogger("toolhost.catalog")

_PRODUCT_LIST = TypeAdapter(list[ProductItem])


class CatalogClient:
    """Thin HTTP client for the catalog API.

    Args:
        base_url: Root of the catalog service
        timeout: Seconds per request; None waits indefinitely
        transport: Optional httpx transport (tests pass a MockTransport)
    """

    __slots__ = ("_http",)

    def __init__(
        self,
        base_url: str = "http://localhost:57724",
        timeout: float | None = None,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._http = httpx.Client(base_url=base_url.rstrip("/"), timeout=timeout, transport=transport)

    @classmethod
    def from_settings(cls, settings: CatalogSettings) -> CatalogClient:
        return cls(settings.base_url, settings.timeout)

    @property
    def base_url(self) -> str:
        return str(self._http.base_url).rstrip("/")

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> CatalogClient:
        return self

    def __exit__(self, *_: object) -> None:
        self.close()

    def list_products(self) -> list[ProductItem]:
        response = self._http.get("/products")
        response.raise_for_status()
        return _PRODUCT_LIST.validate_json(response.content)

    def get_product(self, product_id: int) -> ProductItem | None:
        try:
            response = self._http.get(f"/products/{product_id}")
        except httpx.HTTPError as e:
            logger.warning(f"GET /products/{product_id} failed: {e}")
            return None
        if not response.is_success:
            return None
        return ProductItem.model_validate_json(response.content)

    def create_product(self, body: ProductInput) -> ProductItem | None:
        response = self._http.post("/products", json=body.model_dump(mode="json", by_alias=True))
        if not response.is_success:
            logger.warning(f"POST /products returned {response.status_code}")
            return None
        return ProductItem.model_validate_json(response.content)

    def update_product(self, product_id: int, body: ProductInput) -> bool:
        response = self._http.put(f"/products/{product_id}", json=body.model_dump(mode="json", by_alias=True))
        return response.is_success

    def delete_product(self, product_id: int) -> bool:
        return self._http.delete(f"/products/{product_id}").is_success


class CatalogTools:
    """Catalog handlers. Filtering happens client-side on the full listing."""

    __slots__ = ("_client",)

    def __init__(self, client: CatalogClient) -> None:
        self._client = client

    @property
    def client(self) -> CatalogClient:
        return self._client

    def search_products(self, search_term: str | None = None) -> list[ProductItem]:
        products = self._client.list_products()
        if not search_term or not search_term.strip():
            return products
        needle = search_term.casefold()
        return [
            p for p in products
            if needle in p.name.casefold() or (p.description is not None and needle in p.description.casefold())
        ]

    def get_product_by_id(self, id: int) -> ProductItem | None:  # noqa: A002
        return self._client.get_product(id)

    def add_product(
        self, name: str, price: Decimal, description: str | None = None, is_active: bool = True,
    ) -> ProductItem | None:
        return self._client.create_product(
            ProductInput(name=name, price=price, description=description, is_active=is_active)
        )

    def update_product(
        self,
        id: int,  # noqa: A002
        name: str,
        price: Decimal,
        description: str | None = None,
        is_active: bool = True,
    ) -> bool:
        return self._client.update_product(
            id, ProductInput(name=name, price=price, description=description, is_active=is_active)
        )

    def delete_product(self, id: int) -> bool:  # noqa: A002
        return self._client.delete_product(id)

    def get_active_products(self) -> list[ProductItem]:
        return [p for p in self._client.list_products() if p.is_active]

    def get_products_by_price_range(self, min_price: Decimal, max_price: Decimal) -> list[ProductItem]:
        return [p for p in self._client.list_products() if min_price <= p.price <= max_price]


def register_catalog_tools(registry: ToolRegistry, tools: CatalogTools) -> CatalogTools:
    product_id = param("id", ParamKind.INTEGER, "Product ID")
    name = param("name", ParamKind.STRING, "Product name")
    price = param("price", ParamKind.DECIMAL, "Product price")
    description = param("description", ParamKind.STRING, "Product description (optional)", default=None)

    registry.add(
        "SearchProducts", "Search products in the catalog by name or list all products from the API.",
        tools.search_products,
        param("searchTerm", ParamKind.STRING, "Search term to filter products by name (optional)", default=None),
        category="catalog",
    )
    registry.add(
        "GetProductById", "Get a specific product by ID from the catalog API.",
        tools.get_product_by_id, product_id, category="catalog",
    )
    registry.add(
        "AddProduct", "Add a new product to the catalog via API.", tools.add_product,
        name, price, description,
        param("isActive", ParamKind.BOOLEAN, "Is the product active? (default: true)", default=True),
        category="catalog",
    )
    registry.add(
        "UpdateCatalogProduct", "Update an existing product in the catalog via API.", tools.update_product,
        product_id, name, price, description,
        param("isActive", ParamKind.BOOLEAN, "Is the product active?", default=True),
        category="catalog",
    )
    registry.add(
        "DeleteCatalogProduct", "Delete a product from the catalog via API.",
        tools.delete_product, product_id, category="catalog",
    )
    registry.add(
        "GetActiveProducts", "Get active products only from the catalog.",
        tools.get_active_products, category="catalog",
    )
    registry.add(
        "GetProductsByPriceRange", "Get products within a price range from the catalog.",
        tools.get_products_by_price_range,
        param("minPrice", ParamKind.DECIMAL, "Minimum price"),
        param("maxPrice", ParamKind.DECIMAL, "Maximum price"),
        category="catalog",
    )
    return tools
