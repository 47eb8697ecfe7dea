"""In-memory fake of the product catalog REST API.

MockCatalogAPI implements the catalog contract on top of a dict and exposes
it as an ``httpx.MockTransport``, so a real ``httpx.Client`` (and therefore
the real CatalogClient) can be pointed at it without any network:

    GET    /products        → 200 [ProductItem]
    GET    /products/{id}   → 200 ProductItem | 404
    POST   /products        → 201 ProductItem | 400
    PUT    /products/{id}   → 204 | 404 | 400
    DELETE /products/{id}   → 204 | 404

Failures can be injected per endpoint with `set_error`, and `offline`
makes every request fail with a connection error.

Example:
    >>> api = MockCatalogAPI()
    >>> api.seed(ProductInput(name="Laptop", price=Decimal("999.99")))
    >>> client = CatalogClient(transport=api.transport)
    >>> client.get_product(1).name
    'Laptop'
    >>> api.request_count
    1
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import httpx
import orjson
from pydantic import ValidationError

from toolhost.records import ProductInput, ProductItem


def _json(status: int, payload: Any) -> httpx.Response:
    return httpx.Response(status, content=orjson.dumps(payload), headers={"content-type": "application/json"})


@dataclass
class MockCatalogAPI:
    """Simulated catalog backend with request recording and error injection."""

    products: dict[int, ProductItem] = field(default_factory=dict)
    next_id: int = 1
    offline: bool = False
    errors: dict[tuple[str, str], int] = field(default_factory=dict)
    requests: list[httpx.Request] = field(default_factory=list)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    @property
    def request_count(self) -> int:
        return len(self.requests)

    @property
    def last_request(self) -> httpx.Request | None:
        return self.requests[-1] if self.requests else None

    def seed(self, *items: ProductInput) -> list[ProductItem]:
        """Insert products directly, bypassing HTTP. Returns them with assigned ids."""
        return [self._insert(item) for item in items]

    def set_error(self, path: str, status: int = 500, method: str = "*") -> None:
        """Make `method path` (or any method with "*") answer with `status`."""
        self.errors[(method.upper(), path)] = status

    def clear(self) -> None:
        self.requests.clear()
        self.errors.clear()

    def assert_endpoint_called(self, method: str, path: str) -> None:
        if not any(r.method == method.upper() and r.url.path == path for r in self.requests):
            raise AssertionError(f"Endpoint '{method.upper()} {path}' was not called")

    # ─────────────────────────────────────────────────────────────────────────

    def _insert(self, item: ProductInput) -> ProductItem:
        product = ProductItem(id=self.next_id, **item.model_dump())
        self.products[product.id] = product
        self.next_id += 1
        return product

    def _injected(self, request: httpx.Request) -> int | None:
        path = request.url.path
        return self.errors.get((request.method, path), self.errors.get(("*", path)))

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.offline:
            raise httpx.ConnectError("Connection refused", request=request)
        if (status := self._injected(request)) is not None:
            return _json(status, {"error": f"Injected failure ({status})"})

        parts = request.url.path.strip("/").split("/")
        if parts[0] != "products" or len(parts) > 2:
            return httpx.Response(404)
        if len(parts) == 1:
            return self._collection(request)
        try:
            product_id = int(parts[1])
        except ValueError:
            return httpx.Response(404)
        return self._item(request, product_id)

    def _collection(self, request: httpx.Request) -> httpx.Response:
        match request.method:
            case "GET":
                return _json(200, [p.model_dump(mode="json", by_alias=True) for p in self.products.values()])
            case "POST":
                try:
                    body = ProductInput.model_validate_json(request.content)
                except ValidationError as e:
                    return _json(400, {"error": str(e)})
                return _json(201, self._insert(body).model_dump(mode="json", by_alias=True))
            case _:
                return httpx.Response(405)

    def _item(self, request: httpx.Request, product_id: int) -> httpx.Response:
        product = self.products.get(product_id)
        match request.method:
            case "GET":
                return _json(200, product.model_dump(mode="json", by_alias=True)) if product else httpx.Response(404)
            case "PUT":
                if product is None:
                    return httpx.Response(404)
                try:
                    body = ProductInput.model_validate_json(request.content)
                except ValidationError as e:
                    return _json(400, {"error": str(e)})
                self.products[product_id] = ProductItem(id=product_id, **body.model_dump())
                return httpx.Response(204)
            case "DELETE":
                return httpx.Response(204) if self.products.pop(product_id, None) is not None else httpx.Response(404)
            case _:
                return httpx.Response(405)
