"""In-memory product tools.

Ids come from a counter guarded by the store lock: they start at 1, strictly
increase and are never handed out again after a delete.
"""

from __future__ import annotations

import threading
from decimal import Decimal

from toolhost.foundation.core import ParamKind, param
from toolhost.foundation.registry import ToolRegistry
from toolhost.records import ProductItem


class ProductStore:
    """Products keyed by id, plus the id counter."""

    __slots__ = ("_items", "_next_id", "_lock")

    def __init__(self) -> None:
        self._items: dict[int, ProductItem] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def insert(self, name: str, price: Decimal, description: str | None, is_active: bool) -> ProductItem:
        with self._lock:
            product = ProductItem(id=self._next_id, name=name, price=price, description=description, is_active=is_active)
            self._next_id += 1
            self._items[product.id] = product
            return product.model_copy()

    def get(self, product_id: int) -> ProductItem | None:
        with self._lock:
            product = self._items.get(product_id)
            return product.model_copy() if product else None

    def all(self) -> list[ProductItem]:
        with self._lock:
            return [p.model_copy() for p in sorted(self._items.values(), key=lambda p: p.id, reverse=True)]

    def patch(self, product_id: int, **changes: object) -> ProductItem | None:
        """Apply the non-None entries of `changes`. None if the id is unknown."""
        with self._lock:
            if (product := self._items.get(product_id)) is None:
                return None
            for field, value in changes.items():
                if value is not None:
                    setattr(product, field, value)
            return product.model_copy()

    def remove(self, product_id: int) -> bool:
        with self._lock:
            return self._items.pop(product_id, None) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)


class ProductTools:
    __slots__ = ("_store",)

    def __init__(self, store: ProductStore | None = None) -> None:
        self._store = store if store is not None else ProductStore()

    @property
    def store(self) -> ProductStore:
        return self._store

    def create_product(
        self, name: str, price: Decimal, description: str | None = None, is_active: bool = True,
    ) -> ProductItem:
        return self._store.insert(name, price, description, is_active)

    def get_product(self, id: int) -> ProductItem | None:  # noqa: A002
        return self._store.get(id)

    def list_products(self) -> list[ProductItem]:
        return self._store.all()

    def update_product(
        self,
        id: int,  # noqa: A002
        name: str | None = None,
        price: Decimal | None = None,
        description: str | None = None,
        is_active: bool | None = None,
    ) -> ProductItem | None:
        return self._store.patch(id, name=name, price=price, description=description, is_active=is_active)

    def delete_product(self, id: int) -> bool:  # noqa: A002
        return self._store.remove(id)


def register_product_tools(registry: ToolRegistry, tools: ProductTools | None = None) -> ProductTools:
    tools = tools if tools is not None else ProductTools()
    product_id = param("id", ParamKind.INTEGER, "Product id")

    registry.add(
        "CreateProduct", "Create a product item.", tools.create_product,
        param("name", ParamKind.STRING, "Product name"),
        param("price", ParamKind.DECIMAL, "Price"),
        param("description", ParamKind.STRING, "Description", default=None),
        param("isActive", ParamKind.BOOLEAN, "Is active", default=True),
        category="product",
    )
    registry.add("GetProduct", "Get a product by id.", tools.get_product, product_id, category="product")
    registry.add("ListProducts", "List all products.", tools.list_products, category="product")
    registry.add(
        "UpdateProduct", "Update a product.", tools.update_product,
        product_id,
        param("name", ParamKind.STRING, "Product name", default=None),
        param("price", ParamKind.DECIMAL, "Price", default=None),
        param("description", ParamKind.STRING, "Description", default=None),
        param("isActive", ParamKind.BOOLEAN, "Is active", default=None),
        category="product",
    )
    registry.add("DeleteProduct", "Delete a product by id.", tools.delete_product, product_id, category="product")
    return tools
