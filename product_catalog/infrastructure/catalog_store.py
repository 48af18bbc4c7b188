"""In-memory product store with the catalog query engine.

The store is the single owner of every ``Product``. Records live in an
insertion-ordered dict keyed by id, which gives constant-time lookups while
keeping insertion order as the listing order. Callers only ever receive
copies, so nothing outside the store can mutate a stored record.

All operations run under one re-entrant lock: FastAPI may execute code on
its worker thread pool, and reads such as ``stats`` must not observe a
half-applied write.
"""

import math
import threading
import uuid
from collections.abc import Iterable
from datetime import UTC, datetime

from loguru import logger

from product_catalog.core.exceptions import NotFoundError, ValidationError
from product_catalog.domain.products import (
    CatalogStats,
    PageRequest,
    Pagination,
    PriceStats,
    Product,
    ProductFilters,
    ProductPage,
    ProductPayload,
    matches_search_term,
)

SEED_PRODUCTS: tuple[dict[str, object], ...] = (
    {
        "id": "1",
        "name": "Laptop",
        "description": "High-performance laptop with 16GB RAM",
        "price": 1200,
        "category": "electronics",
        "in_stock": True,
    },
    {
        "id": "2",
        "name": "Smartphone",
        "description": "Latest model with 128GB storage",
        "price": 800,
        "category": "electronics",
        "in_stock": True,
    },
    {
        "id": "3",
        "name": "Coffee Maker",
        "description": "Programmable coffee maker with timer",
        "price": 50,
        "category": "kitchen",
        "in_stock": False,
    },
)


class CatalogStore:
    """Process-local product collection and the operations over it.

    Args:
        products: Initial records, kept in the given order.

    Example:
        store = CatalogStore.seeded()
        page = store.list_products(ProductFilters(category="electronics"), PageRequest())
    """

    def __init__(self, products: Iterable[Product] = ()) -> None:
        self._lock = threading.RLock()
        self._products: dict[str, Product] = {}
        for product in products:
            self._products[product.id] = product.model_copy(deep=True)

    @classmethod
    def seeded(cls) -> "CatalogStore":
        """Create a store holding the sample products."""
        return cls(_seed_products())

    def __len__(self) -> int:
        with self._lock:
            return len(self._products)

    def reset(self, *, seed: bool = False) -> None:
        """Drop every product, optionally reloading the sample products."""
        with self._lock:
            self._products.clear()
            if seed:
                for product in _seed_products():
                    self._products[product.id] = product
        logger.info("Catalog reset", seeded=seed)

    def list_products(
        self, filters: ProductFilters, page_request: PageRequest
    ) -> ProductPage:
        """Filter the catalog and return one page of the result.

        Args:
            filters: Predicates every returned product must satisfy.
            page_request: Page number and size; the window is applied after
                filtering.

        Returns:
            ProductPage: The products in the window, in insertion order, with
                pagination metadata. Pages past the end are empty.
        """
        with self._lock:
            matched = [p for p in self._products.values() if filters.matches(p)]
            window = [
                p.model_copy(deep=True)
                for p in matched[page_request.start : page_request.end]
            ]

        total = len(matched)
        logger.debug(
            "Listed {} of {} matching products",
            len(window),
            total,
            page=page_request.page,
        )
        return ProductPage(
            products=window,
            pagination=Pagination(
                current_page=page_request.page,
                total_pages=math.ceil(total / page_request.limit),
                total_products=total,
                has_next=page_request.end < total,
                has_prev=page_request.page > 1,
            ),
        )

    def search(self, q: str | None) -> list[Product]:
        """Return every product whose name or description contains ``q``.

        Raises:
            ValidationError: If ``q`` is missing or empty.
        """
        if not q:
            raise ValidationError("Search query (q) is required")

        with self._lock:
            results = [
                p.model_copy(deep=True)
                for p in self._products.values()
                if matches_search_term(p, q)
            ]
        logger.debug("Search for {!r} matched {} products", q, len(results))
        return results

    def stats(self) -> CatalogStats:
        """Aggregate counts and price statistics over the whole catalog."""
        with self._lock:
            products = list(self._products.values())

        categories: dict[str, int] = {}
        in_stock = 0
        for product in products:
            categories[product.category] = categories.get(product.category, 0) + 1
            if product.in_stock:
                in_stock += 1

        price_stats = PriceStats()
        if products:
            prices = [product.price for product in products]
            price_stats = PriceStats(
                highest=max(prices),
                lowest=min(prices),
                average=sum(prices) / len(prices),
            )

        return CatalogStats(
            total_products=len(products),
            total_in_stock=in_stock,
            total_out_of_stock=len(products) - in_stock,
            categories=categories,
            price_stats=price_stats,
        )

    def get(self, product_id: str) -> Product:
        """Fetch a single product.

        Raises:
            NotFoundError: If no product has this id.
        """
        with self._lock:
            return self._require(product_id).model_copy(deep=True)

    def create(self, payload: ProductPayload) -> Product:
        """Append a new product built from an already validated payload."""
        product = Product(id=str(uuid.uuid4()), **payload.model_dump())
        with self._lock:
            self._products[product.id] = product
        logger.info("Created product {}", product.id, product_name=product.name)
        return product.model_copy(deep=True)

    def update(self, product_id: str, payload: ProductPayload) -> Product:
        """Replace every mutable field of a product.

        ``id`` and ``created_at`` are kept and ``updated_at`` is refreshed. The
        product keeps its position in the listing order.

        Raises:
            NotFoundError: If no product has this id.
        """
        with self._lock:
            current = self._require(product_id)
            updated = Product(
                id=current.id,
                created_at=current.created_at,
                updated_at=datetime.now(UTC),
                **payload.model_dump(),
            )
            self._products[product_id] = updated
        logger.info("Updated product {}", product_id)
        return updated.model_copy(deep=True)

    def delete(self, product_id: str) -> Product:
        """Remove a product and return it.

        Raises:
            NotFoundError: If no product has this id.
        """
        with self._lock:
            self._require(product_id)
            removed = self._products.pop(product_id)
        logger.info("Deleted product {}", product_id)
        return removed

    def _require(self, product_id: str) -> Product:
        product = self._products.get(product_id)
        if product is None:
            raise NotFoundError(
                f"Product with id {product_id} not found",
                context={"product_id": product_id},
            )
        return product


def _seed_products() -> list[Product]:
    return [Product.model_validate(data) for data in SEED_PRODUCTS]
