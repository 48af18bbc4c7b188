"""Product entity and the value objects produced by catalog queries.

Field names are snake_case in Python and camelCase on the wire; the alias
generator takes care of the translation, so ``Product.to_response()`` is the
only serialization path the API layer needs.
"""

import re
import sys
from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


def integral_number(value: int | float | None) -> int | float | None:
    """Return whole floats as ints, so ``1200.0`` is sent as ``1200``."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


class CamelModel(BaseModel):
    """Base model that exposes its fields with camelCase aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_response(self) -> dict[str, Any]:
        """Dump the model as JSON-ready data with camelCase keys.

        Fields left as ``None`` are omitted, which is how ``updatedAt`` stays
        absent until a product's first update.
        """
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ProductPayload(CamelModel):
    """Normalized mutable fields of a product, as accepted by the store."""

    name: str
    description: str
    price: int | float
    category: str
    in_stock: bool = True

    normalize_price = field_validator("price")(integral_number)


class Product(ProductPayload):
    """A catalog entry."""

    id: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime | None = None


class ProductFilters(BaseModel):
    """Optional predicates combined with logical AND when listing."""

    category: str | None = None
    in_stock: bool | None = None
    q: str | None = None

    @classmethod
    def from_query(
        cls, category: str | None, in_stock: str | None, q: str | None
    ) -> "ProductFilters":
        """Build filters from raw query values; empty strings count as absent.

        ``in_stock`` selects in-stock products only for ``"true"`` (any
        case); any other non-empty value selects out-of-stock products.
        """
        return cls(
            category=category or None,
            in_stock=in_stock.lower() == "true" if in_stock else None,
            q=q or None,
        )

    def matches(self, product: Product) -> bool:
        """Check a product against every filter that is set."""
        if self.category and product.category.lower() != self.category.lower():
            return False
        if self.in_stock is not None and product.in_stock != self.in_stock:
            return False
        return not self.q or matches_search_term(product, self.q)


DEFAULT_PAGE = 1
DEFAULT_PAGE_LIMIT = 10

_LEADING_INT = re.compile(r"\s*[+-]?\d+")


def parse_positive_int(raw: str | None, default: int) -> int:
    """Read the leading integer of a query value, falling back to ``default``.

    ``"2abc"`` reads as 2. Missing, non-numeric and non-positive values all
    give ``default``. Values are capped at ``sys.maxsize`` so they stay
    within the 64-bit range the JSON encoder accepts.
    """
    match = _LEADING_INT.match(raw or "")
    if match is None:
        return default
    value = int(match.group())
    return min(value, sys.maxsize) if value > 0 else default


class PageRequest(BaseModel):
    """Requested window over a filtered listing."""

    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_PAGE_LIMIT

    @classmethod
    def from_query(cls, page: str | None, limit: str | None) -> "PageRequest":
        return cls(
            page=parse_positive_int(page, DEFAULT_PAGE),
            limit=parse_positive_int(limit, DEFAULT_PAGE_LIMIT),
        )

    @property
    def start(self) -> int:
        return (self.page - 1) * self.limit

    @property
    def end(self) -> int:
        return self.start + self.limit


class Pagination(CamelModel):
    """Window metadata returned alongside a page of products."""

    current_page: int
    total_pages: int
    total_products: int
    has_next: bool
    has_prev: bool


class ProductPage(BaseModel):
    """One page of a filtered product listing."""

    products: list[Product]
    pagination: Pagination

    def to_response(self) -> dict[str, Any]:
        return {
            "products": [product.to_response() for product in self.products],
            "pagination": self.pagination.to_response(),
        }


class PriceStats(BaseModel):
    """Price aggregates; all ``None`` when the catalog is empty."""

    highest: int | float | None = None
    lowest: int | float | None = None
    average: int | float | None = None

    normalize_stats = field_validator("highest", "lowest", "average")(
        integral_number
    )


class CatalogStats(CamelModel):
    """Aggregate view over the whole catalog."""

    total_products: int
    total_in_stock: int
    total_out_of_stock: int
    categories: dict[str, int]
    price_stats: PriceStats

    def to_response(self) -> dict[str, Any]:
        # Price statistics are reported as null rather than omitted
        return self.model_dump(mode="json", by_alias=True)


def matches_search_term(product: Product, term: str) -> bool:
    """Case-insensitive substring match against name or description."""
    needle = term.lower()
    return needle in product.name.lower() or needle in product.description.lower()
