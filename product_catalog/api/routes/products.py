"""Catalog routes under ``/api/products``.

Every route on this router runs behind ``require_api_key``. Handlers stay
thin: they read the query or body, call validation and the store, and shape
the success response. Failures are raised and left to the exception
handlers.

Route order matters: ``/search`` and ``/stats`` are declared before
``/{product_id}`` so they are not captured as ids. The collection routes
answer with and without a trailing slash.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, Query, status

from product_catalog.api.auth import require_api_key
from product_catalog.api.constants import PRODUCTS_PREFIX
from product_catalog.domain.products import PageRequest, ProductFilters
from product_catalog.domain.validation import validate_product_payload
from product_catalog.infrastructure.dependencies import CatalogStoreDep

router = APIRouter(
    prefix=PRODUCTS_PREFIX,
    tags=["products"],
    dependencies=[Depends(require_api_key)],
)

# Bodies are accepted as raw JSON and checked by validate_product_payload,
# so every violation is reported in one 400 response
ProductBody = Annotated[Any, Body()]


@router.get("")
@router.get("/", include_in_schema=False)
async def list_products(
    store: CatalogStoreDep,
    category: str | None = None,
    in_stock: Annotated[str | None, Query(alias="inStock")] = None,
    q: str | None = None,
    page: str | None = None,
    limit: str | None = None,
) -> dict[str, Any]:
    """List products with optional filters and pagination.

    ``page`` and ``limit`` are read leniently: anything that is not a
    positive integer falls back to 1 and 10.
    """
    result = store.list_products(
        ProductFilters.from_query(category, in_stock, q),
        PageRequest.from_query(page, limit),
    )
    return result.to_response()


@router.get("/search")
async def search_products(
    store: CatalogStoreDep, q: str | None = None
) -> dict[str, Any]:
    """Search names and descriptions; ``q`` is required."""
    results = store.search(q)
    return {
        "query": q,
        "results": [product.to_response() for product in results],
        "count": len(results),
    }


@router.get("/stats")
async def product_stats(store: CatalogStoreDep) -> dict[str, Any]:
    return store.stats().to_response()


@router.get("/{product_id}")
async def get_product(product_id: str, store: CatalogStoreDep) -> dict[str, Any]:
    return store.get(product_id).to_response()


@router.post("", status_code=status.HTTP_201_CREATED)
@router.post("/", status_code=status.HTTP_201_CREATED, include_in_schema=False)
async def create_product(
    store: CatalogStoreDep, payload: ProductBody = None
) -> dict[str, Any]:
    return store.create(validate_product_payload(payload)).to_response()


@router.put("/{product_id}")
async def update_product(
    product_id: str, store: CatalogStoreDep, payload: ProductBody = None
) -> dict[str, Any]:
    """Replace every mutable field of a product.

    The body is validated before the id is looked up, so an invalid body is
    a 400 even for an unknown id.
    """
    return store.update(product_id, validate_product_payload(payload)).to_response()


@router.delete("/{product_id}")
async def delete_product(product_id: str, store: CatalogStoreDep) -> dict[str, Any]:
    deleted = store.delete(product_id)
    return {"message": "Product deleted successfully", "product": deleted.to_response()}
