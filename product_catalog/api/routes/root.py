"""Public endpoints that sit outside the catalog's auth gate."""

from typing import Any

from fastapi import APIRouter

from product_catalog.api.constants import PRODUCTS_PREFIX
from product_catalog.infrastructure.dependencies import CatalogStoreDep

router = APIRouter(tags=["service"])


@router.get("/")
async def root() -> dict[str, Any]:
    """Welcome message with a map of the available endpoints."""
    return {
        "message": "Welcome to the Product API!",
        "endpoints": {
            "products": PRODUCTS_PREFIX,
            "documentation": "See README.md for API documentation",
        },
    }


@router.get("/health")
async def health(store: CatalogStoreDep) -> dict[str, Any]:
    """Liveness probe for container orchestration and load balancers.

    Returns:
        dict[str, Any]: Status and the number of products currently held.
    """
    return {"status": "healthy", "products": len(store)}
