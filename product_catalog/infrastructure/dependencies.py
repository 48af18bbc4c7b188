"""FastAPI dependency injection for the catalog store.

Each application instance owns one ``CatalogStore`` on ``app.state``; route
handlers receive it through the ``CatalogStoreDep`` alias instead of reaching
for a module-level global, which keeps separately created apps (tests in
particular) fully isolated.
"""

from typing import Annotated, cast

from fastapi import Depends, Request

from product_catalog.infrastructure.catalog_store import CatalogStore


def get_catalog_store(request: Request) -> CatalogStore:
    """Provide the application's catalog store.

    Args:
        request: The current request; its app carries the store.

    Returns:
        CatalogStore: The store created by ``create_app``.
    """
    return cast("CatalogStore", request.app.state.catalog_store)


CatalogStoreDep = Annotated[CatalogStore, Depends(get_catalog_store)]
