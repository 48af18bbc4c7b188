"""FastAPI application initialization and configuration module.

``create_app`` wires the request pipeline:

- exception handlers, registered before any middleware
- middleware, executed in reverse order of registration, so request context
  is established before request logging runs
- the public routes and the authenticated catalog router
- a fresh ``CatalogStore`` and the settings, kept on ``app.state``
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from loguru import logger

from product_catalog.api.middleware.error_handler import register_exception_handlers
from product_catalog.api.middleware.request_context import RequestContextMiddleware
from product_catalog.api.middleware.request_logging import RequestLoggingMiddleware
from product_catalog.api.routes import products, root
from product_catalog.api.utils.responses import ORJSONResponse
from product_catalog.core.config import Settings, get_settings
from product_catalog.core.logging import setup_logging
from product_catalog.infrastructure.catalog_store import CatalogStore


@asynccontextmanager
async def lifespan(app_instance: FastAPI) -> AsyncGenerator[None]:
    """Log application startup and shutdown.

    Args:
        app_instance: The FastAPI application instance.

    Yields:
        None: Nothing is yielded, this is just a lifespan context.
    """
    logger.info(
        "Application startup complete - {} v{} ({} products loaded)",
        app_instance.title,
        app_instance.version,
        len(app_instance.state.catalog_store),
    )

    yield

    logger.info("Application shutdown complete")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Optional settings instance. If not provided, will use get_settings().

    Returns:
        FastAPI: Configured FastAPI application instance.
    """
    if settings is None:
        settings = get_settings()

    setup_logging(settings)

    application = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        docs_url=settings.docs_url,
        redoc_url=settings.redoc_url,
        openapi_url=settings.openapi_url,
        default_response_class=ORJSONResponse,
        lifespan=lifespan,
    )

    application.state.settings = settings
    catalog_store = CatalogStore()
    catalog_store.reset(seed=settings.seed_catalog)
    application.state.catalog_store = catalog_store

    register_exception_handlers(application)

    # 2. Request logging middleware (logs requests/responses)
    application.add_middleware(RequestLoggingMiddleware, log_config=settings.log_config)

    # 1. Request context middleware (creates correlation ID)
    application.add_middleware(RequestContextMiddleware)

    application.include_router(root.router)
    application.include_router(products.router)

    return application


app = create_app()
