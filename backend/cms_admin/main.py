"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.sessions import SessionMiddleware

from cms_admin.config import get_settings
from cms_admin.domain.exceptions import CatalogError
from cms_admin.infrastructure.dependencies import get_resource_catalog
from cms_admin.infrastructure.logging.log_config import setup_logging
from cms_admin.presentation.api.router import router as api_router
from cms_admin.presentation.web.router import router as web_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan — compile the catalog, open the shared API client."""
    settings = get_settings()
    setup_logging(settings)

    # 1. Compile the resource catalog (fails fast on a broken YAML file)
    try:
        catalog = get_resource_catalog()
        logger.info("Dashboard serving %d resources", len(catalog))
    except CatalogError:
        logger.exception("Resource catalog is invalid")
        raise

    # 2. One pooled client for every call to the CMS API
    app.state.http_client = httpx.AsyncClient(timeout=settings.api_timeout_seconds)

    yield

    # Shutdown
    await app.state.http_client.aclose()
    app.state.http_client = None


def create_app() -> FastAPI:
    """Factory function that builds and configures the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Signed cookie session: tenant scope and queued toasts
    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.session_secret_key,
        https_only=settings.app_env == "production",
    )

    # Mount API and dashboard routes
    app.include_router(api_router)
    app.include_router(web_router, prefix=settings.dashboard_prefix)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "cms_admin.main:app",
        host="0.0.0.0",
        port=8020,
        reload=True,
    )
