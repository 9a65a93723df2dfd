"""FastAPI dependency injection — wires infrastructure to application layer."""

from collections.abc import AsyncGenerator
from functools import lru_cache

import httpx
from fastapi import Depends, HTTPException, Request

from cms_admin.config import Settings, get_settings
from cms_admin.application.interfaces import ResourceGateway, ToastSink
from cms_admin.application.services import (
    CatalogLoader,
    DashboardService,
    FormViewService,
    ListViewService,
    ResourceCatalog,
)
from cms_admin.domain.entities import TenantContext
from cms_admin.domain.exceptions import TenantMissingError
from cms_admin.infrastructure.http import HttpResourceGateway
from cms_admin.infrastructure.session import SessionToastSink, resolve_tenant


@lru_cache
def get_resource_catalog() -> ResourceCatalog:
    """Catalog compiled once from the YAML directory."""
    return CatalogLoader(get_settings().catalog_path).load()


def get_http_client(request: Request) -> httpx.AsyncClient | None:
    """The shared client opened in the lifespan, when there is one."""
    return getattr(request.app.state, "http_client", None)


async def get_resource_gateway(
    http_client: httpx.AsyncClient | None = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
) -> AsyncGenerator[ResourceGateway, None]:
    """Provides the httpx gateway to the remote CMS API."""
    yield HttpResourceGateway(
        settings.api_base_url,
        token=settings.api_token or None,
        timeout=settings.api_timeout_seconds,
        http_client=http_client,
    )


async def get_list_view_service(
    gateway: ResourceGateway = Depends(get_resource_gateway),
    catalog: ResourceCatalog = Depends(get_resource_catalog),
) -> AsyncGenerator[ListViewService, None]:
    yield ListViewService(gateway, catalog)


async def get_form_view_service(
    gateway: ResourceGateway = Depends(get_resource_gateway),
    catalog: ResourceCatalog = Depends(get_resource_catalog),
) -> AsyncGenerator[FormViewService, None]:
    yield FormViewService(gateway, catalog)


async def get_dashboard_service(
    gateway: ResourceGateway = Depends(get_resource_gateway),
    catalog: ResourceCatalog = Depends(get_resource_catalog),
    settings: Settings = Depends(get_settings),
) -> AsyncGenerator[DashboardService, None]:
    yield DashboardService(gateway, catalog, stats_endpoint=settings.stats_endpoint or None)


def get_tenant_context(
    request: Request,
    settings: Settings = Depends(get_settings),
) -> TenantContext:
    """Organization scope of the request; 401 when none is available."""
    try:
        return resolve_tenant(request.session, request.headers, settings.default_org_code)
    except TenantMissingError as e:
        raise HTTPException(status_code=401, detail=str(e))


def get_toast_sink(request: Request) -> ToastSink:
    return SessionToastSink(request.session)
