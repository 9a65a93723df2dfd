"""Resource catalog, list view model and single record endpoints."""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request, status

from cms_admin.application.schemas import (
    ListPageResponse,
    ResourceDefinitionResponse,
    ResourceSummaryResponse,
)
from cms_admin.application.services import FormViewService, ListViewService, ResourceCatalog
from cms_admin.domain.entities import ResourceDefinition, TenantContext
from cms_admin.domain.exceptions import EntityNotFoundError, ResourceApiError, UnknownResourceError
from cms_admin.infrastructure.dependencies import (
    get_form_view_service,
    get_list_view_service,
    get_resource_catalog,
    get_tenant_context,
)
from cms_admin.presentation.list_query import parse_list_query

router = APIRouter(prefix="/resources", tags=["Resources"])


def _definition(catalog: ResourceCatalog, name: str) -> ResourceDefinition:
    try:
        return catalog.get(name)
    except UnknownResourceError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.get("", response_model=list[ResourceSummaryResponse])
async def list_resources(
    catalog: ResourceCatalog = Depends(get_resource_catalog),
) -> list[ResourceSummaryResponse]:
    """All resource types the dashboard manages, in navigation order."""
    return [
        ResourceSummaryResponse(name=d.name, label=d.label, singular=d.singular, group=d.group)
        for d in catalog
    ]


@router.get("/{name}", response_model=ResourceDefinitionResponse)
async def get_resource(
    name: str,
    catalog: ResourceCatalog = Depends(get_resource_catalog),
) -> ResourceDefinitionResponse:
    """Field, lookup and filter definition of one resource type."""
    return ResourceDefinitionResponse.from_entity(_definition(catalog, name))


@router.get("/{name}/rows", response_model=ListPageResponse)
async def list_rows(
    name: str,
    request: Request,
    catalog: ResourceCatalog = Depends(get_resource_catalog),
    tenant: TenantContext = Depends(get_tenant_context),
    service: ListViewService = Depends(get_list_view_service),
) -> ListPageResponse:
    """Joined, filtered and paginated rows, as the list view renders them."""
    definition = _definition(catalog, name)
    page = await service.load_page(definition, tenant, parse_list_query(definition, request.query_params))
    return ListPageResponse.from_entity(page)


@router.get("/{name}/records/{record_id}")
async def get_record(
    name: str,
    record_id: str,
    catalog: ResourceCatalog = Depends(get_resource_catalog),
    tenant: TenantContext = Depends(get_tenant_context),
    service: FormViewService = Depends(get_form_view_service),
) -> dict[str, Any]:
    """One record as the remote API returns it."""
    definition = _definition(catalog, name)
    try:
        return await service.get_record(definition, record_id, tenant)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ResourceApiError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=e.error.message)
