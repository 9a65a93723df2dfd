"""Dashboard HTML routes — list views, create/edit forms, delete confirmation.

Every page fetches on load. Mutations follow post/redirect/get: the result
toast is queued in the session and shown by the page the browser lands on.
A rejected or failed submission re-renders the form with the entered values.
"""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from starlette.datastructures import FormData, UploadFile

from cms_admin.application.interfaces import ToastSink
from cms_admin.application.services import (
    DashboardService,
    FormViewService,
    ListViewService,
    ResourceCatalog,
)
from cms_admin.domain.entities import (
    FieldKind,
    FormState,
    ListQuery,
    ResourceDefinition,
    TenantContext,
    Toast,
    UploadedFile,
)
from cms_admin.domain.exceptions import UnknownResourceError
from cms_admin.infrastructure.dependencies import (
    get_dashboard_service,
    get_form_view_service,
    get_list_view_service,
    get_resource_catalog,
    get_tenant_context,
    get_toast_sink,
)
from cms_admin.presentation.list_query import list_query_params, parse_list_query
from cms_admin.presentation.web.templating import templates

router = APIRouter(tags=["Dashboard"], include_in_schema=False)

IDEMPOTENCY_FIELD = "_idempotency_key"
CURRENT_FILE_SUFFIX = "__current"


def _definition(catalog: ResourceCatalog, name: str) -> ResourceDefinition:
    try:
        return catalog.get(name)
    except UnknownResourceError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


def _render(
    request: Request,
    template: str,
    catalog: ResourceCatalog,
    sink: ToastSink,
    context: dict[str, Any],
    *,
    toast: Toast | None = None,
) -> HTMLResponse:
    toasts = sink.drain()
    if toast is not None:
        toasts.append(toast)
    ctx = {"groups": catalog.groups(), "toasts": toasts, **context}
    return templates.TemplateResponse(request, template, ctx)


def _to_list(request: Request, definition: ResourceDefinition) -> RedirectResponse:
    return RedirectResponse(
        request.url_for("resource_list", resource=definition.name),
        status_code=status.HTTP_303_SEE_OTHER,
    )


async def _read_form(
    form: FormData,
    definition: ResourceDefinition,
) -> tuple[dict[str, Any], dict[str, UploadedFile]]:
    """Split submitted form data into raw field values and deferred uploads.

    A file input keeps its stored path in ``<name>__current``; a newly chosen
    file replaces it on submission.
    """
    raw: dict[str, Any] = {}
    files: dict[str, UploadedFile] = {}
    for spec in definition.fields:
        if spec.kind != FieldKind.FILE:
            raw[spec.name] = form.get(spec.name)
            continue
        raw[spec.name] = form.get(spec.name + CURRENT_FILE_SUFFIX)
        upload = form.get(spec.name)
        if isinstance(upload, UploadFile) and upload.filename:
            content = await upload.read()
            if content:
                files[spec.name] = UploadedFile(
                    filename=upload.filename,
                    content=content,
                    content_type=upload.content_type or "application/octet-stream",
                )
    return raw, files


def _form_context(definition: ResourceDefinition, state: FormState) -> dict[str, Any]:
    return {
        "definition": definition,
        "state": state,
        "idempotency_field": IDEMPOTENCY_FIELD,
        "current_suffix": CURRENT_FILE_SUFFIX,
    }


# ── Home ────────────────────────────────────────────────────────────


@router.get("/", response_class=HTMLResponse, name="dashboard_home")
async def dashboard_home(
    request: Request,
    catalog: ResourceCatalog = Depends(get_resource_catalog),
    tenant: TenantContext = Depends(get_tenant_context),
    service: DashboardService = Depends(get_dashboard_service),
    sink: ToastSink = Depends(get_toast_sink),
) -> HTMLResponse:
    overview = await service.overview(tenant)
    return _render(request, "home.html", catalog, sink, {"overview": overview, "tenant": tenant})


# ── List view ───────────────────────────────────────────────────────


@router.get("/{resource}", response_class=HTMLResponse, name="resource_list")
async def resource_list(
    resource: str,
    request: Request,
    catalog: ResourceCatalog = Depends(get_resource_catalog),
    tenant: TenantContext = Depends(get_tenant_context),
    service: ListViewService = Depends(get_list_view_service),
    sink: ToastSink = Depends(get_toast_sink),
) -> HTMLResponse:
    definition = _definition(catalog, resource)
    query = parse_list_query(definition, request.query_params)
    page = await service.load_page(definition, tenant, query)
    base_url = request.url_for("resource_list", resource=definition.name)

    def page_url(number: int) -> str:
        return str(base_url.include_query_params(**list_query_params(query), page=number))

    def sort_url(field: str) -> str:
        descending = query.sort == field and not query.descending
        params = list_query_params(ListQuery(
            search=query.search,
            selects=query.selects,
            toggles=query.toggles,
            sort=field,
            descending=descending,
        ))
        return str(base_url.include_query_params(**params))

    return _render(
        request,
        "list.html",
        catalog,
        sink,
        {
            "definition": definition,
            "page": page,
            "preview": page.preview,
            "query": query,
            "page_url": page_url,
            "sort_url": sort_url,
        },
        toast=page.toast,
    )


# ── Create ──────────────────────────────────────────────────────────


@router.get("/{resource}/create", response_class=HTMLResponse, name="resource_create")
async def create_page(
    resource: str,
    request: Request,
    catalog: ResourceCatalog = Depends(get_resource_catalog),
    tenant: TenantContext = Depends(get_tenant_context),
    service: FormViewService = Depends(get_form_view_service),
    sink: ToastSink = Depends(get_toast_sink),
) -> HTMLResponse:
    definition = _definition(catalog, resource)
    state = await service.new_form(definition, tenant)
    return _render(request, "form.html", catalog, sink, _form_context(definition, state))


@router.post("/{resource}/create", response_class=HTMLResponse)
async def create_submit(
    resource: str,
    request: Request,
    catalog: ResourceCatalog = Depends(get_resource_catalog),
    tenant: TenantContext = Depends(get_tenant_context),
    service: FormViewService = Depends(get_form_view_service),
    sink: ToastSink = Depends(get_toast_sink),
):
    definition = _definition(catalog, resource)
    form = await request.form()
    raw, files = await _read_form(form, definition)
    state = await service.submit(
        definition,
        tenant,
        raw,
        files=files,
        idempotency_key=form.get(IDEMPOTENCY_FIELD) or None,
    )
    if state.succeeded:
        sink.push(state.toast)
        return _to_list(request, definition)

    await service.attach_options(state, definition, tenant)
    return _render(request, "form.html", catalog, sink, _form_context(definition, state), toast=state.toast)


# ── Live preview ────────────────────────────────────────────────────


@router.post("/{resource}/preview", response_class=HTMLResponse, name="resource_preview")
async def form_preview(
    resource: str,
    request: Request,
    catalog: ResourceCatalog = Depends(get_resource_catalog),
    service: FormViewService = Depends(get_form_view_service),
) -> HTMLResponse:
    definition = _definition(catalog, resource)
    form = await request.form()
    raw, _ = await _read_form(form, definition)
    return templates.TemplateResponse(
        request,
        "partials/preview.html",
        {"definition": definition, "preview": service.preview(definition, raw)},
    )


# ── Edit ────────────────────────────────────────────────────────────


@router.get("/{resource}/{record_id}/edit", response_class=HTMLResponse, name="resource_edit")
async def edit_page(
    resource: str,
    record_id: str,
    request: Request,
    catalog: ResourceCatalog = Depends(get_resource_catalog),
    tenant: TenantContext = Depends(get_tenant_context),
    service: FormViewService = Depends(get_form_view_service),
    sink: ToastSink = Depends(get_toast_sink),
):
    definition = _definition(catalog, resource)
    state = await service.edit_form(definition, record_id, tenant)
    if state.toast is not None:
        sink.push(state.toast)
        return _to_list(request, definition)
    return _render(request, "form.html", catalog, sink, _form_context(definition, state))


@router.post("/{resource}/{record_id}/edit", response_class=HTMLResponse)
async def edit_submit(
    resource: str,
    record_id: str,
    request: Request,
    catalog: ResourceCatalog = Depends(get_resource_catalog),
    tenant: TenantContext = Depends(get_tenant_context),
    service: FormViewService = Depends(get_form_view_service),
    sink: ToastSink = Depends(get_toast_sink),
):
    definition = _definition(catalog, resource)
    form = await request.form()
    raw, files = await _read_form(form, definition)
    state = await service.submit(
        definition,
        tenant,
        raw,
        files=files,
        record_id=record_id,
        idempotency_key=form.get(IDEMPOTENCY_FIELD) or None,
    )
    if state.succeeded:
        sink.push(state.toast)
        return _to_list(request, definition)

    await service.attach_options(state, definition, tenant)
    return _render(request, "form.html", catalog, sink, _form_context(definition, state), toast=state.toast)


# ── Delete ──────────────────────────────────────────────────────────


@router.get("/{resource}/{record_id}/delete", response_class=HTMLResponse, name="resource_delete")
async def delete_page(
    resource: str,
    record_id: str,
    request: Request,
    catalog: ResourceCatalog = Depends(get_resource_catalog),
    sink: ToastSink = Depends(get_toast_sink),
) -> HTMLResponse:
    """Confirmation step; nothing is sent to the API."""
    definition = _definition(catalog, resource)
    return _render(
        request,
        "confirm_delete.html",
        catalog,
        sink,
        {"definition": definition, "record_id": record_id},
    )


@router.post("/{resource}/{record_id}/delete")
async def delete_submit(
    resource: str,
    record_id: str,
    request: Request,
    catalog: ResourceCatalog = Depends(get_resource_catalog),
    tenant: TenantContext = Depends(get_tenant_context),
    service: ListViewService = Depends(get_list_view_service),
    sink: ToastSink = Depends(get_toast_sink),
) -> RedirectResponse:
    definition = _definition(catalog, resource)
    form = await request.form()
    outcome = await service.delete_record(
        definition,
        record_id,
        tenant,
        confirmed=form.get("confirm") == "yes",
    )
    if outcome.toast is not None:
        sink.push(outcome.toast)
    return _to_list(request, definition)
