"""HTTP resource gateway — implements the ResourceGateway port over httpx.

Talks to the remote CMS API (``settings.api_base_url``). Endpoint paths come
from the resource catalog and may contain ``{org_code}`` and ``{id}``
placeholders; when a read/delete path does not embed the organization, it is
sent as the ``OrgCode`` query parameter instead.
"""

import json
import logging
from collections.abc import Mapping
from typing import Any

import httpx

from cms_admin.application.interfaces import ResourceGateway
from cms_admin.domain.entities import (
    ApiResult,
    ErrorKind,
    ResourceDefinition,
    TenantContext,
    UploadedFile,
)
from cms_admin.infrastructure.http.envelope import normalize_response
from cms_admin.infrastructure.logging.colored_logger import GatewayCall, GatewayLogger

logger = logging.getLogger(__name__)


def _form_value(value: Any) -> str:
    """Render a payload value as a multipart text part."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        return json.dumps(value)
    return str(value)


class HttpResourceGateway(ResourceGateway):
    """Infrastructure adapter — connects the dashboard to the CMS REST API.

    No cache and no retry: each call is exactly one HTTP request.
    """

    def __init__(
        self,
        base_url: str,
        *,
        token: str | None = None,
        timeout: float = 15.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._token = token
        self._timeout = timeout
        self._http_client = http_client
        self._log = GatewayLogger(__name__)

    def _headers(self, tenant: TenantContext, idempotency_key: str | None = None) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        token = tenant.token or self._token
        if token:
            headers["Authorization"] = f"Bearer {token}"
        if idempotency_key:
            headers["Idempotency-Key"] = idempotency_key
        return headers

    def _resolve(
        self,
        template: str,
        definition: ResourceDefinition,
        tenant: TenantContext,
        record_id: Any = None,
        *,
        scope_query: bool = True,
    ) -> tuple[str, dict[str, Any]]:
        """Fill path placeholders; returns the absolute URL and query params."""
        path = template.format(org_code=tenant.org_code, id=record_id)
        params: dict[str, Any] = {}
        if scope_query and definition.tenant_scoped and "{org_code}" not in template:
            params[definition.tenant_param] = tenant.org_code
        return f"{self._base_url}{path}", params

    def _item_template(self, definition: ResourceDefinition) -> str:
        return definition.item_endpoint or f"{definition.endpoint.rstrip('/')}/{{id}}"

    async def _get_client(self) -> httpx.AsyncClient:
        """Return the injected client or create a new one."""
        if self._http_client is not None:
            return self._http_client
        return httpx.AsyncClient(timeout=self._timeout)

    async def _send(
        self,
        call: tuple[str, str, str],
        resource: str,
        method: str,
        url: str,
        *,
        headers: dict[str, str],
        params: Mapping[str, Any] | None = None,
        json_body: Any = None,
        data: Mapping[str, str] | None = None,
        files: Mapping[str, tuple[str, bytes, str]] | None = None,
    ) -> ApiResult[Any]:
        client = await self._get_client()
        should_close = self._http_client is None
        try:
            with self._log.timed_call(call, resource, method=method) as trace:
                response = await client.request(
                    method,
                    url,
                    params=params or None,
                    headers=headers,
                    json=json_body,
                    data=data,
                    files=files,
                )
                trace.status_code = response.status_code
        except httpx.HTTPError as exc:
            return ApiResult.failure(ErrorKind.NETWORK, str(exc) or type(exc).__name__)
        finally:
            if should_close:
                await client.aclose()
        return normalize_response(response)

    async def _write(
        self,
        call: tuple[str, str, str],
        method: str,
        url: str,
        definition: ResourceDefinition,
        payload: Mapping[str, Any],
        tenant: TenantContext,
        files: Mapping[str, UploadedFile] | None,
        idempotency_key: str | None,
    ) -> ApiResult[Any]:
        headers = self._headers(tenant, idempotency_key)
        if not files:
            return await self._send(
                call, definition.name, method, url, headers=headers, json_body=dict(payload)
            )

        data = {
            key: _form_value(value)
            for key, value in payload.items()
            if value is not None and key not in files
        }
        parts = {name: (f.filename, f.content, f.content_type) for name, f in files.items()}
        return await self._send(
            call, definition.name, method, url, headers=headers, data=data, files=parts
        )

    # ── ResourceGateway ─────────────────────────────────────────────

    async def list(
        self,
        definition: ResourceDefinition,
        tenant: TenantContext,
        filters: Mapping[str, Any] | None = None,
    ) -> ApiResult[list[dict[str, Any]]]:
        url, params = self._resolve(definition.list_endpoint or definition.endpoint, definition, tenant)
        if filters:
            params.update(filters)
        return await self._send(
            GatewayCall.LIST, definition.name, "GET", url,
            headers=self._headers(tenant), params=params,
        )

    async def get_by_id(
        self,
        definition: ResourceDefinition,
        record_id: Any,
        tenant: TenantContext,
    ) -> ApiResult[dict[str, Any]]:
        url, params = self._resolve(self._item_template(definition), definition, tenant, record_id)
        result = await self._send(
            GatewayCall.GET, definition.name, "GET", url,
            headers=self._headers(tenant), params=params,
        )
        if not result.ok or not isinstance(result.data, list):
            return result
        if not result.data:
            return ApiResult.failure(ErrorKind.NOT_FOUND, f"{definition.singular} {record_id} not found")
        return ApiResult.success(result.data[0], message=result.message)

    async def create(
        self,
        definition: ResourceDefinition,
        payload: Mapping[str, Any],
        tenant: TenantContext,
        *,
        files: Mapping[str, UploadedFile] | None = None,
        idempotency_key: str | None = None,
    ) -> ApiResult[Any]:
        url, _ = self._resolve(definition.endpoint, definition, tenant, scope_query=False)
        return await self._write(
            GatewayCall.CREATE, "POST", url, definition, payload, tenant, files, idempotency_key
        )

    async def update(
        self,
        definition: ResourceDefinition,
        record_id: Any,
        payload: Mapping[str, Any],
        tenant: TenantContext,
        *,
        files: Mapping[str, UploadedFile] | None = None,
        idempotency_key: str | None = None,
    ) -> ApiResult[Any]:
        template = definition.update_endpoint or self._item_template(definition)
        url, _ = self._resolve(template, definition, tenant, record_id, scope_query=False)
        return await self._write(
            GatewayCall.UPDATE, "PUT", url, definition, payload, tenant, files, idempotency_key
        )

    async def remove(
        self,
        definition: ResourceDefinition,
        record_id: Any,
        tenant: TenantContext,
    ) -> ApiResult[None]:
        url, params = self._resolve(self._item_template(definition), definition, tenant, record_id)
        return await self._send(
            GatewayCall.DELETE, definition.name, "DELETE", url,
            headers=self._headers(tenant), params=params,
        )

    async def fetch_json(self, path: str, tenant: TenantContext) -> ApiResult[Any]:
        url = f"{self._base_url}/{path.lstrip('/')}"
        return await self._send(GatewayCall.FETCH, path, "GET", url, headers=self._headers(tenant))
