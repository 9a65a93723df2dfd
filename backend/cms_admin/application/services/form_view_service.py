"""Application service (use case) for create/edit form views."""

import asyncio
import logging
from collections.abc import Mapping
from typing import Any

from cms_admin.application.interfaces import ResourceGateway
from cms_admin.application.services.form_values import (
    build_payload,
    check_field_order,
    coerce_values,
    find_missing,
    seed_values,
)
from cms_admin.application.services.list_view_service import ListViewService, as_rows
from cms_admin.application.services.lookup_resolver import lookup_options
from cms_admin.application.services.preview_builder import PreviewBuilder
from cms_admin.application.services.resource_catalog import ResourceCatalog
from cms_admin.domain.entities import (
    ApiError,
    ErrorKind,
    FormMode,
    FormState,
    Option,
    ResourceDefinition,
    TenantContext,
    Toast,
    UploadedFile,
    ViewLifecycle,
    ViewPhase,
)
from cms_admin.domain.exceptions import EntityNotFoundError, ResourceApiError

logger = logging.getLogger(__name__)


class FormViewService:
    """Seeds, validates and submits resource forms. Depends on the gateway port (DI)."""

    def __init__(self, gateway: ResourceGateway, catalog: ResourceCatalog):
        self._gateway = gateway
        self._catalog = catalog
        self._lists = ListViewService(gateway, catalog)
        self._previews = PreviewBuilder()

    # ── Initial state ───────────────────────────────────────────────

    async def new_form(self, definition: ResourceDefinition, tenant: TenantContext) -> FormState:
        """Create form: field defaults plus lookup options."""
        lifecycle = ViewLifecycle()
        lifecycle.start_loading()
        lookup_rows = await self._lists.load_lookups(definition, tenant)
        lifecycle.finish(True)
        return FormState(
            resource=definition.name,
            mode=FormMode.CREATE,
            values=seed_values(definition),
            options=self._options(definition, lookup_rows),
            phase=lifecycle.phase,
        )

    async def edit_form(
        self,
        definition: ResourceDefinition,
        record_id: Any,
        tenant: TenantContext,
    ) -> FormState:
        """Edit form: the existing record and the lookups, fetched concurrently."""
        lifecycle = ViewLifecycle()
        lifecycle.start_loading()
        record_result, lookup_rows = await asyncio.gather(
            self._gateway.get_by_id(definition, record_id, tenant),
            self._lists.load_lookups(definition, tenant),
        )

        if not record_result.ok or not isinstance(record_result.data, dict):
            error = record_result.error
            logger.warning(
                "Failed to load %s %s: %s",
                definition.name,
                record_id,
                error.message if error else "unexpected payload",
            )
            lifecycle.finish(False)
            return FormState(
                resource=definition.name,
                mode=FormMode.EDIT,
                record_id=record_id,
                phase=lifecycle.phase,
                toast=Toast.error(f"Failed to load {definition.singular.lower()}"),
            )

        lifecycle.finish(True)
        return FormState(
            resource=definition.name,
            mode=FormMode.EDIT,
            record_id=record_id,
            values=seed_values(definition, record_result.data),
            options=self._options(definition, lookup_rows),
            phase=lifecycle.phase,
        )

    async def get_record(
        self,
        definition: ResourceDefinition,
        record_id: Any,
        tenant: TenantContext,
    ) -> dict[str, Any]:
        """Fetch one record.

        Raises:
            EntityNotFoundError: the API has no such record.
            ResourceApiError: any other remote failure.
        """
        result = await self._gateway.get_by_id(definition, record_id, tenant)
        if result.error is not None and result.error.kind == ErrorKind.NOT_FOUND:
            raise EntityNotFoundError(definition.singular, record_id)
        record = result.unwrap(definition.name)
        if record is None:
            raise EntityNotFoundError(definition.singular, record_id)
        if not isinstance(record, dict):
            raise ResourceApiError(
                definition.name,
                ApiError(ErrorKind.DECODE, f"Expected one {definition.singular.lower()} record"),
            )
        return record

    async def attach_options(
        self,
        state: FormState,
        definition: ResourceDefinition,
        tenant: TenantContext,
    ) -> FormState:
        """Reload select options, e.g. to re-render a rejected submission."""
        lookup_rows = await self._lists.load_lookups(definition, tenant)
        state.options = self._options(definition, lookup_rows)
        return state

    def _options(
        self,
        definition: ResourceDefinition,
        lookup_rows: Mapping[str, list[dict[str, Any]]],
    ) -> dict[str, list[Option]]:
        options: dict[str, list[Option]] = {}
        for spec in definition.fields:
            if spec.lookup:
                lookup = definition.lookup(spec.lookup)
                options[spec.name] = lookup_options(lookup, as_rows(lookup_rows.get(spec.lookup)))
            elif spec.choices:
                options[spec.name] = [(c, c) for c in spec.choices]
        return options

    # ── Submission ──────────────────────────────────────────────────

    async def submit(
        self,
        definition: ResourceDefinition,
        tenant: TenantContext,
        raw_values: Mapping[str, Any],
        *,
        files: Mapping[str, UploadedFile] | None = None,
        record_id: Any = None,
        idempotency_key: str | None = None,
    ) -> FormState:
        """Validate, then create (no ``record_id``) or replace the record.

        Validation failures return without any call to the API.
        """
        mode = FormMode.EDIT if record_id is not None else FormMode.CREATE
        files = {name: f for name, f in (files or {}).items() if f.content}
        values, messages = coerce_values(definition, raw_values)
        state = FormState(resource=definition.name, mode=mode, values=values, record_id=record_id)
        if idempotency_key:
            state.idempotency_key = idempotency_key

        missing = find_missing(definition, values, files, editing=mode == FormMode.EDIT)
        messages.extend(check_field_order(definition, values))
        if missing or messages:
            state.phase = ViewPhase.READY
            state.missing = missing
            parts = []
            if missing:
                parts.append("Please fill in all required fields: " + ", ".join(missing))
            parts.extend(messages)
            state.toast = Toast.error(". ".join(parts))
            return state

        lifecycle = ViewLifecycle()
        lifecycle.start_submitting()
        payload = build_payload(definition, values, tenant, include_empty=mode == FormMode.EDIT)

        if mode == FormMode.EDIT:
            result = await self._gateway.update(
                definition, record_id, payload, tenant,
                files=files or None, idempotency_key=state.idempotency_key,
            )
        else:
            result = await self._gateway.create(
                definition, payload, tenant,
                files=files or None, idempotency_key=state.idempotency_key,
            )

        verb = "updated" if mode == FormMode.EDIT else "created"
        if result.ok:
            lifecycle.finish(True)
            state.phase = lifecycle.phase
            state.saved = result.data if isinstance(result.data, dict) else None
            state.toast = Toast.success(f"{definition.singular} {verb} successfully")
            logger.info("%s %s for org %s", definition.singular, verb, tenant.org_code)
            return state

        lifecycle.finish(False)
        state.phase = lifecycle.phase
        state.toast = Toast.error(
            f"Failed to {'update' if mode == FormMode.EDIT else 'create'} {definition.singular.lower()}"
        )
        logger.warning(
            "Submit of %s failed (%s %s): %s",
            definition.name,
            result.error.kind.value,
            result.error.status_code,
            result.error.message,
        )
        return state

    def preview_values(self, definition: ResourceDefinition, raw_values: Mapping[str, Any]) -> dict[str, Any]:
        """Coerced values for the live preview, identical to what submit would send."""
        values, _ = coerce_values(definition, raw_values)
        return values

    def preview(self, definition: ResourceDefinition, raw_values: Mapping[str, Any]) -> dict[str, Any] | None:
        """Live preview of the unsaved form, or None when the resource has none."""
        return self._previews.build_form_preview(definition, self.preview_values(definition, raw_values))
