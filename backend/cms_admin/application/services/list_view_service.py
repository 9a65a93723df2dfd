"""Application service (use case) for resource list views."""

import asyncio
import logging
from typing import Any

from cms_admin.application.interfaces import ResourceGateway
from cms_admin.application.services.lookup_resolver import (
    distinct_options,
    join_lookups,
    lookup_options,
)
from cms_admin.application.services.preview_builder import PreviewBuilder
from cms_admin.application.services.record_filters import apply_filters, paginate, sort_records
from cms_admin.application.services.resource_catalog import ResourceCatalog
from cms_admin.domain.entities import (
    ApiResult,
    DeleteOutcome,
    ListPage,
    ListQuery,
    Option,
    ResourceDefinition,
    TenantContext,
    Toast,
    ViewLifecycle,
)

logger = logging.getLogger(__name__)


def as_rows(data: Any) -> list[dict[str, Any]]:
    """Tolerate list endpoints that answer with one object or nothing."""
    if data is None:
        return []
    if isinstance(data, dict):
        return [data]
    if isinstance(data, list):
        return [row for row in data if isinstance(row, dict)]
    return []


class ListViewService:
    """Loads, joins and filters a resource collection. Depends on the gateway port (DI)."""

    def __init__(
        self,
        gateway: ResourceGateway,
        catalog: ResourceCatalog,
        preview_builder: PreviewBuilder | None = None,
    ):
        self._gateway = gateway
        self._catalog = catalog
        self._previews = preview_builder or PreviewBuilder()

    async def load_lookups(
        self,
        definition: ResourceDefinition,
        tenant: TenantContext,
    ) -> dict[str, list[dict[str, Any]]]:
        """Fetch every lookup collection concurrently; a failed lookup is empty."""
        if not definition.lookups:
            return {}
        results = await asyncio.gather(
            *(self._gateway.list(self._catalog.get(lk.resource), tenant) for lk in definition.lookups)
        )
        return self._collect_lookups(definition, results)

    def _collect_lookups(
        self,
        definition: ResourceDefinition,
        results: list[ApiResult[Any]],
    ) -> dict[str, list[dict[str, Any]]]:
        rows: dict[str, list[dict[str, Any]]] = {}
        for lookup, result in zip(definition.lookups, results):
            if result.ok:
                rows[lookup.name] = as_rows(result.data)
            else:
                logger.warning(
                    "Lookup '%s' for %s unavailable (%s): %s",
                    lookup.name,
                    definition.name,
                    result.error.kind.value,
                    result.error.message,
                )
                rows[lookup.name] = []
        return rows

    async def load_page(
        self,
        definition: ResourceDefinition,
        tenant: TenantContext,
        query: ListQuery | None = None,
    ) -> ListPage:
        """Fetch the collection and its lookups, then filter, sort and paginate."""
        query = query or ListQuery()
        lifecycle = ViewLifecycle()
        lifecycle.start_loading()

        primary, *lookup_results = await asyncio.gather(
            self._gateway.list(definition, tenant),
            *(self._gateway.list(self._catalog.get(lk.resource), tenant) for lk in definition.lookups),
        )

        if not primary.ok:
            logger.warning(
                "Failed to fetch %s for org %s (%s %s): %s",
                definition.name,
                tenant.org_code,
                primary.error.kind.value,
                primary.error.status_code,
                primary.error.message,
            )
            lifecycle.finish(False)
            return ListPage(
                resource=definition.name,
                phase=lifecycle.phase,
                toast=Toast.error(f"Failed to fetch {definition.label.lower()}"),
            )

        lookup_rows = self._collect_lookups(definition, lookup_results)
        records = join_lookups(as_rows(primary.data), definition, lookup_rows)
        matched = apply_filters(records, definition, query)
        if query.sort:
            matched = sort_records(matched, query.sort, query.descending)
        rows, page, pages = paginate(matched, query.page, definition.page_size)

        empty_message = None
        if not rows:
            if records:
                empty_message = f"No {definition.label.lower()} match the current filters"
            else:
                empty_message = definition.empty_state

        lifecycle.finish(True)
        return ListPage(
            resource=definition.name,
            phase=lifecycle.phase,
            rows=rows,
            total=len(records),
            matched=len(matched),
            page=page,
            pages=pages,
            empty_message=empty_message,
            filter_options=self._filter_options(definition, records, lookup_rows),
            preview=self._previews.build_list_preview(definition, records),
        )

    def _filter_options(
        self,
        definition: ResourceDefinition,
        records: list[dict[str, Any]],
        lookup_rows: dict[str, list[dict[str, Any]]],
    ) -> dict[str, list[Option]]:
        options: dict[str, list[Option]] = {}
        for flt in definition.select_filters:
            if flt.lookup:
                lookup = definition.lookup(flt.lookup)
                options[flt.field] = lookup_options(lookup, lookup_rows.get(flt.lookup, []))
            elif flt.choices:
                options[flt.field] = [(c, c) for c in flt.choices]
            else:
                options[flt.field] = distinct_options(records, flt.field)
        return options

    async def delete_record(
        self,
        definition: ResourceDefinition,
        record_id: Any,
        tenant: TenantContext,
        *,
        confirmed: bool,
    ) -> DeleteOutcome:
        """Delete one row after an explicit confirmation.

        Without confirmation nothing is sent to the API.
        """
        if not confirmed:
            return DeleteOutcome(performed=False)

        result = await self._gateway.remove(definition, record_id, tenant)
        if result.ok:
            logger.info("Deleted %s %s for org %s", definition.name, record_id, tenant.org_code)
            return DeleteOutcome(
                performed=True,
                succeeded=True,
                toast=Toast.success(f"{definition.singular} deleted successfully"),
            )

        logger.warning(
            "Failed to delete %s %s (%s %s): %s",
            definition.name,
            record_id,
            result.error.kind.value,
            result.error.status_code,
            result.error.message,
        )
        return DeleteOutcome(
            performed=True,
            succeeded=False,
            toast=Toast.error(f"Failed to delete {definition.singular.lower()}"),
        )
