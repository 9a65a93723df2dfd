"""Application service for the dashboard home page."""

import logging
from dataclasses import dataclass, field

from cms_admin.application.interfaces import ResourceGateway
from cms_admin.application.services.resource_catalog import ResourceCatalog
from cms_admin.domain.entities import ResourceDefinition, TenantContext

logger = logging.getLogger(__name__)


@dataclass
class DashboardOverview:
    groups: dict[str, list[ResourceDefinition]]
    stats: dict[str, int] = field(default_factory=dict)


class DashboardService:
    """Navigation groups plus the tenant's headline counters."""

    def __init__(
        self,
        gateway: ResourceGateway,
        catalog: ResourceCatalog,
        stats_endpoint: str | None = None,
    ):
        self._gateway = gateway
        self._catalog = catalog
        self._stats_endpoint = stats_endpoint

    async def overview(self, tenant: TenantContext) -> DashboardOverview:
        return DashboardOverview(groups=self._catalog.groups(), stats=await self.stats(tenant))

    async def stats(self, tenant: TenantContext) -> dict[str, int]:
        """Counters from the stats endpoint; empty when unset or unavailable."""
        if not self._stats_endpoint:
            return {}
        path = self._stats_endpoint.format(org_code=tenant.org_code)
        result = await self._gateway.fetch_json(path, tenant)
        if not result.ok:
            logger.warning("Dashboard stats unavailable: %s", result.error.message)
            return {}
        if not isinstance(result.data, dict):
            return {}

        stats: dict[str, int] = {}
        for key, value in result.data.items():
            try:
                stats[key] = int(value)
            except (TypeError, ValueError):
                continue
        return stats
