"""Unit tests for the DashboardService."""

import pytest

from cms_admin.application.services import DashboardService
from cms_admin.domain.entities import ApiResult, ErrorKind


@pytest.mark.asyncio
async def test_overview_has_groups_and_numeric_stats(gateway, catalog, tenant):
    gateway.json["/stats/admin/1000"] = {"posts": "12", "authors": 2, "label": "n/a"}
    service = DashboardService(gateway, catalog, "/stats/admin/{org_code}")

    overview = await service.overview(tenant)

    assert list(overview.groups) == ["Blog"]
    assert overview.stats == {"posts": 12, "authors": 2}


@pytest.mark.asyncio
async def test_stats_failure_is_empty(gateway, catalog, tenant):
    gateway.failures[("fetch", "/stats/admin/1000")] = ApiResult.failure(ErrorKind.HTTP_STATUS, "down", 503)
    service = DashboardService(gateway, catalog, "/stats/admin/{org_code}")

    assert await service.stats(tenant) == {}


@pytest.mark.asyncio
async def test_no_stats_endpoint_makes_no_call(gateway, catalog, tenant):
    service = DashboardService(gateway, catalog)

    assert await service.stats(tenant) == {}
    assert gateway.calls == []
