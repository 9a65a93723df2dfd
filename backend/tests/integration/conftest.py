"""App fixtures: the real FastAPI app with the remote API replaced by the fake gateway."""

import pytest
from httpx import ASGITransport, AsyncClient

from cms_admin.config import get_settings
from cms_admin.infrastructure.dependencies import (
    get_resource_catalog,
    get_resource_gateway,
    get_tenant_context,
)
from cms_admin.main import app


@pytest.fixture
def dashboard_url() -> str:
    return get_settings().dashboard_prefix


@pytest.fixture
def overridden_app(gateway, catalog, tenant):
    app.dependency_overrides[get_resource_catalog] = lambda: catalog
    app.dependency_overrides[get_resource_gateway] = lambda: gateway
    app.dependency_overrides[get_tenant_context] = lambda: tenant
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def http_client(overridden_app):
    """Factory for a client bound to the overridden app; use as ``async with http_client() as c``."""

    def make() -> AsyncClient:
        return AsyncClient(transport=ASGITransport(app=overridden_app), base_url="http://test")

    return make
