"""Tests for the resource catalog and list view JSON endpoints."""

import pytest

from cms_admin.config import Settings, get_settings
from cms_admin.domain.entities import ApiResult, ErrorKind
from cms_admin.infrastructure.dependencies import get_tenant_context


@pytest.mark.asyncio
async def test_lists_resources_in_catalog_order(http_client):
    async with http_client() as client:
        response = await client.get("/api/v1/resources")

    assert response.status_code == 200
    assert [r["name"] for r in response.json()] == ["blog-posts", "blog-authors", "blog-categories"]


@pytest.mark.asyncio
async def test_resource_definition(http_client):
    async with http_client() as client:
        response = await client.get("/api/v1/resources/blog-posts")

    data = response.json()
    assert data["singular"] == "Blog Post"
    assert [f["name"] for f in data["fields"]] == ["title", "content", "authorId", "categoryId"]
    assert data["lookups"][0]["resource"] == "blog-authors"


@pytest.mark.asyncio
async def test_unknown_resource_is_404(http_client):
    async with http_client() as client:
        response = await client.get("/api/v1/resources/widgets")

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_rows_are_joined_and_filtered(http_client):
    async with http_client() as client:
        response = await client.get("/api/v1/resources/blog-posts/rows", params={"f_categoryId": "5"})

    data = response.json()
    assert data["phase"] == "ready"
    assert data["total"] == 3
    assert [row["id"] for row in data["rows"]] == [1, 3]
    assert data["rows"][0]["AuthorName"] == "Asha"
    assert data["filter_options"]["categoryId"][0] == {"value": "5", "label": "News"}


@pytest.mark.asyncio
async def test_rows_failure_carries_toast(http_client, gateway):
    gateway.failures[("list", "blog-posts")] = ApiResult.failure(ErrorKind.NETWORK, "refused")

    async with http_client() as client:
        response = await client.get("/api/v1/resources/blog-posts/rows")

    data = response.json()
    assert response.status_code == 200
    assert data["phase"] == "failed"
    assert data["toast"]["description"] == "Failed to fetch blog posts"


@pytest.mark.asyncio
async def test_rows_without_org_scope_is_401(overridden_app, http_client):
    overridden_app.dependency_overrides.pop(get_tenant_context)
    overridden_app.dependency_overrides[get_settings] = lambda: Settings(_env_file=None, default_org_code="")

    async with http_client() as client:
        response = await client.get("/api/v1/resources/blog-posts/rows")

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_single_record(http_client):
    async with http_client() as client:
        found = await client.get("/api/v1/resources/blog-authors/records/4")
        missing = await client.get("/api/v1/resources/blog-authors/records/40")

    assert found.json() == {"Id": 4, "Name": "Ravi"}
    assert missing.status_code == 404
    assert missing.json()["detail"] == "Author with id '40' not found"


@pytest.mark.asyncio
async def test_single_record_remote_failure_is_502(http_client, gateway):
    gateway.failures[("get", "blog-authors")] = ApiResult.failure(ErrorKind.HTTP_STATUS, "upstream down", 500)

    async with http_client() as client:
        response = await client.get("/api/v1/resources/blog-authors/records/4")

    assert response.status_code == 502
    assert response.json()["detail"] == "upstream down"


@pytest.mark.asyncio
async def test_single_record_empty_success_is_404(http_client, gateway):
    gateway.failures[("get", "blog-authors")] = ApiResult.success(None)

    async with http_client() as client:
        response = await client.get("/api/v1/resources/blog-authors/records/4")

    assert response.status_code == 404
    assert response.json()["detail"] == "Author with id '4' not found"


@pytest.mark.asyncio
async def test_single_record_non_object_payload_is_502(http_client, gateway):
    gateway.failures[("get", "blog-authors")] = ApiResult.success("OK")

    async with http_client() as client:
        response = await client.get("/api/v1/resources/blog-authors/records/4")

    assert response.status_code == 502
    assert response.json()["detail"] == "Expected one author record"
