"""Shared fixtures: an in-memory gateway and a small blog catalog."""

from collections.abc import Mapping
from typing import Any

import pytest

from cms_admin.application.interfaces import ResourceGateway
from cms_admin.application.services import ResourceCatalog
from cms_admin.domain.entities import (
    ApiResult,
    ErrorKind,
    FieldKind,
    FieldSpec,
    LookupSpec,
    ResourceDefinition,
    SelectFilterSpec,
    TenantContext,
    ToggleFilterSpec,
    UploadedFile,
)


class FakeResourceGateway(ResourceGateway):
    """In-memory fake of the remote CMS API for unit testing.

    ``collections`` holds rows per resource name; ``failures`` maps
    ``(operation, resource)`` to the failed result that call should return.
    Every call is recorded in ``calls``.
    """

    def __init__(self):
        self.collections: dict[str, list[dict[str, Any]]] = {}
        self.failures: dict[tuple[str, str], ApiResult[Any]] = {}
        self.json: dict[str, Any] = {}
        self.calls: list[tuple[str, str, dict[str, Any]]] = []
        self._next_id = 100

    def _record(self, operation: str, resource: str, **details: Any) -> ApiResult[Any] | None:
        self.calls.append((operation, resource, details))
        return self.failures.get((operation, resource))

    def calls_for(self, operation: str) -> list[tuple[str, str, dict[str, Any]]]:
        return [c for c in self.calls if c[0] == operation]

    async def list(
        self,
        definition: ResourceDefinition,
        tenant: TenantContext,
        filters: Mapping[str, Any] | None = None,
    ) -> ApiResult[list[dict[str, Any]]]:
        failure = self._record("list", definition.name, org_code=tenant.org_code)
        if failure is not None:
            return failure
        return ApiResult.success([dict(r) for r in self.collections.get(definition.name, [])])

    async def get_by_id(
        self,
        definition: ResourceDefinition,
        record_id: Any,
        tenant: TenantContext,
    ) -> ApiResult[dict[str, Any]]:
        failure = self._record("get", definition.name, record_id=record_id)
        if failure is not None:
            return failure
        for row in self.collections.get(definition.name, []):
            if str(row.get(definition.id_field)) == str(record_id):
                return ApiResult.success(dict(row))
        return ApiResult.failure(ErrorKind.NOT_FOUND, "not found", 404)

    async def create(
        self,
        definition: ResourceDefinition,
        payload: Mapping[str, Any],
        tenant: TenantContext,
        *,
        files: Mapping[str, UploadedFile] | None = None,
        idempotency_key: str | None = None,
    ) -> ApiResult[Any]:
        failure = self._record(
            "create", definition.name,
            payload=dict(payload), files=dict(files or {}), idempotency_key=idempotency_key,
        )
        if failure is not None:
            return failure
        record = {definition.id_field: self._next_id, **payload}
        self._next_id += 1
        self.collections.setdefault(definition.name, []).append(record)
        return ApiResult.success(record, message="Created")

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
        failure = self._record(
            "update", definition.name,
            record_id=record_id, payload=dict(payload), files=dict(files or {}),
            idempotency_key=idempotency_key,
        )
        if failure is not None:
            return failure
        rows = self.collections.get(definition.name, [])
        for index, row in enumerate(rows):
            if str(row.get(definition.id_field)) == str(record_id):
                rows[index] = {**row, **payload}
                return ApiResult.success(rows[index])
        return ApiResult.failure(ErrorKind.NOT_FOUND, "not found", 404)

    async def remove(
        self,
        definition: ResourceDefinition,
        record_id: Any,
        tenant: TenantContext,
    ) -> ApiResult[None]:
        failure = self._record("remove", definition.name, record_id=record_id)
        if failure is not None:
            return failure
        rows = self.collections.get(definition.name, [])
        self.collections[definition.name] = [
            r for r in rows if str(r.get(definition.id_field)) != str(record_id)
        ]
        return ApiResult.success(None)

    async def fetch_json(self, path: str, tenant: TenantContext) -> ApiResult[Any]:
        failure = self._record("fetch", path)
        if failure is not None:
            return failure
        if path not in self.json:
            return ApiResult.failure(ErrorKind.NOT_FOUND, "not found", 404)
        return ApiResult.success(self.json[path])


BLOG_POSTS = ResourceDefinition(
    name="blog-posts",
    label="Blog Posts",
    singular="Blog Post",
    endpoint="/blog",
    list_endpoint="/blog/org/{org_code}",
    group="Blog",
    fields=(
        FieldSpec("title", "Title", required=True),
        FieldSpec("content", "Content", FieldKind.TEXTAREA, required=True),
        FieldSpec("authorId", "Author", FieldKind.SELECT, required=True, lookup="author"),
        FieldSpec("categoryId", "Category", FieldKind.SELECT, required=True, lookup="category"),
    ),
    lookups=(
        LookupSpec("author", "blog-authors", "Id", "Name", "authorId", "AuthorName"),
        LookupSpec("category", "blog-categories", "Id", "CategoryName", "categoryId", "CategoryName"),
    ),
    search_fields=("title", "content"),
    select_filters=(SelectFilterSpec("categoryId", "Category", lookup="category"),),
    toggle_filters=(ToggleFilterSpec("featured", "Featured only"),),
    read_only=("createdAt", "updatedAt", "AuthorName", "CategoryName"),
)

BLOG_AUTHORS = ResourceDefinition(
    name="blog-authors",
    label="Blog Authors",
    singular="Author",
    endpoint="/blog/authors/upload",
    list_endpoint="/blog/authors/org/{org_code}",
    item_endpoint="/blog/authors/{id}",
    id_field="Id",
    group="Blog",
    fields=(
        FieldSpec("Name", "Name", required=True),
        FieldSpec("Img", "Image", FieldKind.FILE),
        FieldSpec("IsActive", "Active", FieldKind.BOOLEAN, default=True),
    ),
)

BLOG_CATEGORIES = ResourceDefinition(
    name="blog-categories",
    label="Blog Categories",
    singular="Category",
    endpoint="/blog/categories/upload",
    list_endpoint="/blog/categories/org/{org_code}",
    item_endpoint="/blog/category/{id}",
    id_field="Id",
    group="Blog",
    fields=(FieldSpec("CategoryName", "Category Name", required=True),),
)


@pytest.fixture
def tenant() -> TenantContext:
    return TenantContext(org_code="1000", user_id="7", user_name="Asha")


@pytest.fixture
def catalog() -> ResourceCatalog:
    return ResourceCatalog([BLOG_POSTS, BLOG_AUTHORS, BLOG_CATEGORIES])


@pytest.fixture
def gateway() -> FakeResourceGateway:
    fake = FakeResourceGateway()
    fake.collections["blog-authors"] = [{"Id": 3, "Name": "Asha"}, {"Id": 4, "Name": "Ravi"}]
    fake.collections["blog-categories"] = [
        {"Id": 5, "CategoryName": "News"},
        {"Id": 6, "CategoryName": "Guides"},
    ]
    fake.collections["blog-posts"] = [
        {"id": 1, "title": "Launch day", "content": "We are live", "authorId": 3,
         "categoryId": 5, "featured": True, "OrgCode": 1000},
        {"id": 2, "title": "Setup guide", "content": "Install the agent", "authorId": 4,
         "categoryId": 6, "featured": False, "OrgCode": 1000},
        {"id": 3, "title": "Orphan post", "content": "No author row", "authorId": 99,
         "categoryId": 5, "featured": "true", "OrgCode": 1000},
    ]
    return fake
