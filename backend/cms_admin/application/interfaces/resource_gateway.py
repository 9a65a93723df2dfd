"""Abstract resource gateway — port for reaching the remote CMS API.

Every operation takes the ResourceDefinition (where the resource lives) and
the TenantContext (whose data it is) explicitly, and returns an ApiResult
instead of raising for remote failures.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from cms_admin.domain.entities import ApiResult, ResourceDefinition, TenantContext, UploadedFile


class ResourceGateway(ABC):
    """Port — what the list and form views need from the remote API."""

    @abstractmethod
    async def list(
        self,
        definition: ResourceDefinition,
        tenant: TenantContext,
        filters: Mapping[str, Any] | None = None,
    ) -> ApiResult[list[dict[str, Any]]]:
        """Fetch the tenant's collection of a resource."""
        ...

    @abstractmethod
    async def get_by_id(
        self,
        definition: ResourceDefinition,
        record_id: Any,
        tenant: TenantContext,
    ) -> ApiResult[dict[str, Any]]:
        """Fetch a single record."""
        ...

    @abstractmethod
    async def create(
        self,
        definition: ResourceDefinition,
        payload: Mapping[str, Any],
        tenant: TenantContext,
        *,
        files: Mapping[str, UploadedFile] | None = None,
        idempotency_key: str | None = None,
    ) -> ApiResult[Any]:
        """Create a record; JSON body, or multipart when files are attached."""
        ...

    @abstractmethod
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
        """Replace a record (PUT, full record)."""
        ...

    @abstractmethod
    async def remove(
        self,
        definition: ResourceDefinition,
        record_id: Any,
        tenant: TenantContext,
    ) -> ApiResult[None]:
        """Delete a record."""
        ...

    @abstractmethod
    async def fetch_json(self, path: str, tenant: TenantContext) -> ApiResult[Any]:
        """GET an auxiliary endpoint (e.g. dashboard stats) relative to the API base."""
        ...
