"""Domain-specific exceptions — framework-independent."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cms_admin.domain.entities.api_result import ApiError


class EntityNotFoundError(Exception):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class UnknownResourceError(Exception):
    """Raised when a resource name is not present in the catalog."""

    def __init__(self, resource_name: str):
        self.resource_name = resource_name
        super().__init__(f"Unknown resource '{resource_name}'")


class CatalogError(Exception):
    """Raised when a resource catalog file is malformed or inconsistent."""

    def __init__(self, source: str, message: str):
        self.source = source
        self.message = message
        super().__init__(f"[{source}] {message}")


class ResourceApiError(Exception):
    """Raised when a remote API call fails and the caller needs its value.

    Wraps the normalized ApiError so the failure kind and status survive.
    """

    def __init__(self, resource: str, error: ApiError):
        self.resource = resource
        self.error = error
        status = error.status_code if error.status_code is not None else "-"
        super().__init__(f"[{resource}] {error.kind.value} {status}: {error.message}")


class InvalidTransitionError(Exception):
    """Raised when a view lifecycle is asked to move to an unreachable phase."""

    def __init__(self, current: str, target: str):
        self.current = current
        self.target = target
        super().__init__(f"Cannot move view from '{current}' to '{target}'")


class TenantMissingError(Exception):
    """Raised when a request carries no organization scope."""

    def __init__(self) -> None:
        super().__init__("No organization scope (OrgCode) is available for this request")
