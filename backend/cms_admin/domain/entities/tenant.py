"""Domain entity for the organization scope of a request."""

from dataclasses import dataclass


@dataclass(frozen=True)
class TenantContext:
    """The authenticated user's organization scope.

    Established by the external auth collaborator and passed explicitly to
    every gateway call; nothing in the dashboard mutates it.
    """

    org_code: str
    user_id: str | None = None
    user_name: str | None = None
    token: str | None = None

    @property
    def org_code_value(self) -> int | str:
        """OrgCode as the API expects it in JSON bodies (numeric when possible)."""
        try:
            return int(self.org_code)
        except (TypeError, ValueError):
            return self.org_code
