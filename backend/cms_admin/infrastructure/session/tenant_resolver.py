"""Resolves the organization scope of a request.

The external auth collaborator stores ``{"org_code", "user_id", "user_name",
"token"}`` under the session key ``tenant``. A trusted upstream proxy may
send ``X-Org-Code`` instead. The configured default applies last.
"""

from collections.abc import Mapping
from typing import Any

from cms_admin.domain.entities import TenantContext
from cms_admin.domain.exceptions import TenantMissingError

SESSION_KEY = "tenant"
ORG_CODE_HEADER = "X-Org-Code"


def _clean(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def resolve_tenant(
    session: Mapping[str, Any],
    headers: Mapping[str, str],
    default_org_code: str | None = None,
) -> TenantContext:
    """Build the TenantContext for one request, or raise TenantMissingError."""
    stored = session.get(SESSION_KEY)
    if isinstance(stored, Mapping):
        org_code = _clean(stored.get("org_code") or stored.get("OrgCode"))
        if org_code:
            return TenantContext(
                org_code=org_code,
                user_id=_clean(stored.get("user_id")),
                user_name=_clean(stored.get("user_name")),
                token=_clean(stored.get("token")),
            )

    header_code = _clean(headers.get(ORG_CODE_HEADER))
    if header_code:
        return TenantContext(org_code=header_code)

    fallback = _clean(default_org_code)
    if fallback:
        return TenantContext(org_code=fallback)

    raise TenantMissingError()
