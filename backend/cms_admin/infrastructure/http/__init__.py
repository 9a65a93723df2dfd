from cms_admin.infrastructure.http.envelope import normalize_response, unwrap_envelope
from cms_admin.infrastructure.http.resource_api_client import HttpResourceGateway

__all__ = ["HttpResourceGateway", "normalize_response", "unwrap_envelope"]
