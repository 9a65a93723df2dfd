from cms_admin.infrastructure.session.tenant_resolver import resolve_tenant
from cms_admin.infrastructure.session.toast_sink import SessionToastSink

__all__ = ["SessionToastSink", "resolve_tenant"]
