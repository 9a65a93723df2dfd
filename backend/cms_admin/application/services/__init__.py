from .dashboard_service import DashboardOverview, DashboardService
from .form_view_service import FormViewService
from .list_view_service import ListViewService
from .preview_builder import PreviewBuilder
from .resource_catalog import CatalogLoader, ResourceCatalog

__all__ = [
    "DashboardOverview",
    "DashboardService",
    "FormViewService",
    "ListViewService",
    "PreviewBuilder",
    "CatalogLoader",
    "ResourceCatalog",
]
