from .catalog import (
    CatalogFileSchema,
    FieldOrderSchema,
    FieldSchema,
    LookupSchema,
    ResourceDefinitionResponse,
    ResourceSchema,
    ResourceSummaryResponse,
    SelectFilterSchema,
    ToggleFilterSchema,
)
from .list_view import ListPageResponse, OptionResponse, ToastResponse

__all__ = [
    "CatalogFileSchema",
    "FieldOrderSchema",
    "FieldSchema",
    "LookupSchema",
    "ResourceDefinitionResponse",
    "ResourceSchema",
    "ResourceSummaryResponse",
    "SelectFilterSchema",
    "ToggleFilterSchema",
    "ListPageResponse",
    "OptionResponse",
    "ToastResponse",
]
