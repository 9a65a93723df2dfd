from .api_result import ApiError, ApiResult, ErrorKind
from .form_view import FormMode, FormState, UploadedFile, new_idempotency_key
from .list_view import DeleteOutcome, ListPage, ListQuery, Option
from .resource_definition import (
    FieldKind,
    FieldOrderRule,
    FieldSpec,
    LookupSpec,
    PreviewStyle,
    ResourceDefinition,
    SelectFilterSpec,
    ToggleFilterSpec,
)
from .tenant import TenantContext
from .toast import Toast, ToastLevel
from .view_state import ViewLifecycle, ViewPhase

__all__ = [
    "ApiError",
    "ApiResult",
    "ErrorKind",
    "FormMode",
    "FormState",
    "UploadedFile",
    "new_idempotency_key",
    "DeleteOutcome",
    "ListPage",
    "ListQuery",
    "Option",
    "FieldKind",
    "FieldOrderRule",
    "FieldSpec",
    "LookupSpec",
    "PreviewStyle",
    "ResourceDefinition",
    "SelectFilterSpec",
    "ToggleFilterSpec",
    "TenantContext",
    "Toast",
    "ToastLevel",
    "ViewLifecycle",
    "ViewPhase",
]
