"""Domain entities describing one remotely managed resource type.

A ResourceDefinition is everything the generic list and form views need to
know about a resource: where it lives on the remote API, how its records are
identified, which fields the form edits, and how the list is searched,
filtered and joined against lookup collections.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class FieldKind(str, Enum):
    """Input widget / coercion rule for a form field."""

    TEXT = "text"
    TEXTAREA = "textarea"
    NUMBER = "number"
    BOOLEAN = "boolean"
    SELECT = "select"
    FILE = "file"
    COLOR = "color"
    DATE = "date"
    EMAIL = "email"
    URL = "url"
    PASSWORD = "password"


class PreviewStyle(str, Enum):
    """Markup used to render live and bulk previews."""

    MENU_BAR = "menu_bar"
    SLIDER = "slider"
    CARD = "card"


@dataclass(frozen=True)
class FieldSpec:
    """A single editable field of a resource."""

    name: str
    label: str
    kind: FieldKind = FieldKind.TEXT
    required: bool = False
    default: Any = None
    lookup: str | None = None
    choices: tuple[str, ...] = ()

    def empty_value(self) -> Any:
        """Value a fresh create form starts from when no default is declared."""
        if self.default is not None:
            return self.default
        if self.kind == FieldKind.BOOLEAN:
            return False
        if self.kind in (FieldKind.NUMBER, FieldKind.SELECT, FieldKind.FILE, FieldKind.DATE):
            return None
        return ""


@dataclass(frozen=True)
class LookupSpec:
    """A secondary collection used to resolve a foreign key to a label."""

    name: str
    resource: str
    key_field: str
    label_field: str
    source_field: str | None = None
    target_field: str | None = None
    fallback: str = "Unknown"


@dataclass(frozen=True)
class SelectFilterSpec:
    """Equality filter on one field, options from a lookup, choices or the data."""

    field: str
    label: str
    lookup: str | None = None
    choices: tuple[str, ...] = ()


@dataclass(frozen=True)
class ToggleFilterSpec:
    """Boolean "only X" filter on one field."""

    field: str
    label: str


@dataclass(frozen=True)
class FieldOrderRule:
    """Two fields where ``later`` must be strictly greater than ``earlier``."""

    earlier: str
    later: str
    message: str | None = None


@dataclass(frozen=True)
class ResourceDefinition:
    """Core domain entity describing one resource type of the remote API."""

    name: str
    label: str
    singular: str
    endpoint: str
    group: str = "General"
    list_endpoint: str | None = None
    item_endpoint: str | None = None
    update_endpoint: str | None = None
    id_field: str = "id"
    tenant_field: str = "OrgCode"
    tenant_param: str = "OrgCode"
    fields: tuple[FieldSpec, ...] = ()
    lookups: tuple[LookupSpec, ...] = ()
    search_fields: tuple[str, ...] = ()
    select_filters: tuple[SelectFilterSpec, ...] = ()
    toggle_filters: tuple[ToggleFilterSpec, ...] = ()
    field_order: tuple[FieldOrderRule, ...] = ()
    read_only: tuple[str, ...] = ()
    columns: tuple[str, ...] = ()
    page_size: int | None = None
    empty_message: str | None = None
    preview: PreviewStyle | None = None
    tenant_scoped: bool = True

    # ── Field access ────────────────────────────────────────────────

    def field(self, name: str) -> FieldSpec | None:
        for spec in self.fields:
            if spec.name == name:
                return spec
        return None

    def lookup(self, name: str) -> LookupSpec | None:
        for spec in self.lookups:
            if spec.name == name:
                return spec
        return None

    @property
    def required_fields(self) -> list[FieldSpec]:
        return [f for f in self.fields if f.required]

    @property
    def file_fields(self) -> list[FieldSpec]:
        return [f for f in self.fields if f.kind == FieldKind.FILE]

    @property
    def editable_fields(self) -> list[FieldSpec]:
        """Fields that end up in a create/update payload."""
        excluded = set(self.read_only) | {self.id_field}
        return [f for f in self.fields if f.name not in excluded]

    @property
    def display_columns(self) -> list[str]:
        """Table columns; defaults to the first four non-file fields."""
        if self.columns:
            return list(self.columns)
        hidden = (FieldKind.FILE, FieldKind.TEXTAREA, FieldKind.PASSWORD)
        names = [f.name for f in self.fields if f.kind not in hidden]
        return names[:4]

    def column_label(self, name: str) -> str:
        spec = self.field(name)
        if spec is not None:
            return spec.label
        for lookup in self.lookups:
            if lookup.target_field == name:
                return lookup.name.replace("_", " ").title()
        return name

    # ── Records ─────────────────────────────────────────────────────

    def record_id(self, record: dict[str, Any]) -> Any:
        return record.get(self.id_field)

    @property
    def empty_state(self) -> str:
        return self.empty_message or f"No {self.label.lower()} found"
