"""Pydantic schemas for the YAML resource catalog and its JSON representation."""

from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from cms_admin.domain.entities import (
    FieldKind,
    FieldOrderRule,
    FieldSpec,
    LookupSpec,
    PreviewStyle,
    ResourceDefinition,
    SelectFilterSpec,
    ToggleFilterSpec,
)


class FieldSchema(BaseModel):
    """One form field of a resource."""

    name: str = Field(..., min_length=1)
    label: str | None = None
    kind: FieldKind = FieldKind.TEXT
    required: bool = False
    default: Any = None
    lookup: str | None = None
    choices: list[str] = Field(default_factory=list)

    def to_entity(self) -> FieldSpec:
        return FieldSpec(
            name=self.name,
            label=self.label or self.name,
            kind=self.kind,
            required=self.required,
            default=self.default,
            lookup=self.lookup,
            choices=tuple(self.choices),
        )


class LookupSchema(BaseModel):
    """A lookup collection joined into list rows and select options."""

    name: str = Field(..., min_length=1)
    resource: str = Field(..., min_length=1)
    key_field: str = "Id"
    label_field: str = "Name"
    source_field: str | None = None
    target_field: str | None = None
    fallback: str = "Unknown"

    def to_entity(self) -> LookupSpec:
        return LookupSpec(**self.model_dump())


class SelectFilterSchema(BaseModel):
    field: str
    label: str | None = None
    lookup: str | None = None
    choices: list[str] = Field(default_factory=list)

    def to_entity(self) -> SelectFilterSpec:
        return SelectFilterSpec(
            field=self.field,
            label=self.label or self.field,
            lookup=self.lookup,
            choices=tuple(self.choices),
        )


class ToggleFilterSchema(BaseModel):
    field: str
    label: str | None = None

    def to_entity(self) -> ToggleFilterSpec:
        return ToggleFilterSpec(field=self.field, label=self.label or self.field)


class FieldOrderSchema(BaseModel):
    earlier: str
    later: str
    message: str | None = None

    def to_entity(self) -> FieldOrderRule:
        return FieldOrderRule(earlier=self.earlier, later=self.later, message=self.message)


class ResourceSchema(BaseModel):
    """A single resource entry in a catalog file."""

    name: str = Field(..., min_length=1, pattern=r"^[a-z0-9][a-z0-9\-]*$")
    label: str
    singular: str | None = None
    endpoint: str = Field(..., min_length=1)
    list_endpoint: str | None = None
    item_endpoint: str | None = None
    update_endpoint: str | None = None
    id_field: str = "id"
    tenant_field: str = "OrgCode"
    tenant_param: str = "OrgCode"
    tenant_scoped: bool = True
    fields: list[FieldSchema] = Field(default_factory=list)
    lookups: list[LookupSchema] = Field(default_factory=list)
    search_fields: list[str] = Field(default_factory=list)
    select_filters: list[SelectFilterSchema] = Field(default_factory=list)
    toggle_filters: list[ToggleFilterSchema] = Field(default_factory=list)
    field_order: list[FieldOrderSchema] = Field(default_factory=list)
    read_only: list[str] = Field(default_factory=list)
    columns: list[str] = Field(default_factory=list)
    page_size: int | None = Field(None, gt=0)
    empty_message: str | None = None
    preview: PreviewStyle | None = None

    @field_validator("endpoint", "list_endpoint", "item_endpoint", "update_endpoint")
    @classmethod
    def _leading_slash(cls, value: str | None) -> str | None:
        if value is not None and not value.startswith("/"):
            return "/" + value
        return value

    @model_validator(mode="after")
    def _check_references(self) -> "ResourceSchema":
        field_names = {f.name for f in self.fields}
        if len(field_names) != len(self.fields):
            raise ValueError(f"duplicate field names in '{self.name}'")

        lookup_names = {lk.name for lk in self.lookups}
        for spec in self.fields:
            if spec.lookup and spec.lookup not in lookup_names:
                raise ValueError(f"field '{spec.name}' references unknown lookup '{spec.lookup}'")
        for flt in self.select_filters:
            if flt.lookup and flt.lookup not in lookup_names:
                raise ValueError(f"filter '{flt.field}' references unknown lookup '{flt.lookup}'")
        for rule in self.field_order:
            for name in (rule.earlier, rule.later):
                if name not in field_names:
                    raise ValueError(f"field_order references unknown field '{name}'")
        return self

    def to_entity(self, group: str) -> ResourceDefinition:
        return ResourceDefinition(
            name=self.name,
            label=self.label,
            singular=self.singular or self.label.rstrip("s"),
            endpoint=self.endpoint,
            group=group,
            list_endpoint=self.list_endpoint,
            item_endpoint=self.item_endpoint,
            update_endpoint=self.update_endpoint,
            id_field=self.id_field,
            tenant_field=self.tenant_field,
            tenant_param=self.tenant_param,
            tenant_scoped=self.tenant_scoped,
            fields=tuple(f.to_entity() for f in self.fields),
            lookups=tuple(lk.to_entity() for lk in self.lookups),
            search_fields=tuple(self.search_fields),
            select_filters=tuple(f.to_entity() for f in self.select_filters),
            toggle_filters=tuple(t.to_entity() for t in self.toggle_filters),
            field_order=tuple(r.to_entity() for r in self.field_order),
            read_only=tuple(self.read_only),
            columns=tuple(self.columns),
            page_size=self.page_size,
            empty_message=self.empty_message,
            preview=self.preview,
        )


class CatalogFileSchema(BaseModel):
    """Top-level structure of one catalog YAML file."""

    group: str
    resources: list[ResourceSchema] = Field(default_factory=list)


# ── JSON API responses ───────────────────────────────────────────────


class ResourceSummaryResponse(BaseModel):
    name: str
    label: str
    singular: str
    group: str


class ResourceDefinitionResponse(BaseModel):
    """A resource definition as exposed by the JSON API."""

    name: str
    label: str
    singular: str
    group: str
    id_field: str
    fields: list[FieldSchema]
    lookups: list[LookupSchema]
    search_fields: list[str]
    select_filters: list[SelectFilterSchema]
    toggle_filters: list[ToggleFilterSchema]
    columns: list[str]
    page_size: int | None
    preview: PreviewStyle | None

    @classmethod
    def from_entity(cls, definition: ResourceDefinition) -> "ResourceDefinitionResponse":
        return cls(
            name=definition.name,
            label=definition.label,
            singular=definition.singular,
            group=definition.group,
            id_field=definition.id_field,
            fields=[
                FieldSchema(
                    name=f.name,
                    label=f.label,
                    kind=f.kind,
                    required=f.required,
                    default=f.default,
                    lookup=f.lookup,
                    choices=list(f.choices),
                )
                for f in definition.fields
            ],
            lookups=[LookupSchema(**vars(lk)) for lk in definition.lookups],
            search_fields=list(definition.search_fields),
            select_filters=[
                SelectFilterSchema(field=s.field, label=s.label, lookup=s.lookup, choices=list(s.choices))
                for s in definition.select_filters
            ],
            toggle_filters=[ToggleFilterSchema(field=t.field, label=t.label) for t in definition.toggle_filters],
            columns=definition.display_columns,
            page_size=definition.page_size,
            preview=definition.preview,
        )
