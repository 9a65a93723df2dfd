"""Pydantic DTOs for the list view JSON representation."""

from typing import Any

from pydantic import BaseModel

from cms_admin.domain.entities import ListPage, Toast, ViewPhase


class ToastResponse(BaseModel):
    level: str
    title: str
    description: str

    @classmethod
    def from_entity(cls, toast: Toast) -> "ToastResponse":
        return cls(**toast.to_dict())


class OptionResponse(BaseModel):
    value: str
    label: str


class ListPageResponse(BaseModel):
    """List view model returned by ``GET /api/v1/resources/{name}/rows``."""

    resource: str
    phase: ViewPhase
    rows: list[dict[str, Any]]
    total: int
    matched: int
    page: int
    pages: int
    empty_message: str | None = None
    filter_options: dict[str, list[OptionResponse]] = {}
    preview: dict[str, Any] | None = None
    toast: ToastResponse | None = None

    @classmethod
    def from_entity(cls, page: ListPage) -> "ListPageResponse":
        return cls(
            resource=page.resource,
            phase=page.phase,
            rows=page.rows,
            total=page.total,
            matched=page.matched,
            page=page.page,
            pages=page.pages,
            empty_message=page.empty_message,
            filter_options={
                name: [OptionResponse(value=v, label=lbl) for v, lbl in options]
                for name, options in page.filter_options.items()
            },
            preview=page.preview,
            toast=ToastResponse.from_entity(page.toast) if page.toast else None,
        )
