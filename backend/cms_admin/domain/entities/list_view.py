"""Domain entities for the list view: query in, page out."""

from dataclasses import dataclass, field
from typing import Any

from cms_admin.domain.entities.toast import Toast
from cms_admin.domain.entities.view_state import ViewPhase

# (value, label) pairs for a select input
Option = tuple[str, str]


@dataclass(frozen=True)
class ListQuery:
    """Search, filter, sort and page parameters of a list view."""

    search: str = ""
    selects: dict[str, str] = field(default_factory=dict)
    toggles: frozenset[str] = frozenset()
    sort: str | None = None
    descending: bool = False
    page: int = 1


@dataclass
class ListPage:
    """What a list view renders after load + filter."""

    resource: str
    phase: ViewPhase
    rows: list[dict[str, Any]] = field(default_factory=list)
    total: int = 0
    matched: int = 0
    page: int = 1
    pages: int = 1
    empty_message: str | None = None
    filter_options: dict[str, list[Option]] = field(default_factory=dict)
    preview: dict[str, Any] | None = None
    toast: Toast | None = None

    @property
    def is_empty(self) -> bool:
        return not self.rows


@dataclass(frozen=True)
class DeleteOutcome:
    """Result of a row delete action."""

    performed: bool
    succeeded: bool = False
    toast: Toast | None = None
