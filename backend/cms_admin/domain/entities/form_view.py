"""Domain entities for create/edit form views."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from uuid import uuid4

from cms_admin.domain.entities.list_view import Option
from cms_admin.domain.entities.toast import Toast
from cms_admin.domain.entities.view_state import ViewPhase


class FormMode(str, Enum):
    CREATE = "create"
    EDIT = "edit"


@dataclass(frozen=True)
class UploadedFile:
    """A file held until submission (defer-and-attach)."""

    filename: str
    content: bytes
    content_type: str = "application/octet-stream"


def new_idempotency_key() -> str:
    return uuid4().hex


@dataclass
class FormState:
    """Values, lookup options and phase of one form view."""

    resource: str
    mode: FormMode
    values: dict[str, Any] = field(default_factory=dict)
    record_id: Any = None
    options: dict[str, list[Option]] = field(default_factory=dict)
    idempotency_key: str = field(default_factory=new_idempotency_key)
    phase: ViewPhase = ViewPhase.IDLE
    missing: list[str] = field(default_factory=list)
    toast: Toast | None = None
    saved: dict[str, Any] | None = None

    @property
    def succeeded(self) -> bool:
        return self.phase == ViewPhase.SUCCEEDED
