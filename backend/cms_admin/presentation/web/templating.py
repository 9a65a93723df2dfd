"""Jinja2 environment for the dashboard pages."""

from pathlib import Path
from typing import Any

from fastapi.templating import Jinja2Templates

_TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"
_CELL_LIMIT = 80


def format_cell(value: Any) -> str:
    """Table cell text: booleans as Yes/No, blanks empty, long text shortened."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "Yes" if value else "No"
    text = str(value)
    if len(text) > _CELL_LIMIT:
        return text[: _CELL_LIMIT - 1] + "…"
    return text


def is_checked(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"true", "1", "yes", "on", "active"}
    return bool(value)


def get_templates() -> Jinja2Templates:
    templates = Jinja2Templates(directory=str(_TEMPLATES_DIR))
    templates.env.filters["cell"] = format_cell
    templates.env.filters["checked"] = is_checked
    return templates


templates = get_templates()
