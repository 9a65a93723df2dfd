"""Pure predicates and transforms applied to fetched list rows.

Nothing here touches the network; the list view recomputes its visible rows
from the fetched collection on every request.
"""

import math
from collections.abc import Iterable, Sequence
from typing import Any

from cms_admin.domain.entities import ListQuery, ResourceDefinition

_TRUTHY = frozenset({"true", "1", "yes", "y", "on", "active"})
_ALL = ("", "all")


def is_truthy(value: Any) -> bool:
    """Interpret the API's many spellings of an active/featured flag."""
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() in _TRUTHY
    return False


def matches_search(record: dict[str, Any], term: str, fields: Iterable[str]) -> bool:
    """Case-insensitive substring match of ``term`` against any of ``fields``."""
    needle = term.strip().lower()
    if not needle:
        return True
    for name in fields:
        value = record.get(name)
        if value is None:
            continue
        if needle in str(value).lower():
            return True
    return False


def matches_select(record: dict[str, Any], field: str, value: str | None) -> bool:
    """String equality on one field; ``"all"`` or empty disables the filter."""
    if value is None or value in _ALL:
        return True
    current = record.get(field)
    return current is not None and str(current) == str(value)


def searchable_fields(definition: ResourceDefinition) -> list[str]:
    """Declared search fields plus the display names joined from lookups."""
    names = list(definition.search_fields)
    for lookup in definition.lookups:
        if lookup.target_field and lookup.target_field not in names:
            names.append(lookup.target_field)
    return names


def apply_filters(
    records: Sequence[dict[str, Any]],
    definition: ResourceDefinition,
    query: ListQuery,
) -> list[dict[str, Any]]:
    """Return the subset of ``records`` matching search, selects and toggles."""
    fields = searchable_fields(definition)
    toggles = [t.field for t in definition.toggle_filters if t.field in query.toggles]
    selects = {
        f.field: query.selects.get(f.field)
        for f in definition.select_filters
        if query.selects.get(f.field) not in (None, *_ALL)
    }

    result = []
    for record in records:
        if not matches_search(record, query.search, fields):
            continue
        if not all(matches_select(record, name, value) for name, value in selects.items()):
            continue
        if not all(is_truthy(record.get(name)) for name in toggles):
            continue
        result.append(record)
    return result


def _sort_key(value: Any) -> tuple[int, Any]:
    if isinstance(value, bool):
        return (0, int(value))
    if isinstance(value, (int, float)):
        return (0, value)
    return (1, str(value).lower())


def sort_records(
    records: Sequence[dict[str, Any]],
    field: str,
    descending: bool = False,
) -> list[dict[str, Any]]:
    """Sort by one field; records without a value always go last."""
    present = [r for r in records if r.get(field) is not None]
    missing = [r for r in records if r.get(field) is None]
    present.sort(key=lambda r: _sort_key(r.get(field)), reverse=descending)
    return present + missing


def paginate(
    records: Sequence[dict[str, Any]],
    page: int,
    page_size: int | None,
) -> tuple[list[dict[str, Any]], int, int]:
    """Slice one page. Returns ``(rows, page, pages)`` with page clamped to range."""
    if not page_size:
        return list(records), 1, 1
    pages = max(1, math.ceil(len(records) / page_size))
    page = min(max(1, page), pages)
    start = (page - 1) * page_size
    return list(records[start : start + page_size]), page, pages
