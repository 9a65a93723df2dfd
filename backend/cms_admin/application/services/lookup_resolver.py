"""Joins lookup collections into list rows and builds select options."""

from collections.abc import Mapping, Sequence
from typing import Any

from cms_admin.domain.entities import LookupSpec, Option, ResourceDefinition


def build_index(lookup: LookupSpec, rows: Sequence[dict[str, Any]]) -> dict[str, str]:
    """Map ``str(key)`` → label for one lookup collection."""
    index: dict[str, str] = {}
    for row in rows:
        key = row.get(lookup.key_field)
        if key is None:
            continue
        label = row.get(lookup.label_field)
        index[str(key)] = str(label) if label is not None else lookup.fallback
    return index


def lookup_options(lookup: LookupSpec, rows: Sequence[dict[str, Any]]) -> list[Option]:
    return list(build_index(lookup, rows).items())


def join_lookups(
    records: Sequence[dict[str, Any]],
    definition: ResourceDefinition,
    lookup_rows: Mapping[str, Sequence[dict[str, Any]]],
) -> list[dict[str, Any]]:
    """Return copies of ``records`` with each lookup's display name filled in.

    A display name already supplied by the API wins; a foreign key with no
    matching lookup row gets the lookup's fallback literal.
    """
    joinable = [lk for lk in definition.lookups if lk.source_field and lk.target_field]
    indexes = {lk.name: build_index(lk, lookup_rows.get(lk.name, ())) for lk in joinable}

    joined = []
    for record in records:
        row = dict(record)
        for lookup in joinable:
            if row.get(lookup.target_field) not in (None, ""):
                continue
            key = row.get(lookup.source_field)
            label = indexes[lookup.name].get(str(key)) if key is not None else None
            row[lookup.target_field] = label if label is not None else lookup.fallback
        joined.append(row)
    return joined


def distinct_options(records: Sequence[dict[str, Any]], field: str) -> list[Option]:
    """Options derived from the values present in the data, sorted."""
    values = sorted({str(r[field]) for r in records if r.get(field) not in (None, "")})
    return [(v, v) for v in values]
