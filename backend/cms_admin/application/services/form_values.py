"""Form value coercion, validation and payload building.

Raw values arrive as strings from HTML forms (or already typed, when a form
state is resubmitted as-is); each field kind has one coercion rule so that
the payload, the live preview and the re-rendered form agree.
"""

import re
from collections.abc import Mapping
from typing import Any

from cms_admin.domain.entities import (
    FieldKind,
    FieldSpec,
    ResourceDefinition,
    TenantContext,
    UploadedFile,
)

_INT_RE = re.compile(r"^-?\d+$")
_FLOAT_RE = re.compile(r"^-?\d*\.\d+$")
_CHECKED = frozenset({"true", "on", "1", "yes"})


def _coerce_number(raw: Any) -> int | float | None:
    if raw is None or isinstance(raw, bool):
        return None if raw is None else int(raw)
    if isinstance(raw, (int, float)):
        return raw
    text = str(raw).strip()
    if not text:
        return None
    if _INT_RE.match(text):
        return int(text)
    if _FLOAT_RE.match(text):
        return float(text)
    raise ValueError(text)


def coerce_value(spec: FieldSpec, raw: Any) -> Any:
    """Convert one raw form value according to the field kind.

    Raises ValueError for a number field that does not parse.
    """
    kind = spec.kind
    if kind == FieldKind.BOOLEAN:
        if isinstance(raw, bool):
            return raw
        if raw is None:
            return False
        if isinstance(raw, (int, float)):
            return raw != 0
        return str(raw).strip().lower() in _CHECKED
    if kind == FieldKind.NUMBER:
        return _coerce_number(raw)
    if kind == FieldKind.SELECT:
        if raw is None or isinstance(raw, (int, float)):
            return raw
        text = str(raw).strip()
        if not text:
            return None
        return int(text) if _INT_RE.match(text) else text
    if kind in (FieldKind.DATE, FieldKind.FILE):
        if raw is None:
            return None
        text = str(raw).strip()
        return text or None
    if raw is None or isinstance(raw, (str, int, float)):
        return raw
    return str(raw)


def coerce_values(
    definition: ResourceDefinition,
    raw: Mapping[str, Any],
) -> tuple[dict[str, Any], list[str]]:
    """Coerce every declared field. Returns ``(values, messages)``."""
    values: dict[str, Any] = {}
    messages: list[str] = []
    for spec in definition.fields:
        try:
            values[spec.name] = coerce_value(spec, raw.get(spec.name))
        except ValueError:
            values[spec.name] = raw.get(spec.name)
            messages.append(f"{spec.label} must be a number")
    return values, messages


def seed_values(definition: ResourceDefinition, record: Mapping[str, Any] | None = None) -> dict[str, Any]:
    """Initial form state: the record's values, or each field's default.

    Passwords are never read back into a form.
    """
    if record is None:
        return {spec.name: spec.empty_value() for spec in definition.fields}
    values = {}
    for spec in definition.fields:
        if spec.kind == FieldKind.PASSWORD:
            values[spec.name] = spec.empty_value()
        else:
            values[spec.name] = record.get(spec.name, spec.empty_value())
    return values


def _is_blank(spec: FieldSpec, value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if spec.kind == FieldKind.SELECT and value == 0:
        return True
    return False


def find_missing(
    definition: ResourceDefinition,
    values: Mapping[str, Any],
    files: Mapping[str, UploadedFile] | None = None,
    *,
    editing: bool = False,
) -> list[str]:
    """Labels of required fields with no value.

    When editing, a blank password keeps the stored one and is not missing.
    """
    files = files or {}
    missing = []
    for spec in definition.required_fields:
        if spec.kind == FieldKind.BOOLEAN:
            continue
        if editing and spec.kind == FieldKind.PASSWORD:
            continue
        if spec.kind == FieldKind.FILE and spec.name in files:
            continue
        if _is_blank(spec, values.get(spec.name)):
            missing.append(spec.label)
    return missing


def _comparable(value: Any) -> Any:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value
    return str(value)


def check_field_order(definition: ResourceDefinition, values: Mapping[str, Any]) -> list[str]:
    """Messages for ``field_order`` rules where ``later`` is not after ``earlier``."""
    messages = []
    for rule in definition.field_order:
        earlier = values.get(rule.earlier)
        later = values.get(rule.later)
        if earlier in (None, "") or later in (None, ""):
            continue
        a, b = _comparable(earlier), _comparable(later)
        if type(a) is not type(b):
            a, b = str(earlier), str(later)
        if not b > a:
            earlier_spec = definition.field(rule.earlier)
            later_spec = definition.field(rule.later)
            messages.append(
                rule.message
                or f"{later_spec.label if later_spec else rule.later} must be greater than "
                f"{earlier_spec.label if earlier_spec else rule.earlier}"
            )
    return messages


def build_payload(
    definition: ResourceDefinition,
    values: Mapping[str, Any],
    tenant: TenantContext,
    *,
    include_empty: bool = True,
) -> dict[str, Any]:
    """Request body: every editable field plus the tenant scope.

    ``include_empty=False`` (create) leaves unset fields to the API's
    defaults; updates are full-record replaces and send everything except a
    blank password, which the API keeps unchanged.
    """
    payload: dict[str, Any] = {}
    for spec in definition.editable_fields:
        value = values.get(spec.name)
        blank = value is None or value == ""
        if blank and (not include_empty or spec.kind == FieldKind.PASSWORD):
            continue
        payload[spec.name] = value
    if definition.tenant_scoped:
        payload[definition.tenant_field] = tenant.org_code_value
    return payload
