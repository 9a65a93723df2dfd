"""Preview models for the bulk (list) and live (form) previews.

The previews bind the same values used for submission to cosmetic markup,
so what the template shows is what gets saved.
"""

from collections.abc import Mapping, Sequence
from typing import Any

from cms_admin.application.services.record_filters import is_truthy
from cms_admin.domain.entities import PreviewStyle, ResourceDefinition

PARENT_PLACEHOLDER = "Parent menu"


def _is_active(record: Mapping[str, Any]) -> bool:
    for name in ("isActive", "IsActive", "Status"):
        if name in record:
            return is_truthy(record[name])
    return True


def _numeric(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return float("inf")


class PreviewBuilder:
    """Builds template contexts for the preview partials."""

    def build_list_preview(
        self,
        definition: ResourceDefinition,
        records: Sequence[dict[str, Any]],
    ) -> dict[str, Any] | None:
        if definition.preview is None:
            return None
        active = [r for r in records if _is_active(r)]

        if definition.preview == PreviewStyle.MENU_BAR:
            return {"style": definition.preview.value, "items": self._menu_tree(definition, active)}
        if definition.preview == PreviewStyle.SLIDER:
            ordered = sorted(active, key=lambda r: _numeric(r.get("sliderSqquence")))
            return {"style": definition.preview.value, "items": ordered}
        return {"style": definition.preview.value, "items": active}

    def build_form_preview(
        self,
        definition: ResourceDefinition,
        values: Mapping[str, Any],
    ) -> dict[str, Any] | None:
        if definition.preview is None:
            return None
        item = dict(values)
        if definition.preview == PreviewStyle.MENU_BAR:
            return {"style": definition.preview.value, "items": [self._menu_node(definition, item)]}
        return {"style": definition.preview.value, "items": [item]}

    def _menu_tree(
        self,
        definition: ResourceDefinition,
        records: Sequence[dict[str, Any]],
    ) -> list[dict[str, Any]]:
        """Main items ordered by id, each with its sub items (``parentId`` match)."""
        id_field = definition.id_field

        def by_id(record: dict[str, Any]) -> float:
            return _numeric(record.get(id_field))

        mains = sorted((r for r in records if r.get("type") == "main"), key=by_id)
        subs = [r for r in records if r.get("type") == "sub"]
        tree = []
        for main in mains:
            main_id = str(main.get(id_field))
            children = sorted(
                (s for s in subs if s.get("parentId") is not None and str(s.get("parentId")) == main_id),
                key=by_id,
            )
            tree.append({"item": main, "children": children})
        return tree

    def _menu_node(self, definition: ResourceDefinition, item: dict[str, Any]) -> dict[str, Any]:
        """A sub item is shown under a stand-in for its parent; anything else is a main item."""
        if item.get("type") != "sub":
            return {"item": item, "children": []}
        parent = {definition.id_field: item.get("parentId"), "name": PARENT_PLACEHOLDER}
        return {"item": parent, "children": [item]}
