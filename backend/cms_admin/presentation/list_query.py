"""Translates list view query parameters into a ListQuery.

Parameters: ``q`` (search), ``f_<field>`` (select filter), ``t_<field>``
(toggle filter), ``sort``, ``dir`` (``asc``/``desc``) and ``page``.
"""

from collections.abc import Mapping

from cms_admin.domain.entities import ListQuery, ResourceDefinition

_TRUE = frozenset({"1", "true", "on", "yes"})


def parse_list_query(definition: ResourceDefinition, params: Mapping[str, str]) -> ListQuery:
    selects = {
        flt.field: params[f"f_{flt.field}"]
        for flt in definition.select_filters
        if params.get(f"f_{flt.field}")
    }
    toggles = frozenset(
        flt.field
        for flt in definition.toggle_filters
        if params.get(f"t_{flt.field}", "").lower() in _TRUE
    )

    sort = params.get("sort") or None
    try:
        page = max(int(params.get("page", 1)), 1)
    except ValueError:
        page = 1

    return ListQuery(
        search=params.get("q", "").strip(),
        selects=selects,
        toggles=toggles,
        sort=sort,
        descending=params.get("dir", "asc").lower() == "desc",
        page=page,
    )


def list_query_params(query: ListQuery) -> dict[str, str]:
    """Inverse of ``parse_list_query``, for building pagination and sort links."""
    params: dict[str, str] = {}
    if query.search:
        params["q"] = query.search
    for name, value in query.selects.items():
        params[f"f_{name}"] = value
    for name in sorted(query.toggles):
        params[f"t_{name}"] = "1"
    if query.sort:
        params["sort"] = query.sort
        params["dir"] = "desc" if query.descending else "asc"
    return params
