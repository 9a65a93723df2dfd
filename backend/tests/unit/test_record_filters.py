"""Unit tests for list row filtering, sorting and pagination."""

import pytest

from cms_admin.application.services.record_filters import (
    apply_filters,
    is_truthy,
    matches_search,
    paginate,
    sort_records,
)
from cms_admin.domain.entities import ListQuery

ROWS = [
    {"id": 1, "name": "Home", "type": "main", "isActive": True, "order": 3},
    {"id": 2, "name": "About us", "type": "main", "isActive": False, "order": None},
    {"id": 3, "name": "Team", "type": "sub", "isActive": "Active", "order": 1},
    {"id": 4, "name": None, "type": "sub", "isActive": 0, "order": 2},
]


@pytest.mark.parametrize(
    ("value", "expected"),
    [(True, True), ("Active", True), ("yes", True), (1, True), ("Inactive", False), (0, False), (None, False)],
)
def test_is_truthy(value, expected):
    assert is_truthy(value) is expected


def test_blank_search_matches_everything():
    assert all(matches_search(row, "  ", ["name"]) for row in ROWS)


def test_search_skips_none_values():
    assert not matches_search(ROWS[3], "none", ["name"])


@pytest.mark.parametrize("term", ["", "o", "HOME", "us", "xyz"])
def test_search_result_is_subset_in_original_order(term, catalog):
    definition = catalog.get("blog-posts")
    rows = [
        {"id": 1, "title": "Home page", "content": "x"},
        {"id": 2, "title": "About us", "content": "y"},
        {"id": 3, "title": "Contact", "content": "home office"},
    ]

    result = apply_filters(rows, definition, ListQuery(search=term))

    assert all(row in rows for row in result)
    assert [r["id"] for r in result] == sorted(r["id"] for r in result)
    for row in result:
        assert term.lower() in (row["title"] + " " + row["content"]).lower()


def test_sort_puts_missing_values_last_both_directions():
    ascending = sort_records(ROWS, "order")
    descending = sort_records(ROWS, "order", descending=True)

    assert [r["id"] for r in ascending] == [3, 4, 1, 2]
    assert [r["id"] for r in descending] == [1, 4, 3, 2]


def test_sort_text_is_case_insensitive():
    rows = [{"n": "beta"}, {"n": "Alpha"}, {"n": "gamma"}]
    assert [r["n"] for r in sort_records(rows, "n")] == ["Alpha", "beta", "gamma"]


def test_paginate_without_page_size_is_single_page():
    rows, page, pages = paginate(ROWS, 3, None)
    assert (len(rows), page, pages) == (4, 1, 1)


def test_paginate_slices_and_clamps():
    rows, page, pages = paginate(ROWS, 2, 3)
    assert [r["id"] for r in rows] == [4]
    assert (page, pages) == (2, 2)

    rows, page, _ = paginate(ROWS, 0, 3)
    assert page == 1
    assert len(rows) == 3


def test_paginate_empty_has_one_page():
    assert paginate([], 5, 10) == ([], 1, 1)
