"""Unit tests for lookup joins and select options."""

from cms_admin.application.services.lookup_resolver import (
    build_index,
    distinct_options,
    join_lookups,
    lookup_options,
)
from cms_admin.domain.entities import LookupSpec

CATEGORY = LookupSpec("category", "blog-categories", "Id", "CategoryName", "categoryId", "CategoryName")


def test_index_uses_string_keys_and_skips_keyless_rows():
    rows = [{"Id": 5, "CategoryName": "News"}, {"CategoryName": "Orphan"}, {"Id": 6}]
    assert build_index(CATEGORY, rows) == {"5": "News", "6": "Unknown"}


def test_options_keep_lookup_order():
    rows = [{"Id": 6, "CategoryName": "Guides"}, {"Id": 5, "CategoryName": "News"}]
    assert lookup_options(CATEGORY, rows) == [("6", "Guides"), ("5", "News")]


def test_join_fills_names_without_mutating_input(catalog):
    records = [{"id": 1, "categoryId": "5", "authorId": 3}, {"id": 2, "categoryId": 7, "authorId": None}]
    rows = {
        "category": [{"Id": 5, "CategoryName": "News"}],
        "author": [{"Id": 3, "Name": "Asha"}],
    }

    joined = join_lookups(records, catalog.get("blog-posts"), rows)

    assert joined[0]["CategoryName"] == "News"
    assert joined[0]["AuthorName"] == "Asha"
    assert joined[1]["CategoryName"] == "Unknown"
    assert joined[1]["AuthorName"] == "Unknown"
    assert "CategoryName" not in records[0]


def test_name_supplied_by_api_is_kept(catalog):
    records = [{"id": 1, "categoryId": 5, "CategoryName": "From API"}]
    joined = join_lookups(records, catalog.get("blog-posts"), {"category": []})
    assert joined[0]["CategoryName"] == "From API"


def test_distinct_options_from_data():
    records = [{"type": "sub"}, {"type": "main"}, {"type": "sub"}, {"type": None}]
    assert distinct_options(records, "type") == [("main", "main"), ("sub", "sub")]
