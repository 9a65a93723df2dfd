"""Unit tests for the ListViewService."""

from dataclasses import replace

import pytest

from cms_admin.application.services import ListViewService
from cms_admin.domain.entities import ApiResult, ErrorKind, ListQuery, ToastLevel, ViewPhase


@pytest.fixture
def service(gateway, catalog) -> ListViewService:
    return ListViewService(gateway, catalog)


@pytest.mark.asyncio
async def test_load_page_joins_lookup_names(service, catalog, tenant):
    page = await service.load_page(catalog.get("blog-posts"), tenant)

    assert page.phase == ViewPhase.READY
    names = {row["id"]: (row["AuthorName"], row["CategoryName"]) for row in page.rows}
    assert names[1] == ("Asha", "News")
    assert names[2] == ("Ravi", "Guides")
    assert names[3] == ("Unknown", "News")


@pytest.mark.asyncio
async def test_load_page_fetches_primary_and_every_lookup(service, gateway, catalog, tenant):
    await service.load_page(catalog.get("blog-posts"), tenant)

    listed = sorted(resource for _, resource, _ in gateway.calls_for("list"))
    assert listed == ["blog-authors", "blog-categories", "blog-posts"]
    assert all(details["org_code"] == "1000" for _, _, details in gateway.calls)


@pytest.mark.asyncio
async def test_search_is_subset_of_loaded_rows(service, catalog, tenant):
    definition = catalog.get("blog-posts")
    everything = await service.load_page(definition, tenant)
    searched = await service.load_page(definition, tenant, ListQuery(search="GUIDE"))

    assert [row["id"] for row in searched.rows] == [2]
    all_ids = {row["id"] for row in everything.rows}
    assert {row["id"] for row in searched.rows} <= all_ids
    assert searched.total == 3
    assert searched.matched == 1


@pytest.mark.asyncio
async def test_search_covers_joined_display_names(service, catalog, tenant):
    page = await service.load_page(catalog.get("blog-posts"), tenant, ListQuery(search="ravi"))
    assert [row["id"] for row in page.rows] == [2]


@pytest.mark.asyncio
async def test_select_and_toggle_filters_combine(service, catalog, tenant):
    query = ListQuery(selects={"categoryId": "5"}, toggles=frozenset({"featured"}))
    page = await service.load_page(catalog.get("blog-posts"), tenant, query)

    assert sorted(row["id"] for row in page.rows) == [1, 3]


@pytest.mark.asyncio
async def test_select_filter_all_disables_filter(service, catalog, tenant):
    page = await service.load_page(
        catalog.get("blog-posts"), tenant, ListQuery(selects={"categoryId": "all"})
    )
    assert len(page.rows) == 3


@pytest.mark.asyncio
async def test_reload_without_mutation_is_idempotent(service, catalog, tenant):
    definition = catalog.get("blog-posts")
    query = ListQuery(search="o", sort="title")

    first = await service.load_page(definition, tenant, query)
    second = await service.load_page(definition, tenant, query)

    assert first.rows == second.rows
    assert first.filter_options == second.filter_options


@pytest.mark.asyncio
async def test_filter_options_come_from_lookup(service, catalog, tenant):
    page = await service.load_page(catalog.get("blog-posts"), tenant)
    assert page.filter_options["categoryId"] == [("5", "News"), ("6", "Guides")]


@pytest.mark.asyncio
async def test_empty_collection_shows_empty_state(service, gateway, catalog, tenant):
    gateway.collections["blog-posts"] = []

    page = await service.load_page(catalog.get("blog-posts"), tenant)

    assert page.phase == ViewPhase.READY
    assert page.is_empty
    assert page.empty_message == "No blog posts found"
    assert page.toast is None


@pytest.mark.asyncio
async def test_filters_removing_everything_say_so(service, catalog, tenant):
    page = await service.load_page(catalog.get("blog-posts"), tenant, ListQuery(search="zzz"))
    assert page.empty_message == "No blog posts match the current filters"


@pytest.mark.asyncio
async def test_primary_failure_gives_error_toast(service, gateway, catalog, tenant):
    gateway.failures[("list", "blog-posts")] = ApiResult.failure(ErrorKind.NETWORK, "connection refused")

    page = await service.load_page(catalog.get("blog-posts"), tenant)

    assert page.phase == ViewPhase.FAILED
    assert page.rows == []
    assert page.toast.level == ToastLevel.ERROR
    assert page.toast.description == "Failed to fetch blog posts"


@pytest.mark.asyncio
async def test_lookup_failure_degrades_to_fallback(service, gateway, catalog, tenant):
    gateway.failures[("list", "blog-authors")] = ApiResult.failure(ErrorKind.HTTP_STATUS, "boom", 500)

    page = await service.load_page(catalog.get("blog-posts"), tenant)

    assert page.phase == ViewPhase.READY
    assert {row["AuthorName"] for row in page.rows} == {"Unknown"}


@pytest.mark.asyncio
async def test_pagination_clamps_page(gateway, catalog, tenant):
    definition = replace(catalog.get("blog-posts"), page_size=2)
    service = ListViewService(gateway, catalog)

    page = await service.load_page(definition, tenant, ListQuery(page=9))

    assert page.pages == 2
    assert page.page == 2
    assert len(page.rows) == 1


@pytest.mark.asyncio
async def test_delete_without_confirmation_makes_no_call(service, gateway, catalog, tenant):
    outcome = await service.delete_record(catalog.get("blog-posts"), 1, tenant, confirmed=False)

    assert outcome.performed is False
    assert outcome.toast is None
    assert gateway.calls == []


@pytest.mark.asyncio
async def test_delete_confirmed_removes_row(service, gateway, catalog, tenant):
    definition = catalog.get("blog-posts")

    outcome = await service.delete_record(definition, 2, tenant, confirmed=True)
    page = await service.load_page(definition, tenant)

    assert outcome.succeeded
    assert outcome.toast.description == "Blog Post deleted successfully"
    assert 2 not in {row["id"] for row in page.rows}


@pytest.mark.asyncio
async def test_delete_failure_leaves_list_intact(service, gateway, catalog, tenant):
    definition = catalog.get("blog-posts")
    gateway.failures[("remove", "blog-posts")] = ApiResult.failure(ErrorKind.HTTP_STATUS, "locked", 409)

    outcome = await service.delete_record(definition, 2, tenant, confirmed=True)
    page = await service.load_page(definition, tenant)

    assert outcome.performed and not outcome.succeeded
    assert outcome.toast.description == "Failed to delete blog post"
    assert len(page.rows) == 3
