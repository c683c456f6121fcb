"""Tests for app.services.store.InMemoryPageStore."""

import pytest

from app.models.assets import HeroSection
from app.models.page import Page, PageUpdate
from app.services.store import (
    DuplicateHandleError,
    InMemoryPageStore,
    InvalidTransitionError,
    PageNotFoundError,
    check_transition,
)


def _page(page_id: str, handle: str, **kwargs) -> Page:
    return Page(id=page_id, handle=handle, main_keyword=handle.replace("-", " "), **kwargs)


@pytest.fixture
def store():
    s = InMemoryPageStore()
    s.create(_page("p1", "first-page"))
    s.create(_page("p2", "second-page"))
    return s


class TestCreateAndGet:
    def test_timestamps_set(self, store):
        page = store.get("p1")
        assert page.created_at is not None
        assert page.updated_at is not None

    def test_get_by_handle(self, store):
        assert store.get_by_handle("second-page").id == "p2"

    def test_unknown_id(self, store):
        with pytest.raises(PageNotFoundError):
            store.get("missing")

    def test_unknown_handle(self, store):
        with pytest.raises(PageNotFoundError):
            store.get_by_handle("missing")

    def test_duplicate_handle(self, store):
        with pytest.raises(DuplicateHandleError):
            store.create(_page("p3", "first-page"))

    def test_new_ids_unique(self):
        assert InMemoryPageStore.new_id() != InMemoryPageStore.new_id()

    def test_list_newest_first(self, store):
        store.update("p1", PageUpdate(meta_title="Updated"))
        assert [p.id for p in store.list_pages()] == ["p1", "p2"]


class TestUpdate:
    def test_partial_update(self, store):
        updated = store.update("p1", PageUpdate(meta_title="New title"))
        assert updated.meta_title == "New title"
        assert updated.main_keyword == "first page"

    def test_null_required_field_ignored(self, store):
        updated = store.update("p1", PageUpdate.model_validate({"main_keyword": None}))
        assert updated.main_keyword == "first page"

    def test_nullable_field_cleared(self, store):
        store.update("p1", PageUpdate(hero_section=HeroSection(h1="Hero")))
        updated = store.update("p1", PageUpdate.model_validate({"hero_section": None}))
        assert updated.hero_section is None

    def test_unknown_page(self, store):
        with pytest.raises(PageNotFoundError):
            store.update("missing", PageUpdate(meta_title="x"))


class TestStatus:
    def test_publish_then_archive(self, store):
        assert store.set_status("p1", "published").status == "published"
        assert store.set_status("p1", "archived").status == "archived"

    def test_same_status_accepted(self, store):
        assert store.set_status("p1", "draft").status == "draft"

    def test_draft_cannot_be_archived(self, store):
        with pytest.raises(InvalidTransitionError):
            store.set_status("p1", "archived")

    def test_archived_is_final(self, store):
        store.set_status("p1", "published")
        store.set_status("p1", "archived")
        with pytest.raises(InvalidTransitionError):
            store.set_status("p1", "published")

    @pytest.mark.parametrize("current,target", [("published", "draft"), ("archived", "draft")])
    def test_backwards_rejected(self, current, target):
        with pytest.raises(InvalidTransitionError):
            check_transition(current, target)


class TestLinks:
    def test_set_related_keeps_order(self, store):
        store.create(_page("p3", "third-page"))
        links = store.set_related("p1", ["p3", "p2"])
        assert [(l.related_page_id, l.sort_order) for l in links] == [("p3", 0), ("p2", 1)]
        assert store.list_links("p1") == links

    def test_set_related_replaces(self, store):
        store.set_related("p1", ["p2"])
        store.set_related("p1", [])
        assert store.list_links("p1") == []

    def test_unknown_related_page(self, store):
        with pytest.raises(PageNotFoundError):
            store.set_related("p1", ["missing"])

    def test_delete_removes_links(self, store):
        store.set_related("p1", ["p2"])
        store.delete("p2")
        assert store.list_links("p1") == []
        with pytest.raises(PageNotFoundError):
            store.get("p2")

    def test_delete_unknown(self, store):
        with pytest.raises(PageNotFoundError):
            store.delete("missing")
