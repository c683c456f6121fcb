"""Tests for app.services.related."""

from app.models.assets import HeroSection
from app.models.page import Page
from app.models.related import InternalLink
from app.services.related import related_page_for, resolve_related_links
from app.services.store import InMemoryPageStore, PageNotFoundError


def _page(page_id: str, handle: str, **kwargs) -> Page:
    return Page(id=page_id, handle=handle, main_keyword=handle.replace("-", " "), **kwargs)


class _StaleLinkStore:
    """Store whose links point at a page that has since disappeared."""

    def __init__(self, pages):
        self.pages = {p.id: p for p in pages}

    def list_links(self, page_id):
        return [
            InternalLink(main_page_id=page_id, related_page_id="gone", sort_order=0),
            InternalLink(main_page_id=page_id, related_page_id="p2", sort_order=1),
        ]

    def get(self, page_id):
        if page_id not in self.pages:
            raise PageNotFoundError(page_id)
        return self.pages[page_id]


class _BrokenStore:
    def list_links(self, page_id):
        raise RuntimeError("database unavailable")


class TestRelatedPageFor:
    def test_excerpt_from_meta_description(self):
        related = related_page_for(_page("p1", "a-page", meta_description="x" * 150))
        assert related.excerpt == "x" * 100

    def test_default_excerpt(self):
        assert related_page_for(_page("p1", "a-page")).excerpt == "Related page content..."

    def test_hero_image(self):
        page = _page("p1", "a-page", hero_section=HeroSection(image1="/img/h.jpg"))
        assert related_page_for(page).hero_image == "/img/h.jpg"
        assert related_page_for(_page("p2", "b-page")).hero_image is None


class TestResolveRelatedLinks:
    def test_ordered_by_sort_order(self):
        store = InMemoryPageStore()
        for page_id, handle in (("p1", "main"), ("p2", "second"), ("p3", "third")):
            store.create(_page(page_id, handle))
        store.set_related("p1", ["p3", "p2"])
        links = resolve_related_links("p1", store)
        assert [l.target_page.handle for l in links] == ["third", "second"]

    def test_no_links(self):
        store = InMemoryPageStore()
        store.create(_page("p1", "main"))
        assert resolve_related_links("p1", store) == []

    def test_missing_target_skipped(self):
        links = resolve_related_links("p1", _StaleLinkStore([_page("p2", "second")]))
        assert [l.target_page.handle for l in links] == ["second"]

    def test_lookup_failure_yields_empty_list(self):
        assert resolve_related_links("p1", _BrokenStore()) == []
