"""In-memory page store.

Persistence is an external collaborator of the composition engine; this store
implements the :class:`~app.services.interfaces.PageStore` interface well
enough to run the API and its tests.  It is process-local and guarded by a
lock because FastAPI may serve requests from several threads.
"""

import logging
import threading
import uuid
from datetime import datetime, timezone
from typing import Dict, List

from app.models.draft import PageDraft
from app.models.page import Page, PageStatus, PageUpdate
from app.models.related import InternalLink

logger = logging.getLogger(__name__)

# Allowed status changes; setting the current status again is always accepted
_TRANSITIONS = {
    "draft": {"published"},
    "published": {"archived"},
    "archived": set(),
}

# Fields a partial update may clear by sending null
_NULLABLE_FIELDS = {"hero_section", "faq_schema"}


class PageNotFoundError(LookupError):
    """Raised when no page matches the requested id or handle."""


class DuplicateHandleError(ValueError):
    """Raised when a handle is already taken by another page."""


class InvalidTransitionError(ValueError):
    """Raised for a status change outside draft → published → archived."""


def check_transition(current: PageStatus, target: PageStatus) -> None:
    if current != target and target not in _TRANSITIONS[current]:
        raise InvalidTransitionError(f"Cannot change status from '{current}' to '{target}'.")


def page_from_draft(page_id: str, draft: PageDraft, content: str) -> Page:
    """Build the persisted :class:`Page` for an assembled *draft*."""
    return Page(
        id=page_id,
        handle=draft.handle,
        main_keyword=draft.main_keyword,
        content=content,
        faq_content=draft.faq_content,
        faq_schema=draft.faq_schema,
        meta_title=draft.meta_title,
        meta_description=draft.meta_description,
        canonical=draft.canonical,
        banner_interval=draft.banner_interval,
        hero_section=draft.hero_section,
        banner_ads=list(draft.banner_ads),
        images=list(draft.images),
        status="draft",
    )


class InMemoryPageStore:
    def __init__(self) -> None:
        self._pages: Dict[str, Page] = {}
        self._links: Dict[str, List[InternalLink]] = {}
        self._lock = threading.Lock()

    @staticmethod
    def new_id() -> str:
        return uuid.uuid4().hex

    @staticmethod
    def _now() -> datetime:
        return datetime.now(timezone.utc)

    def create(self, page: Page) -> Page:
        with self._lock:
            if any(p.handle == page.handle for p in self._pages.values()):
                raise DuplicateHandleError(f"Handle '{page.handle}' is already in use.")
            now = self._now()
            stored = page.model_copy(update={"created_at": page.created_at or now, "updated_at": now})
            self._pages[stored.id] = stored
        logger.info("Page created", extra={"page_id": stored.id, "handle": stored.handle})
        return stored

    def get(self, page_id: str) -> Page:
        with self._lock:
            page = self._pages.get(page_id)
        if page is None:
            raise PageNotFoundError(f"Page '{page_id}' not found.")
        return page

    def get_by_handle(self, handle: str) -> Page:
        with self._lock:
            page = next((p for p in self._pages.values() if p.handle == handle), None)
        if page is None:
            raise PageNotFoundError(f"Page '{handle}' not found.")
        return page

    def list_pages(self) -> List[Page]:
        with self._lock:
            pages = list(self._pages.values())
        return sorted(pages, key=lambda p: p.updated_at or datetime.min.replace(tzinfo=timezone.utc), reverse=True)

    def update(self, page_id: str, changes: PageUpdate) -> Page:
        """Apply the fields set on *changes* to the stored page."""
        with self._lock:
            page = self._pages.get(page_id)
            if page is None:
                raise PageNotFoundError(f"Page '{page_id}' not found.")
            update = {
                key: value
                for key, value in changes.model_dump(exclude_unset=True).items()
                if value is not None or key in _NULLABLE_FIELDS
            }
            # Re-validate nested models by going through the constructor
            updated = Page.model_validate({**page.model_dump(), **update, "updated_at": self._now()})
            self._pages[page_id] = updated
        return updated

    def set_status(self, page_id: str, status: PageStatus) -> Page:
        with self._lock:
            page = self._pages.get(page_id)
            if page is None:
                raise PageNotFoundError(f"Page '{page_id}' not found.")
            check_transition(page.status, status)
            updated = page.model_copy(update={"status": status, "updated_at": self._now()})
            self._pages[page_id] = updated
        logger.info("Page status changed", extra={"page_id": page_id, "status": status})
        return updated

    def delete(self, page_id: str) -> None:
        with self._lock:
            if self._pages.pop(page_id, None) is None:
                raise PageNotFoundError(f"Page '{page_id}' not found.")
            self._links.pop(page_id, None)
            for main_id, links in self._links.items():
                self._links[main_id] = [link for link in links if link.related_page_id != page_id]

    def set_related(self, page_id: str, related_page_ids: List[str]) -> List[InternalLink]:
        """Replace the related pages of *page_id*, keeping the given order."""
        with self._lock:
            if page_id not in self._pages:
                raise PageNotFoundError(f"Page '{page_id}' not found.")
            unknown = [rid for rid in related_page_ids if rid not in self._pages]
            if unknown:
                raise PageNotFoundError(f"Related page '{unknown[0]}' not found.")
            links = [
                InternalLink(main_page_id=page_id, related_page_id=rid, sort_order=index)
                for index, rid in enumerate(related_page_ids)
            ]
            self._links[page_id] = links
        return links

    def list_links(self, page_id: str) -> List[InternalLink]:
        with self._lock:
            return list(self._links.get(page_id, []))


# Shared store used by the API routers
store = InMemoryPageStore()
