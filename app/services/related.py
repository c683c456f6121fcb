"""Related-page lookup for the carousel at the bottom of every page."""

import logging
from typing import List

from app.models.page import Page
from app.models.related import RelatedLink, RelatedPage
from app.services.interfaces import PageStore
from app.services.store import PageNotFoundError

logger = logging.getLogger(__name__)

_EXCERPT_LENGTH = 100
_DEFAULT_EXCERPT = "Related page content..."


def related_page_for(page: Page) -> RelatedPage:
    """Summarise *page* for display in another page's carousel."""
    excerpt = page.meta_description.strip()[:_EXCERPT_LENGTH] or _DEFAULT_EXCERPT
    hero_image = page.hero_section.image1 if page.hero_section and page.hero_section.image1 else None
    return RelatedPage(
        handle=page.handle,
        main_keyword=page.main_keyword,
        excerpt=excerpt,
        hero_image=hero_image,
    )


def resolve_related_links(page_id: str, store: PageStore) -> List[RelatedLink]:
    """Return the related links of *page_id* in their stored order.

    A link whose target page has disappeared is skipped.  Any other lookup
    failure is logged and yields an empty list so the page still renders.
    """
    try:
        links = sorted(store.list_links(page_id), key=lambda link: link.sort_order)
        resolved: List[RelatedLink] = []
        for link in links:
            try:
                target = store.get(link.related_page_id)
            except PageNotFoundError:
                logger.warning("Related page %s of %s no longer exists", link.related_page_id, page_id)
                continue
            resolved.append(RelatedLink(target_page=related_page_for(target), sort_order=link.sort_order))
        return resolved
    except Exception as exc:
        logger.warning("Related links lookup failed for %s: %s", page_id, exc)
        return []
