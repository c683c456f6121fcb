"""View reconstruction: rebuild a page's HTML from its persisted fields only.

Stored content is parsed once into :class:`ContentSection` records and then
rendered through the same :func:`~app.services.assembler.compose_document`
the authoring pipeline uses.  Three shapes of stored content are accepted:

``pre-merge``
    Content rows whose image cell still holds the placeholder comment.

``post-merge``
    Content rows with images already embedded and banner blocks in between.
    Embedded images are kept; stored banners are dropped and placed again
    from ``Page.banner_ads`` so the result matches the pre-merge shape.

``raw``
    Plain ``<h2>``/``<h3>`` headings followed by paragraphs, without rows.
"""

import logging
from typing import List, Optional, Sequence

from bs4 import BeautifulSoup, Tag

from app.models.assets import ImageAsset
from app.models.page import Page
from app.models.related import RelatedLink
from app.models.section import ContentSection
from app.services.assembler import AssembledDocument, compose_document
from app.services.composer import renumber
from app.services.normalizer import collapse_whitespace

logger = logging.getLogger(__name__)

_HEADING_TAGS = ["h2", "h3"]


def _top_level(rows: List[Tag]) -> List[Tag]:
    """Drop rows nested inside another matched row."""
    ids = {id(row) for row in rows}
    return [row for row in rows if not any(id(parent) in ids for parent in row.parents)]


def _find_rows(root: Tag) -> List[Tag]:
    rows = root.select("div.content-row")
    if not rows:
        # Pages saved before rows carried the content-row class
        rows = root.select("div.row.mb-4")
    return _top_level(rows)


def _image_from(img: Optional[Tag]) -> Optional[ImageAsset]:
    if img is None or not img.get("src"):
        return None
    alt = img.get("alt")
    return ImageAsset(url=str(img["src"]), alt_text=str(alt) if alt else None, type="content")


def _section_from_row(row: Tag) -> Optional[ContentSection]:
    heading = row.find(_HEADING_TAGS)
    if heading is None:
        return None
    body = " ".join(p.get_text(" ") for p in row.find_all("p"))
    return ContentSection(
        keyword=collapse_whitespace(heading.get_text(" ")),
        heading_level=heading.name,
        body_text=collapse_whitespace(body),
        image=_image_from(row.find("img")),
    )


def _sections_from_raw(root: Tag) -> List[ContentSection]:
    sections: List[ContentSection] = []
    heading: Optional[Tag] = None
    paragraphs: List[str] = []
    image: Optional[ImageAsset] = None

    def _flush() -> None:
        if heading is not None:
            sections.append(
                ContentSection(
                    keyword=collapse_whitespace(heading.get_text(" ")),
                    heading_level=heading.name,
                    body_text=collapse_whitespace(" ".join(paragraphs)),
                    image=image,
                )
            )

    for element in root.find_all(_HEADING_TAGS + ["p", "img"]):
        if element.name in _HEADING_TAGS:
            _flush()
            heading, paragraphs, image = element, [], None
        elif heading is None:
            # Text before the first heading has no section to belong to
            continue
        elif element.name == "p":
            paragraphs.append(element.get_text(" "))
        elif image is None:
            image = _image_from(element)
    _flush()
    return sections


def parse_sections(content: str) -> List[ContentSection]:
    """Parse stored page content into ordered content sections."""
    if not content or not content.strip():
        return []

    soup = BeautifulSoup(content, "lxml")
    root = soup.body or soup

    for banner in root.select("div.banner-ad-container"):
        banner.decompose()

    rows = _find_rows(root)
    if rows:
        sections = [s for s in (_section_from_row(row) for row in rows) if s is not None]
    else:
        sections = _sections_from_raw(root)
    return renumber(sections)


def reconstruct_document(
    page: Page,
    related_links: Sequence[RelatedLink] = (),
    template: Optional[str] = None,
) -> AssembledDocument:
    """Rebuild the full document for *page*, warnings included."""
    sections = parse_sections(page.content)
    logger.info(
        "Reconstructing page",
        extra={"handle": page.handle, "sections": len(sections), "images": len(page.images)},
    )
    return compose_document(
        handle=page.handle,
        main_keyword=page.main_keyword,
        meta_title=page.meta_title,
        meta_description=page.meta_description,
        canonical=page.canonical,
        sections=sections,
        images=page.images,
        banner_ads=page.banner_ads,
        banner_interval=page.banner_interval,
        hero_section=page.hero_section,
        faq_content=page.faq_content,
        faq_schema=page.faq_schema,
        related_links=related_links,
        template=template,
    )


def reconstruct_view(
    page: Page,
    related_links: Sequence[RelatedLink] = (),
    template: Optional[str] = None,
) -> str:
    """Return the HTML served for *page*; *page* itself is never modified."""
    return reconstruct_document(page, related_links, template).html
