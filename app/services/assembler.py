"""Document assembly: composed sections + assets → one complete HTML page.

Both the authoring pipeline (:func:`assemble_document`) and the view
reconstruction go through :func:`compose_document`, so a page persisted from
an assembly renders to exactly the HTML the assembly produced.
"""

import logging
from typing import List, NamedTuple, Optional, Sequence

from app.config import settings
from app.models.assets import BannerAd, CompositionWarning, HeroSection, ImageAsset
from app.models.draft import PageDraft
from app.models.related import RelatedLink
from app.models.section import ContentSection
from app.services.banners import place_banners
from app.services.composer import compose_sections
from app.services.images import assign_images, content_pool
from app.services.normalizer import canonical_url
from app.services.renderer import (
    PAGE_SCRIPT,
    render_body,
    render_head_meta,
    render_hero,
    render_related,
    render_schema_script,
)
from app.services.template import TemplateParts, fill_template, hero_defaults, load_template

logger = logging.getLogger(__name__)


class AssembledDocument(NamedTuple):
    html: str
    warnings: List[CompositionWarning]
    content: str  # rows with image placeholders, no banners: what gets stored as Page.content


def compose_document(
    *,
    handle: str,
    main_keyword: str,
    meta_title: str,
    meta_description: str,
    canonical: bool,
    sections: List[ContentSection],
    images: Sequence[ImageAsset],
    banner_ads: Sequence[BannerAd],
    banner_interval: int,
    hero_section: Optional[HeroSection],
    faq_content: str,
    faq_schema: Optional[str],
    related_links: Sequence[RelatedLink] = (),
    template: Optional[str] = None,
) -> AssembledDocument:
    """Assign images, place banners and fill the base template.

    Never raises for missing or broken optional assets; every such problem is
    returned in ``warnings`` and the document is still complete.
    """
    if template is None:
        template = load_template(settings.TEMPLATE_PATH)
    warnings: List[CompositionWarning] = []

    stored_content, _ = render_body(
        [section.model_copy(update={"image": None}) for section in sections],
        main_keyword=main_keyword,
    )

    assignment = assign_images(sections, content_pool(images), main_keyword)
    warnings.extend(assignment.warnings)

    placements = place_banners(assignment.sections, list(banner_ads), max(1, banner_interval))
    body, body_warnings = render_body(assignment.sections, placements, main_keyword)
    warnings.extend(body_warnings)

    title = meta_title.strip() or main_keyword
    description = meta_description.strip() or f"Learn more about {main_keyword}"
    canonical_href = canonical_url(settings.SITE_URL, handle) if canonical else None

    schema_script, schema_warnings = render_schema_script(faq_schema)
    warnings.extend(schema_warnings)

    hero_html, hero_warnings = render_hero(hero_section, main_keyword, hero_defaults(template))
    warnings.extend(hero_warnings)

    parts = TemplateParts(
        head_meta=render_head_meta(title, description, canonical_href),
        schema_script=schema_script,
        hero=hero_html,
        main_content=body,
        faq=faq_content,
        related=render_related(related_links, settings.DEFAULT_RELATED_IMAGE),
        page_script=PAGE_SCRIPT,
    )
    for warning in body_warnings + schema_warnings + hero_warnings:
        logger.warning("Composition of %s: %s", handle, warning.message)

    html, template_warnings = fill_template(template, parts)
    warnings.extend(template_warnings)

    return AssembledDocument(html=html, warnings=warnings, content=stored_content)


def assemble_document(
    draft: PageDraft,
    template: Optional[str] = None,
    related_links: Sequence[RelatedLink] = (),
) -> AssembledDocument:
    """Build the authoring-time HTML document for *draft*."""
    sections = compose_sections(draft.sections)
    logger.info(
        "Assembling page",
        extra={"handle": draft.handle, "sections": len(sections), "images": len(draft.images)},
    )
    return compose_document(
        handle=draft.handle,
        main_keyword=draft.main_keyword,
        meta_title=draft.meta_title,
        meta_description=draft.meta_description,
        canonical=draft.canonical,
        sections=sections,
        images=draft.images,
        banner_ads=draft.banner_ads,
        banner_interval=draft.banner_interval,
        hero_section=draft.hero_section,
        faq_content=draft.faq_content,
        faq_schema=draft.faq_schema,
        related_links=related_links,
        template=template,
    )
