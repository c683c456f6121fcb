"""HTML fragment rendering for landing pages.

Fragments live as Jinja2 templates under ``app/templates/fragments`` and are
rendered through one autoescaping environment.  Every function here is a pure
function of its arguments: no clock, no randomness and no locale-dependent
formatting, so rendering the same inputs twice yields the same bytes.  The
only markup inserted verbatim is the FAQ block, which arrives as finished
HTML from the FAQ generator.
"""

import json
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from jinja2 import Environment, FileSystemLoader
from markupsafe import Markup

from app.models.assets import BannerAd, CompositionWarning, HeroSection, ImageAsset
from app.models.related import RelatedLink
from app.models.section import ContentSection
from app.services.banners import BannerPlacement
from app.services.images import is_valid_image_url
from app.services.normalizer import heading_anchor, title_case

FRAGMENTS_DIR = Path(__file__).resolve().parent.parent / "templates" / "fragments"

_env = Environment(
    loader=FileSystemLoader(str(FRAGMENTS_DIR)),
    autoescape=True,
    trim_blocks=True,
    lstrip_blocks=True,
)

# Marker left in a content row until an image is assigned to it
IMAGE_PLACEHOLDER = "<!-- Image will be added by user later -->"

_SAFE_LINK_PREFIXES = ("#", "/", "http://", "https://", "mailto:", "tel:")

PAGE_SCRIPT = """<script>
    (function () {
        document.querySelectorAll('a[href^="#"]').forEach(function (link) {
            link.addEventListener('click', function (event) {
                var id = link.getAttribute('href').slice(1);
                var target = id ? document.getElementById(id) : null;
                if (!target) {
                    return;
                }
                event.preventDefault();
                target.scrollIntoView({ behavior: 'smooth', block: 'start' });
            });
        });
        var backToTop = document.getElementById('back-to-top');
        if (backToTop) {
            var toggle = function () {
                backToTop.style.display = window.scrollY > 300 ? 'block' : 'none';
            };
            window.addEventListener('scroll', toggle);
            toggle();
        }
    })();
</script>"""


def _safe_href(url: Optional[str], fallback: str) -> str:
    if url and url.strip().lower().startswith(_SAFE_LINK_PREFIXES):
        return url.strip()
    return fallback


# ---------------------------------------------------------------------------
# Head
# ---------------------------------------------------------------------------

def render_head_meta(title: str, description: str, canonical: Optional[str] = None) -> str:
    """Return the ``<title>``, description, Open Graph, Twitter and canonical tags."""
    return _env.get_template("head_meta.html").render(
        title=title,
        description=description,
        canonical=canonical,
    )


def _reject_constant(name: str) -> None:
    raise ValueError(f"{name} is not valid JSON")


def render_schema_script(faq_schema: Optional[str]) -> Tuple[str, List[CompositionWarning]]:
    """Return the JSON-LD script tag for *faq_schema*, or ``""``.

    A missing schema is not an error.  A schema that does not parse as a JSON
    object or array is dropped and reported as a warning.
    """
    if faq_schema is None or not faq_schema.strip():
        return "", []

    try:
        data = json.loads(faq_schema, parse_constant=_reject_constant)
    except ValueError as exc:
        return "", [
            CompositionWarning(code="faq_schema_invalid", message=f"FAQ schema is not valid JSON: {exc}")
        ]

    if not isinstance(data, (dict, list)):
        return "", [
            CompositionWarning(code="faq_schema_invalid", message="FAQ schema must be a JSON object or array.")
        ]

    # "</" would let the payload close the script element early
    payload = json.dumps(data, ensure_ascii=False, indent=2).replace("</", "<\\/")
    return f'<script type="application/ld+json">\n{payload}\n</script>', []


# ---------------------------------------------------------------------------
# Hero
# ---------------------------------------------------------------------------

def _hero_slot(
    slot: int,
    url: Optional[str],
    alt: Optional[str],
    default: Optional[ImageAsset],
    main_keyword: str,
) -> Tuple[Optional[dict], List[CompositionWarning]]:
    warnings: List[CompositionWarning] = []
    src: Optional[str] = None
    alt_text = alt.strip() if alt and alt.strip() else None

    if url and url.strip():
        if is_valid_image_url(url):
            src = url.strip()
        else:
            warnings.append(
                CompositionWarning(
                    code="image_invalid_url",
                    message=f"Hero image {slot} has an unusable URL; the template image is kept.",
                    index=slot,
                )
            )
    if src is None and default is not None:
        src = default.url
        alt_text = alt_text or default.alt_text

    if src is None:
        return None, warnings

    return {
        "src": src,
        "alt": alt_text or main_keyword,
        "wrapper_class": "image-wrapper" if slot == 1 else "image-wrapper image-second",
        "overlay_class": "overlay-first" if slot == 1 else "overlay-second",
    }, warnings


def render_hero(
    hero: Optional[HeroSection],
    main_keyword: str,
    defaults: Sequence[Optional[ImageAsset]] = (None, None),
) -> Tuple[Optional[str], List[CompositionWarning]]:
    """Return the hero block, or ``None`` when the hero is absent or disabled.

    *defaults* holds the template's own image for slot 1 and slot 2; a slot
    without a usable image of its own falls back to it.
    """
    if hero is None or not hero.enabled:
        return None, []

    warnings: List[CompositionWarning] = []
    slots = []
    for slot, url, alt in ((1, hero.image1, hero.alt1), (2, hero.image2, hero.alt2)):
        default = defaults[slot - 1] if len(defaults) >= slot else None
        context, slot_warnings = _hero_slot(slot, url, alt, default, main_keyword)
        warnings.extend(slot_warnings)
        if context is not None:
            slots.append(context)

    html = _env.get_template("hero.html").render(
        heading=hero.h1.strip() or main_keyword,
        span=(hero.span or "").strip(),
        slogan=(hero.slogan or "").strip(),
        link=_safe_href(hero.button_url, "#content") if hero.has_button else None,
        button_text=(hero.button_text or "").strip(),
        slots=slots,
    )
    return html, warnings


# ---------------------------------------------------------------------------
# Content body
# ---------------------------------------------------------------------------

def render_section_row(section: ContentSection) -> str:
    """Return one two-column content row.

    ``layout_side`` names the side the image sits on: ``left`` renders the
    4-column image cell before the 8-column text cell, ``right`` the reverse.
    """
    heading_text = title_case(section.keyword)
    image = section.image
    return _env.get_template("section_row.html").render(
        layout=section.layout_side,
        cells=("image", "text") if section.layout_side == "left" else ("text", "image"),
        level=section.heading_level,
        anchor=heading_anchor(heading_text),
        heading=heading_text,
        body=section.body_text,
        image_url=image.url.strip() if image is not None else None,
        image_alt=(image.alt_text or "") if image is not None else "",
        placeholder=Markup(IMAGE_PLACEHOLDER),
    )


def render_banner(banner: BannerAd, index: int, main_keyword: str) -> Tuple[str, List[CompositionWarning]]:
    """Return the banner block for the *index*-th banner (0-based)."""
    warnings: List[CompositionWarning] = []
    image_url = None
    image_alt = ""
    if banner.image is not None:
        if is_valid_image_url(banner.image.url):
            image_url = banner.image.url.strip()
            image_alt = banner.image.alt_text or banner.title or main_keyword
        else:
            warnings.append(
                CompositionWarning(
                    code="image_invalid_url",
                    message=f"Banner {index + 1} image has an unusable URL; a placeholder is shown.",
                    index=index,
                )
            )

    html = _env.get_template("banner.html").render(
        index=index,
        image_url=image_url,
        image_alt=image_alt,
        title=banner.title.strip() or "Banner Ad",
        description=banner.description.strip(),
        cta=banner.cta.strip(),
        cta_href=_safe_href(banner.cta_url, "#faq"),
    )
    return html, warnings


def render_body(
    sections: Sequence[ContentSection],
    placements: Sequence[BannerPlacement] = (),
    main_keyword: str = "",
) -> Tuple[str, List[CompositionWarning]]:
    """Concatenate content rows and banner blocks in document order."""
    warnings: List[CompositionWarning] = []
    banners_after = {p.after_section: p for p in placements}
    blocks: List[str] = []
    for position, section in enumerate(sections, start=1):
        blocks.append(render_section_row(section))
        placement = banners_after.get(position)
        if placement is not None:
            banner_html, banner_warnings = render_banner(placement.banner, placement.banner_index, main_keyword)
            blocks.append(banner_html)
            warnings.extend(banner_warnings)
    return "\n\n".join(blocks), warnings


# ---------------------------------------------------------------------------
# Related pages
# ---------------------------------------------------------------------------

def render_related(links: Sequence[RelatedLink], default_image: str) -> str:
    """Return the related-pages carousel.

    The container is always emitted so client scripts find a stable DOM; with
    no links it is empty and hidden.
    """
    items = [
        {
            "href": f"/{link.target_page.handle}",
            "keyword": link.target_page.main_keyword,
            "excerpt": link.target_page.excerpt,
            "image": link.target_page.hero_image if is_valid_image_url(link.target_page.hero_image) else default_image,
        }
        for link in sorted(links, key=lambda link: link.sort_order)
    ]
    return _env.get_template("related.html").render(items=items)
