"""Base template loading and single-pass placeholder substitution.

The template marks its regions with HTML comments.  Substitution happens in
one scan over the *original* template, so text inserted for one marker can
never be mistaken for another marker, and each marker is filled at most once.
"""

import logging
import re
from functools import lru_cache
from pathlib import Path
from typing import Dict, List, NamedTuple, Optional, Tuple

from bs4 import BeautifulSoup

from app.models.assets import CompositionWarning, ImageAsset

logger = logging.getLogger(__name__)

BUNDLED_TEMPLATE = Path(__file__).resolve().parent.parent / "templates" / "landing.html"

HEAD_META = "HEAD_META"
SCHEMA_SCRIPT = "SCHEMA_SCRIPT"
HERO = "HERO"
MAIN_CONTENT = "MAIN_CONTENT"
FAQ_SECTION = "FAQ_SECTION"
RELATED_PAGES_SECTION = "RELATED_PAGES_SECTION"
PAGE_SCRIPT = "PAGE_SCRIPT"

_HEAD_MARKERS = (HEAD_META, SCHEMA_SCRIPT)
# Document order of the body regions; used when a template lacks some of them
_BODY_MARKERS = (HERO, MAIN_CONTENT, FAQ_SECTION, RELATED_PAGES_SECTION, PAGE_SCRIPT)

_HERO_START = "<!-- HERO_START -->"
_HERO_END = "<!-- HERO_END -->"
_HERO_REGION_RE = re.compile(re.escape(_HERO_START) + r".*?" + re.escape(_HERO_END), re.DOTALL)
_MARKER_RE = re.compile(
    re.escape(_HERO_START)
    + r".*?"
    + re.escape(_HERO_END)
    + r"|<!-- (HEAD_META|SCHEMA_SCRIPT|MAIN_CONTENT|FAQ_SECTION|RELATED_PAGES_SECTION|PAGE_SCRIPT) -->",
    re.DOTALL,
)


class TemplateParts(NamedTuple):
    head_meta: str
    schema_script: str
    hero: Optional[str]  # None removes the hero region entirely
    main_content: str
    faq: str
    related: str
    page_script: str


@lru_cache(maxsize=8)
def _read_template(path: str) -> str:
    return Path(path).read_text(encoding="utf-8")


def load_template(path: Optional[str] = None) -> str:
    """Return the base template at *path*, or the bundled landing template."""
    return _read_template(str(path or BUNDLED_TEMPLATE))


def _marker_text(name: str) -> str:
    if name == HERO:
        return f"{_HERO_START}{_HERO_END}"
    return f"<!-- {name} -->"


def _present_markers(template: str) -> set:
    found = set()
    for match in _MARKER_RE.finditer(template):
        found.add(match.group(1) or HERO)
    return found


def _insert_before(template: str, closing_tag: str, text: str, last: bool) -> str:
    lowered = template.lower()
    pos = lowered.rfind(closing_tag) if last else lowered.find(closing_tag)
    if pos == -1:
        return template + text
    return template[:pos] + text + template[pos:]


def hero_defaults(template: str) -> Tuple[Optional[ImageAsset], Optional[ImageAsset]]:
    """Return the template's own hero images for slot 1 and slot 2.

    Slots are ``<img data-hero-slot="1|2">`` elements inside the hero region.
    """
    match = _HERO_REGION_RE.search(template)
    if not match:
        return None, None

    soup = BeautifulSoup(match.group(0), "lxml")
    slots: Dict[str, ImageAsset] = {}
    for img in soup.find_all("img", attrs={"data-hero-slot": True}):
        src = img.get("src")
        slot = str(img["data-hero-slot"])
        if src and slot not in slots:
            slots[slot] = ImageAsset(url=str(src), alt_text=str(img.get("alt") or ""), type="hero")
    return slots.get("1"), slots.get("2")


def fill_template(template: str, parts: TemplateParts) -> Tuple[str, List[CompositionWarning]]:
    """Substitute every region of *template* with *parts*.

    Markers missing from a custom template are added before ``</head>`` or
    ``</body>`` (with a warning) so that no part of the page is lost.
    """
    warnings: List[CompositionWarning] = []
    present = _present_markers(template)

    missing_head = [name for name in _HEAD_MARKERS if name not in present]
    missing_body = [name for name in _BODY_MARKERS if name not in present]
    for name in missing_head + missing_body:
        warnings.append(
            CompositionWarning(
                code="template_marker_missing",
                message=f"Template has no {name} marker; the region is appended instead.",
            )
        )
        logger.warning("Template: marker %s missing, appending region", name)

    if missing_head:
        template = _insert_before(template, "</head>", "".join(_marker_text(n) for n in missing_head), last=False)
    if missing_body:
        template = _insert_before(template, "</body>", "".join(_marker_text(n) for n in missing_body), last=True)

    values = {
        HEAD_META: parts.head_meta,
        SCHEMA_SCRIPT: parts.schema_script,
        HERO: parts.hero or "",
        MAIN_CONTENT: parts.main_content,
        FAQ_SECTION: parts.faq,
        RELATED_PAGES_SECTION: parts.related,
        PAGE_SCRIPT: parts.page_script,
    }
    filled: set = set()

    def _replace(match: re.Match) -> str:
        name = match.group(1) or HERO
        if name in filled:
            return match.group(0)
        filled.add(name)
        return values[name]

    return _MARKER_RE.sub(_replace, template), warnings
