"""Text normalisation utilities: heading titles, anchor slugs, canonical URLs."""

import re
import unicodedata

_NON_ALNUM_RE = re.compile(r"[^a-z0-9]+")
_WHITESPACE_RE = re.compile(r"\s+")


def collapse_whitespace(text: str) -> str:
    """Collapse every whitespace run in *text* to one space and strip the ends."""
    return _WHITESPACE_RE.sub(" ", text).strip()


def title_case(keyword: str) -> str:
    """Capitalise each space-separated word of *keyword*.

    The first character of a word is title-cased ("ß" becomes "Ss", not "SS")
    and the rest lowered.  Applying it twice gives the same result as applying
    it once.
    """
    words = collapse_whitespace(keyword).split(" ")
    return " ".join(word[:1].title() + word[1:].lower() for word in words)


def heading_anchor(text: str) -> str:
    """Return the anchor id used for a heading.

    The slug is lowercased, ASCII-only and uses hyphens as separators.  Two
    headings with the same visible text get the same id; callers are not
    protected against that collision.
    """
    slug = unicodedata.normalize("NFKD", text)
    slug = slug.encode("ascii", "ignore").decode("ascii")
    slug = _NON_ALNUM_RE.sub("-", slug.lower()).strip("-")
    return slug or "section"


def canonical_url(site_url: str, handle: str) -> str:
    """Return the public URL of the page published under *handle*."""
    return f"{site_url.rstrip('/')}/{handle}"
