import re

from bs4 import BeautifulSoup, Comment

# Tags whose entire subtree never contributes readable prose
_REMOVE_TAGS = {
    "script",
    "style",
    "noscript",
    "iframe",
    "object",
    "embed",
    "svg",
    "canvas",
    "template",
}

# A complete tag or a comment; anything else skips the parser entirely
_TAG_RE = re.compile(r"</?[a-zA-Z][^<>]*>|<!--")


def strip_markup(fragment: str) -> str:
    """Reduce a generated HTML fragment to its readable text.

    Content generators sometimes wrap their answer in ``<p>`` or heading
    markup.  The composer stores prose as plain text and re-renders the
    markup itself, so everything but the text is dropped here.  Paragraph
    boundaries become single spaces.
    """
    if not fragment or not _TAG_RE.search(fragment):
        return fragment or ""

    soup = BeautifulSoup(fragment, "lxml")

    for tag in soup.find_all(_REMOVE_TAGS):
        tag.decompose()

    for comment in soup.find_all(string=lambda text: isinstance(text, Comment)):
        comment.extract()

    return soup.get_text(separator=" ")
