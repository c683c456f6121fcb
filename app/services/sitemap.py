"""sitemap.xml and robots.txt generation for published landing pages."""

from typing import Iterable, List
from xml.etree import ElementTree

from app.models.page import Page
from app.services.normalizer import canonical_url

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"

# Sites above this size get a crawl delay for generic bots
_CRAWL_DELAY_THRESHOLD = 1000

_DISALLOWED_PATHS = ("/pages", "/assemble", "/search-images", "/docs")


def _add_url(urlset: ElementTree.Element, loc: str, changefreq: str, priority: str, lastmod: str = "") -> None:
    url = ElementTree.SubElement(urlset, "url")
    ElementTree.SubElement(url, "loc").text = loc
    if lastmod:
        ElementTree.SubElement(url, "lastmod").text = lastmod
    ElementTree.SubElement(url, "changefreq").text = changefreq
    ElementTree.SubElement(url, "priority").text = priority


def published_pages(pages: Iterable[Page]) -> List[Page]:
    return [page for page in pages if page.status == "published"]


def build_sitemap(site_url: str, pages: Iterable[Page]) -> str:
    """Return a sitemap listing the home page and every published page."""
    urlset = ElementTree.Element("urlset", xmlns=SITEMAP_NS)
    _add_url(urlset, site_url.rstrip("/") + "/", "daily", "1.0")
    for page in published_pages(pages):
        lastmod = page.updated_at.isoformat() if page.updated_at else ""
        _add_url(urlset, canonical_url(site_url, page.handle), "weekly", "0.8", lastmod)

    body = ElementTree.tostring(urlset, encoding="unicode")
    return f'<?xml version="1.0" encoding="UTF-8"?>\n{body}'


def build_robots(site_url: str, pages: Iterable[Page]) -> str:
    """Return robots.txt rules pointing crawlers at the sitemap."""
    published = published_pages(pages)
    lines = ["User-agent: *", "Allow: /"]
    if len(published) > _CRAWL_DELAY_THRESHOLD:
        lines.append("Crawl-delay: 1")
    lines.extend(f"Disallow: {path}" for path in _DISALLOWED_PATHS)
    lines.extend(["", f"Sitemap: {site_url.rstrip('/')}/sitemap.xml", ""])
    return "\n".join(lines)
