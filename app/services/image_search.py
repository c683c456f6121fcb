"""Pexels image search adapter.

Returns :class:`ImageAsset` records ready to be attached to a page draft.
Like the other external collaborators, the composition engine never calls
this directly; the authoring API does, before assembly.
"""

import logging
from typing import List, Optional

import httpx

from app.config import settings
from app.models.assets import ImageAsset
from app.services.interfaces import ImageSearchService

logger = logging.getLogger(__name__)

PEXELS_SEARCH_URL = "https://api.pexels.com/v1/search"
MAX_RESULTS = 20


def _photo_to_asset(photo: dict, query: str, sort_order: int) -> Optional[ImageAsset]:
    """Convert one Pexels ``photo`` object to an :class:`ImageAsset`."""
    src = photo.get("src") or {}
    url = src.get("large") or src.get("original") or src.get("medium")
    if not url:
        return None
    alt = (photo.get("alt") or "").strip() or query
    return ImageAsset(url=url, alt_text=alt, source="pexels", type="content", sort_order=sort_order)


class PexelsImageSearch:
    def __init__(self, api_key: Optional[str] = None, timeout: Optional[float] = None) -> None:
        self.api_key = api_key if api_key is not None else settings.PEXELS_API_KEY
        self.timeout = timeout if timeout is not None else settings.PEXELS_TIMEOUT

    async def search(self, query: str, count: int = 12) -> List[ImageAsset]:
        """Search Pexels for *query* and return up to *count* images.

        Raises:
            ValueError: if no API key is configured or *query* is empty.
            httpx.HTTPError: on network or HTTP errors.
        """
        if not self.api_key:
            raise ValueError("PEXELS_API_KEY is not configured.")
        query = query.strip()
        if not query:
            raise ValueError("Search query must not be empty.")
        count = max(1, min(count, MAX_RESULTS))

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.get(
                PEXELS_SEARCH_URL,
                params={"query": query, "per_page": count},
                headers={"Authorization": self.api_key},
            )
            response.raise_for_status()
            payload = response.json()

        assets: List[ImageAsset] = []
        for photo in payload.get("photos", []):
            asset = _photo_to_asset(photo, query, len(assets))
            if asset is not None:
                assets.append(asset)
        logger.info("Pexels search returned %d images for %r", len(assets), query)
        return assets[:count]


async def search_images(
    query: str, count: int = 12, service: Optional[ImageSearchService] = None
) -> List[ImageAsset]:
    return await (service or PexelsImageSearch()).search(query, count)
