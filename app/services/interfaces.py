"""Interfaces of the collaborators the composition engine consumes.

The engine itself never calls these: it receives their already-resolved
output.  They document what the API layer wires together.
"""

from typing import List, Protocol

from app.models.assets import ImageAsset
from app.models.page import Page
from app.models.related import InternalLink


class ContentGenerationService(Protocol):
    def generate(self, keyword: str) -> str:
        """Return an HTML fragment of prose about *keyword*."""


class ImageSearchService(Protocol):
    async def search(self, query: str, count: int = 12) -> List[ImageAsset]:
        ...


class PageStore(Protocol):
    def create(self, page: Page) -> Page:
        ...

    def get(self, page_id: str) -> Page:
        ...

    def get_by_handle(self, handle: str) -> Page:
        ...

    def list_links(self, page_id: str) -> List[InternalLink]:
        ...
