from typing import List, Optional

from pydantic import BaseModel, Field


class RelatedPage(BaseModel):
    handle: str
    main_keyword: str
    excerpt: str = ""
    hero_image: Optional[str] = None


class RelatedLink(BaseModel):
    target_page: RelatedPage
    sort_order: int = 0


class InternalLink(BaseModel):
    """Stored association between a page and one of its related pages."""

    main_page_id: str
    related_page_id: str
    sort_order: int = 0


class RelatedLinksRequest(BaseModel):
    related_page_ids: List[str] = Field(
        default_factory=list,
        max_length=20,
        description="Related page ids in display order.",
    )
