from typing import Literal, Optional

from pydantic import BaseModel, Field

from app.models.assets import ImageAsset

HeadingLevel = Literal["h2", "h3"]
LayoutSide = Literal["left", "right"]


class SectionInput(BaseModel):
    """One generated prose unit as handed over by the content generator."""

    keyword: str = Field(min_length=1, max_length=200)
    generated_text: str = ""
    heading_level: HeadingLevel = "h2"


class ContentSection(BaseModel):
    keyword: str
    heading_level: HeadingLevel = "h2"
    body_text: str = ""
    layout_side: LayoutSide = "left"
    sort_order: int = 0
    image: Optional[ImageAsset] = None  # assigned content image, None keeps the placeholder
