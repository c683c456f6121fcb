from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.config import settings
from app.models.assets import BannerAd, HeroSection, ImageAsset
from app.models.page import HANDLE_PATTERN, check_handle
from app.models.section import SectionInput


class PageDraft(BaseModel):
    """Everything the authoring pipeline has produced for one page.

    Drafts are frozen: assembly is a pure function of this value.
    """

    model_config = ConfigDict(frozen=True)

    handle: str = Field(min_length=1, max_length=100, pattern=HANDLE_PATTERN)
    main_keyword: str = Field(min_length=1, max_length=200)
    sections: List[SectionInput] = Field(default_factory=list, max_length=50)
    images: List[ImageAsset] = Field(default_factory=list)
    banner_ads: List[BannerAd] = Field(default_factory=list)
    hero_section: Optional[HeroSection] = None
    faq_content: str = ""
    faq_schema: Optional[str] = None
    meta_title: str = Field(default="", max_length=60)
    meta_description: str = Field(default="", max_length=160)
    canonical: bool = False
    banner_interval: int = Field(
        default_factory=lambda: settings.BANNER_INTERVAL,
        ge=1,
        le=20,
        description="Number of content sections between two banner ads.",
    )

    validate_handle = field_validator("handle")(check_handle)
