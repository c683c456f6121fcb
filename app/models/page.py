from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from app.models.assets import BannerAd, HeroSection, ImageAsset

PageStatus = Literal["draft", "published", "archived"]

HANDLE_PATTERN = r"^[a-z0-9-]+$"


def check_handle(value: str) -> str:
    if value.startswith("-") or value.endswith("-"):
        raise ValueError("Handle cannot start or end with a hyphen")
    return value


class Page(BaseModel):
    """Persisted landing page: everything needed to rebuild its HTML."""

    id: str
    handle: str = Field(min_length=1, max_length=100, pattern=HANDLE_PATTERN)
    main_keyword: str
    content: str = ""  # body rows with image placeholder markers
    faq_content: str = ""
    faq_schema: Optional[str] = None  # raw JSON-LD text as generated
    meta_title: str = ""
    meta_description: str = ""
    canonical: bool = False
    banner_interval: int = Field(default=2, ge=1, le=20)
    hero_section: Optional[HeroSection] = None
    banner_ads: List[BannerAd] = Field(default_factory=list)
    images: List[ImageAsset] = Field(default_factory=list)
    status: PageStatus = "draft"
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    validate_handle = field_validator("handle")(check_handle)


class PageSummary(BaseModel):
    id: str
    handle: str
    main_keyword: str
    status: PageStatus
    updated_at: Optional[datetime] = None


class PageUpdate(BaseModel):
    """Partial update of the stored page fields; unset fields stay untouched."""

    main_keyword: Optional[str] = None
    content: Optional[str] = None
    faq_content: Optional[str] = None
    faq_schema: Optional[str] = None
    meta_title: Optional[str] = Field(default=None, max_length=60)
    meta_description: Optional[str] = Field(default=None, max_length=160)
    canonical: Optional[bool] = None
    banner_interval: Optional[int] = Field(default=None, ge=1, le=20)
    hero_section: Optional[HeroSection] = None
    banner_ads: Optional[List[BannerAd]] = None
    images: Optional[List[ImageAsset]] = None


class StatusUpdate(BaseModel):
    status: PageStatus
