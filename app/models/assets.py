from typing import Literal, Optional

from pydantic import BaseModel, Field

ImageSource = Literal["file", "pexels"]
ImageType = Literal["hero", "banner", "content"]


class ImageAsset(BaseModel):
    """One image attached to a page.

    ``url`` is kept as a plain string: stored pages may carry URLs that fail
    validation, and the renderer skips those with a warning instead of
    refusing the whole page.
    """

    url: str
    alt_text: Optional[str] = None
    source: ImageSource = "file"
    type: ImageType = "content"
    sort_order: int = 0


class BannerAd(BaseModel):
    title: str
    description: str = ""
    cta: str = ""
    cta_url: Optional[str] = None
    image: Optional[ImageAsset] = None


class HeroSection(BaseModel):
    enabled: bool = True
    h1: str = ""
    slogan: Optional[str] = None
    span: Optional[str] = None
    button_url: Optional[str] = None
    button_text: Optional[str] = None
    image1: Optional[str] = None
    image2: Optional[str] = None
    alt1: Optional[str] = None
    alt2: Optional[str] = None

    @property
    def has_button(self) -> bool:
        return bool(self.button_url and self.button_url.strip() and self.button_text and self.button_text.strip())


class CompositionWarning(BaseModel):
    """A non-fatal problem found while composing or reconstructing a page."""

    code: str
    message: str
    index: Optional[int] = Field(default=None, description="Section, image or banner index the warning refers to.")
