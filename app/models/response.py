from typing import List

from pydantic import BaseModel, Field

from app.models.assets import CompositionWarning
from app.models.page import Page


class AssembleResponse(BaseModel):
    html: str
    warnings: List[CompositionWarning] = Field(default_factory=list)


class PageResponse(BaseModel):
    page: Page
    html: str
    warnings: List[CompositionWarning] = Field(default_factory=list)
