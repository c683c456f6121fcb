from pydantic import BaseModel, Field


class ImageSearchRequest(BaseModel):
    query: str = Field(
        min_length=1,
        max_length=100,
        pattern=r"^[a-zA-Z0-9\s\-_]+$",
        description="Search terms, usually the page's main keyword.",
    )
    count: int = Field(default=12, ge=1, le=20, description="Number of images to return (1–20).")
