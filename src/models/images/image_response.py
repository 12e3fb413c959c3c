from typing import List

from pydantic import BaseModel, Field


class ImageUrl(BaseModel):
    url: str = Field(..., description="Image as a data URI")


class ImagesResponse(BaseModel):
    """Response body shared by all generation endpoints."""

    images: List[ImageUrl] = Field(..., description="Generated images")
