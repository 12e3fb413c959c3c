from typing import Optional

from pydantic import BaseModel, Field


class GenerateImageRequest(BaseModel):
    """Request body for text-to-image generation."""

    prompt: Optional[str] = Field(default=None, description="Description of the image to generate")
    negativePrompt: Optional[str] = Field(default=None, description="Things the image should avoid")
