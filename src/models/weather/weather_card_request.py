from typing import Optional

from pydantic import BaseModel, Field


class WeatherCardRequest(BaseModel):
    """Request body for weather card generation."""

    city: Optional[str] = Field(default=None, description="City to render, e.g. Tokyo")
    aspectRatio: Optional[str] = Field(default=None, description="Aspect ratio, e.g. 9:16")
    language: Optional[str] = Field(
        default=None, description="Target language, or 'Local (Auto)' for the city's own language"
    )
