from src.exceptions.base import ImageStudioError


class WeatherCardError(ImageStudioError):
    """Base exception for weather card pipeline errors."""

    pass
