from src.exceptions.base import ImageStudioError
from src.exceptions.gemini import (
    EmptyResultError,
    GeminiServiceError,
    MissingInputError,
    NotConfiguredError,
    UpstreamFailureError,
    UpstreamTimeoutError,
)
from src.exceptions.validation import InputValidationError
from src.exceptions.weather import (
    InvalidCityError,
    InvalidFactsError,
    NoImageError,
    WeatherCardError,
)

__all__ = [
    "EmptyResultError",
    "GeminiServiceError",
    "ImageStudioError",
    "InputValidationError",
    "InvalidCityError",
    "InvalidFactsError",
    "MissingInputError",
    "NoImageError",
    "NotConfiguredError",
    "UpstreamFailureError",
    "UpstreamTimeoutError",
    "WeatherCardError",
]
