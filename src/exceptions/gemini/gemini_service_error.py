from src.exceptions.base import ImageStudioError


class GeminiServiceError(ImageStudioError):
    """Base exception for Gemini gateway errors."""

    pass
