from src.exceptions.gemini.gemini_service_error import GeminiServiceError


class EmptyResultError(GeminiServiceError):
    """Exception raised when the model answers without a usable payload."""

    pass
