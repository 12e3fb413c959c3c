from src.exceptions.gemini.gemini_service_error import GeminiServiceError


class NotConfiguredError(GeminiServiceError):
    """Exception raised when no Gemini API key is configured."""

    pass
