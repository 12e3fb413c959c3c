from src.exceptions.gemini.gemini_service_error import GeminiServiceError


class MissingInputError(GeminiServiceError):
    """Exception raised when a gateway request lacks its prompt or image."""

    pass
