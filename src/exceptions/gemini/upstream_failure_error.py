from src.exceptions.gemini.gemini_service_error import GeminiServiceError


class UpstreamFailureError(GeminiServiceError):
    """Exception for transport or runtime failures of the Gemini call."""

    pass
