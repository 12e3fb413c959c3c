from src.exceptions.gemini.upstream_failure_error import UpstreamFailureError


class UpstreamTimeoutError(UpstreamFailureError):
    """Exception for Gemini calls that exceeded the request timeout."""

    pass
