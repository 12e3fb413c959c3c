from src.exceptions.gemini.empty_result_error import EmptyResultError
from src.exceptions.gemini.gemini_service_error import GeminiServiceError
from src.exceptions.gemini.missing_input_error import MissingInputError
from src.exceptions.gemini.not_configured_error import NotConfiguredError
from src.exceptions.gemini.upstream_failure_error import UpstreamFailureError
from src.exceptions.gemini.upstream_timeout_error import UpstreamTimeoutError

__all__ = [
    "EmptyResultError",
    "GeminiServiceError",
    "MissingInputError",
    "NotConfiguredError",
    "UpstreamFailureError",
    "UpstreamTimeoutError",
]
