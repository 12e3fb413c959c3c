from datetime import datetime, timezone
from typing import Any, Dict, Optional, Tuple, Type

from fastapi import status
from fastapi.responses import JSONResponse

from src.exceptions import (
    EmptyResultError,
    ImageStudioError,
    InputValidationError,
    InvalidCityError,
    InvalidFactsError,
    MissingInputError,
    NoImageError,
    NotConfiguredError,
    UpstreamFailureError,
    UpstreamTimeoutError,
)
from src.models.gemini.gateway import GeneratedArtifact
from src.models.weather.weather_card import WeatherCardResult

# Checked in order, so subclasses come before their bases
ERROR_STATUS_CODES: Tuple[Tuple[Type[Exception], int], ...] = (
    (NotConfiguredError, status.HTTP_500_INTERNAL_SERVER_ERROR),
    (UpstreamTimeoutError, status.HTTP_504_GATEWAY_TIMEOUT),
    (InvalidCityError, status.HTTP_400_BAD_REQUEST),
    (InvalidFactsError, status.HTTP_400_BAD_REQUEST),
    (InputValidationError, status.HTTP_400_BAD_REQUEST),
    (MissingInputError, status.HTTP_400_BAD_REQUEST),
    (EmptyResultError, status.HTTP_400_BAD_REQUEST),
    (NoImageError, status.HTTP_400_BAD_REQUEST),
    (UpstreamFailureError, status.HTTP_400_BAD_REQUEST),
)

DEFAULT_ERROR_STATUS = status.HTTP_400_BAD_REQUEST


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def status_code_for(error: ImageStudioError) -> int:
    """Look up the HTTP status for a service error."""
    for error_type, status_code in ERROR_STATUS_CODES:
        if isinstance(error, error_type):
            return status_code
    return DEFAULT_ERROR_STATUS


def error_body(message: str, status_code: int) -> Dict[str, Any]:
    return {"error": message, "status_code": status_code, "timestamp": utc_timestamp()}


def error_response(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=error_body(message, status_code))


def images_body(artifact: GeneratedArtifact, weather_data: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
    """
    Build the success body shared by the generation endpoints.

    Args:
        artifact: Generated image
        weather_data: Facts shown on a weather card, omitted for plain edits/generations

    Returns:
        {"images": [{"url": <data uri>}]} plus "weatherData" when given
    """
    body: Dict[str, Any] = {"images": [{"url": artifact.data_uri}]}
    if weather_data is not None:
        body["weatherData"] = weather_data
    return body


def weather_card_body(result: WeatherCardResult) -> Dict[str, Any]:
    return images_body(result.artifact, result.facts.model_dump())
