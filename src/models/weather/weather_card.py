import json
import re
from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from src.models.gemini.gateway import GeneratedArtifact

AUTO_LANGUAGE = "Local (Auto)"

WEATHER_FACT_FIELDS = (
    "native_city_name",
    "native_date_formatted",
    "weather_condition",
    "temp_range",
)

_CODE_FENCE_PATTERN = re.compile(r"```[a-zA-Z]*")


class PipelineState(str, Enum):
    """States of the two-stage weather card pipeline."""

    START = "start"
    REASONING_REQUESTED = "reasoning_requested"
    FACTS_PARSED = "facts_parsed"
    IMAGE_PROMPT_BUILT = "image_prompt_built"
    IMAGE_REQUESTED = "image_requested"
    DONE = "done"
    FAILED = "failed"


class WeatherQuery(BaseModel):
    """Input of a weather card request."""

    model_config = ConfigDict(frozen=True)

    city: str = Field(..., min_length=1, description="City to render")
    aspect_ratio: Optional[str] = Field(default=None, description="Aspect ratio token, e.g. 9:16")
    language: str = Field(
        default=AUTO_LANGUAGE, description="Target language or the local-language sentinel"
    )


class WeatherFacts(BaseModel):
    """Localized weather data returned by the reasoning step."""

    model_config = ConfigDict(frozen=True)

    native_city_name: str = Field(..., min_length=1, description="City name in the target language")
    native_date_formatted: str = Field(..., min_length=1, description="Local date in the target language")
    weather_condition: str = Field(..., min_length=1, description="Weather condition in the target language")
    temp_range: str = Field(..., min_length=1, description="Temperature range, e.g. 15°C - 20°C")


class RejectionReason(str, Enum):
    INVALID_JSON = "invalid_json"
    NOT_AN_OBJECT = "not_an_object"
    ERROR_MARKER = "error_marker"
    MISSING_FIELDS = "missing_fields"


class FactsRejection(BaseModel):
    """Why a reasoning-step response could not be turned into WeatherFacts."""

    model_config = ConfigDict(frozen=True)

    reason: RejectionReason
    detail: str


class WeatherCardResult(BaseModel):
    """Output of a successful weather card pipeline run."""

    model_config = ConfigDict(frozen=True)

    artifact: GeneratedArtifact
    facts: WeatherFacts


def strip_code_fences(text: str) -> str:
    """Remove markdown code-fence markers (```json, ```) around model output."""
    return _CODE_FENCE_PATTERN.sub("", text).strip()


def parse_weather_facts(text: str) -> Union[WeatherFacts, FactsRejection]:
    """
    Parse the reasoning-step text into WeatherFacts.

    Only the four known fields are read from the decoded object; anything
    else the model adds is ignored.

    Args:
        text: Raw text returned by the model, possibly wrapped in code fences

    Returns:
        WeatherFacts when the text is a valid record, otherwise a FactsRejection
    """
    try:
        data = json.loads(strip_code_fences(text or ""))
    except json.JSONDecodeError as e:
        return FactsRejection(reason=RejectionReason.INVALID_JSON, detail=str(e))

    if not isinstance(data, dict):
        return FactsRejection(
            reason=RejectionReason.NOT_AN_OBJECT,
            detail=f"Expected a JSON object, got {type(data).__name__}",
        )

    # A null or empty marker is not a rejection
    if data.get("error"):
        return FactsRejection(reason=RejectionReason.ERROR_MARKER, detail=str(data["error"]))

    missing = [name for name in WEATHER_FACT_FIELDS if not _is_text(data.get(name))]
    if missing:
        return FactsRejection(
            reason=RejectionReason.MISSING_FIELDS,
            detail=f"Missing or empty fields: {', '.join(missing)}",
        )

    return WeatherFacts(**{name: data[name].strip() for name in WEATHER_FACT_FIELDS})


def _is_text(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())
