from src.models.weather.weather_card import (
    AUTO_LANGUAGE,
    FactsRejection,
    PipelineState,
    RejectionReason,
    WeatherCardResult,
    WeatherFacts,
    WeatherQuery,
    parse_weather_facts,
    strip_code_fences,
)
from src.models.weather.weather_card_request import WeatherCardRequest

__all__ = [
    "AUTO_LANGUAGE",
    "FactsRejection",
    "PipelineState",
    "RejectionReason",
    "WeatherCardRequest",
    "WeatherCardResult",
    "WeatherFacts",
    "WeatherQuery",
    "parse_weather_facts",
    "strip_code_fences",
]
