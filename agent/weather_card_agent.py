from datetime import datetime, timezone
from typing import Callable, Optional

import structlog

from agent.prompt_builder import build_image_prompt, build_reasoning_prompt, resolve_aspect_ratio
from src.exceptions.gemini import EmptyResultError
from src.exceptions.weather import InvalidCityError, InvalidFactsError, NoImageError
from src.models.weather.weather_card import (
    FactsRejection,
    PipelineState,
    RejectionReason,
    WeatherCardResult,
    WeatherFacts,
    WeatherQuery,
    parse_weather_facts,
)
from src.services.gemini_service import GeminiService

logger = structlog.get_logger(__name__)

UTC_TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class WeatherCardAgent:
    """
    Two-stage weather card pipeline.

    The text model first resolves the city into localized weather facts,
    which are then embedded into a fixed visual template for the image model.
    Both calls are awaited one after the other and nothing is retried: any
    failure ends the run without partial output.
    """

    def __init__(
        self,
        gemini_service: GeminiService,
        default_aspect_ratio: str = "9:16",
        clock: Callable[[], datetime] = utc_now,
    ):
        self.gemini_service = gemini_service
        self.default_aspect_ratio = default_aspect_ratio
        self._clock = clock
        self.state = PipelineState.START

    async def run(self, query: WeatherQuery) -> WeatherCardResult:
        """
        Generate a weather card for a city.

        Args:
            query: City, aspect ratio and target language

        Returns:
            WeatherCardResult with the generated image and the facts shown on it

        Raises:
            InvalidCityError: If the model reports the city does not exist
            InvalidFactsError: If the reasoning step output is not valid weather data
            NoImageError: If the image step returns no image
            GeminiServiceError: For gateway failures (configuration, transport, timeout)
        """
        self.state = PipelineState.START
        current_utc_time = self._clock().astimezone(timezone.utc).strftime(UTC_TIMESTAMP_FORMAT)
        aspect_ratio = resolve_aspect_ratio(query.aspect_ratio, self.default_aspect_ratio)

        logger.info(
            "Starting weather card pipeline",
            city=query.city,
            aspect_ratio=aspect_ratio,
            language=query.language,
            utc_time=current_utc_time,
        )

        try:
            # Reasoning step
            reasoning_prompt = build_reasoning_prompt(query.city, current_utc_time, query.language)
            self._transition(PipelineState.REASONING_REQUESTED)
            reasoning = await self.gemini_service.generate_text(reasoning_prompt)

            facts = self._parse_facts(query.city, reasoning.text)
            self._transition(PipelineState.FACTS_PARSED, **facts.model_dump())

            # Image step
            image_prompt = build_image_prompt(facts, aspect_ratio, query.language)
            self._transition(PipelineState.IMAGE_PROMPT_BUILT)

            self._transition(PipelineState.IMAGE_REQUESTED)
            try:
                artifact = await self.gemini_service.generate_image(image_prompt)
            except EmptyResultError as e:
                raise NoImageError(f"No image generated for weather card: {str(e)}")

            self._transition(PipelineState.DONE)

        except Exception as e:
            logger.error(
                "Weather card pipeline failed",
                city=query.city,
                state=self.state.value,
                error_type=type(e).__name__,
                error=str(e),
            )
            self.state = PipelineState.FAILED
            raise

        logger.info("Weather card generated successfully", city=query.city)
        return WeatherCardResult(artifact=artifact, facts=facts)

    @staticmethod
    def _parse_facts(city: str, text: str) -> WeatherFacts:
        result = parse_weather_facts(text)
        if isinstance(result, WeatherFacts):
            return result

        logger.warning(
            "Rejected reasoning step output",
            city=city,
            reason=result.reason.value,
            detail=result.detail,
            raw_preview=(text or "")[:200],
        )
        raise _rejection_error(city, result)

    def _transition(self, state: PipelineState, **context):
        logger.debug("Weather card pipeline transition", previous=self.state.value, state=state.value, **context)
        self.state = state


def _rejection_error(city: str, rejection: FactsRejection) -> Exception:
    if rejection.reason == RejectionReason.ERROR_MARKER:
        return InvalidCityError(city, f"Invalid city: {city}. {rejection.detail}")
    return InvalidFactsError(f"Failed to parse weather data for {city}: {rejection.detail}")


async def generate_weather_card(
    gemini_service: GeminiService,
    query: WeatherQuery,
    default_aspect_ratio: str = "9:16",
    clock: Optional[Callable[[], datetime]] = None,
) -> WeatherCardResult:
    """Run the weather card pipeline once with a fresh agent."""
    agent = WeatherCardAgent(gemini_service, default_aspect_ratio, clock or utc_now)
    return await agent.run(query)
