import structlog
from fastapi import APIRouter, Depends

from agent.prompt_builder import is_auto_language
from agent.weather_card_agent import generate_weather_card
from src.api.dependencies import get_config, get_gemini_service
from src.api.responses import weather_card_body
from src.config.config import Config
from src.exceptions import ImageStudioError
from src.models.weather import AUTO_LANGUAGE, WeatherCardRequest, WeatherQuery
from src.services.gemini_service import GeminiService
from src.utils.validators import validate_city

logger = structlog.get_logger(__name__)

# Create router
router = APIRouter(tags=["Weather Card"])


@router.post("/generate-weather-card", summary="Generate Weather Card")
async def create_weather_card(
    request: WeatherCardRequest,
    config: Config = Depends(get_config),
    gemini_service: GeminiService = Depends(get_gemini_service),
):
    """
    Generate an illustrated weather card for a city.

    The text model first infers localized weather facts for the city, then
    the image model renders them into the weather card template.

    Args:
        request: City, optional aspect ratio and optional target language.

    Returns:
        JSON object with the card image as a data URI and the facts shown on it.

    Raises:
        ImageStudioError: Mapped to a JSON error response by the app's exception handler.
    """
    try:
        city = validate_city(request.city)
        query = WeatherQuery(
            city=city,
            aspect_ratio=request.aspectRatio,
            language=AUTO_LANGUAGE if is_auto_language(request.language) else request.language.strip(),
        )

        logger.info(
            "API request: Generate weather card",
            city=query.city,
            aspect_ratio=query.aspect_ratio,
            language=query.language,
        )

        result = await generate_weather_card(
            gemini_service,
            query,
            default_aspect_ratio=config.default_aspect_ratio,
        )

        return weather_card_body(result)

    except ImageStudioError as e:
        logger.error(
            "Failed to generate weather card",
            city=request.city,
            error_type=type(e).__name__,
            error=str(e),
        )
        raise
