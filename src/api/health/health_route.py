from fastapi import APIRouter, Depends

from src.api.dependencies import get_config
from src.api.responses import utc_timestamp
from src.config.config import Config

router = APIRouter(prefix="/api/health", tags=["Health"])


@router.get("", summary="API Health Check")
async def get_health(config: Config = Depends(get_config)):
    """Basic health check endpoint, also reporting whether Gemini is configured."""

    return {
        "status": "ok",
        "apiConfigured": config.is_api_configured,
        "model": config.gemini_model,
        "textModel": config.gemini_text_model,
        "timestamp": utc_timestamp(),
    }
