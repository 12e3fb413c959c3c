from fastapi import APIRouter

from src.api.images import images_router
from src.api.weather import weather_card_router

# Create main router
api_router = APIRouter(prefix="/api")

# Include all sub-routers
api_router.include_router(images_router)
api_router.include_router(weather_card_router)
