from fastapi import Request

from src.config.config import Config
from src.services.gemini_service import GeminiService


def get_config(request: Request) -> Config:
    """Configuration built once at startup and stored on the app."""
    return request.app.state.config


def get_gemini_service(request: Request) -> GeminiService:
    return request.app.state.gemini_service
