from src.api.weather.weather_card_routes import router as weather_card_router

__all__ = ["weather_card_router"]
