from src.exceptions.weather.invalid_city_error import InvalidCityError
from src.exceptions.weather.invalid_facts_error import InvalidFactsError
from src.exceptions.weather.no_image_error import NoImageError
from src.exceptions.weather.weather_card_error import WeatherCardError

__all__ = [
    "InvalidCityError",
    "InvalidFactsError",
    "NoImageError",
    "WeatherCardError",
]
