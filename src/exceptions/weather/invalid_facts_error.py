from src.exceptions.weather.weather_card_error import WeatherCardError


class InvalidFactsError(WeatherCardError):
    """Exception for reasoning-step output that is not valid weather data."""

    pass
