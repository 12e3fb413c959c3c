from src.exceptions.weather.weather_card_error import WeatherCardError


class NoImageError(WeatherCardError):
    """Exception raised when the image step returns no image."""

    pass
