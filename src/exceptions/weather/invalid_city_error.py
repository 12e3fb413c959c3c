from src.exceptions.weather.weather_card_error import WeatherCardError


class InvalidCityError(WeatherCardError):
    """Exception raised when the model reports that a city does not resolve."""

    def __init__(self, city: str, message: str = None):
        self.city = city
        super().__init__(message or f"Invalid city: {city}")
