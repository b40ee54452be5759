"""Weather provider abstraction - allows swapping different weather APIs."""
from abc import ABC, abstractmethod
from typing import Optional
from weather_snapshot import WeatherSnapshot


class WeatherProviderBase(ABC):
    """Abstract base class for weather data providers."""

    @abstractmethod
    def get_current(self, city: str) -> WeatherSnapshot:
        """
        Fetch current weather for a city.

        Args:
            city: City name as shown in the catalog

        Returns:
            WeatherSnapshot: Current weather information

        Raises:
            WeatherProviderError: If the provider fails to fetch data
        """
        pass


class WeatherProviderError(Exception):
    """Exception raised when a weather provider fails."""
    pass


class CityNotFoundError(WeatherProviderError):
    """The provider does not know the requested city (HTTP 404)."""

    def __init__(self, city: str):
        super().__init__(f"City not found: {city}")
        self.city = city


class AuthenticationError(WeatherProviderError):
    """The API credential was rejected (HTTP 401)."""
    pass


class FetchFailedError(WeatherProviderError):
    """Network failure, server error or unusable response."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code
