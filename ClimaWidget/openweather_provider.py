"""OpenWeather Current Weather API provider implementation."""
import logging
import math
import requests
from typing import Optional
from presentation import icon_glyph
from weather_provider import (
    AuthenticationError,
    CityNotFoundError,
    FetchFailedError,
    WeatherProviderBase,
)
from weather_snapshot import WeatherSnapshot

MS_TO_KMH = 3.6


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves towards +infinity."""
    return int(math.floor(value + 0.5))


def to_kmh(speed_ms: Optional[float]) -> Optional[int]:
    """Convert m/s to rounded km/h, keeping None."""
    if speed_ms is None:
        return None
    return round_half_up(speed_ms * MS_TO_KMH)


class OpenWeatherProvider(WeatherProviderBase):
    """
    Weather provider using OpenWeather Current Weather API.

    Uses the free Current Weather API: https://openweathermap.org/current
    Cities are queried by name with the ``q`` parameter.
    """

    BASE_URL = "https://api.openweathermap.org/data/2.5/weather"

    def __init__(
        self,
        api_key: str,
        units: str = "metric",
        lang: str = "es",
        timeout: int = 10
    ):
        """
        Initialize OpenWeather provider.

        Args:
            api_key: OpenWeather API key
            units: Temperature units, only "metric" matches the snapshot fields
            lang: Language code for descriptions
            timeout: HTTP request timeout in seconds
        """
        self.api_key = api_key
        self.units = units
        self.lang = lang
        self.timeout = timeout

    def get_current(self, city: str) -> WeatherSnapshot:
        """
        Fetch current weather for a city from the Current Weather API.

        Returns:
            WeatherSnapshot: Current weather information

        Raises:
            CityNotFoundError: HTTP 404
            AuthenticationError: HTTP 401
            FetchFailedError: Any other failure
        """
        params = {
            "q": city,
            "appid": self.api_key,
            "units": self.units,
            "lang": self.lang,
        }

        try:
            logging.info(f"Making OpenWeather API request for '{city}': {self.BASE_URL}")
            logging.debug(f"Request parameters: q={city}, units={self.units}, lang={self.lang}")

            response = requests.get(self.BASE_URL, params=params, timeout=self.timeout)

            logging.info(f"API response status: {response.status_code}")
        except requests.exceptions.RequestException as e:
            logging.error(f"Network error during API request: {e}")
            raise FetchFailedError(f"Network error: {str(e)}")

        if not response.ok:
            logging.error(f"API request failed with status {response.status_code}")
            self._handle_error_response(response, city)

        try:
            data = response.json()
            logging.debug(f"API response (truncated): {str(data)[:500]}...")
            snapshot = self._parse(data, city)
        except (KeyError, ValueError, TypeError, IndexError, AttributeError, OverflowError) as e:
            logging.error(f"Failed to parse API response: {e}", exc_info=True)
            raise FetchFailedError(f"Failed to parse response: {str(e)}")

        logging.info(
            f"Successfully parsed weather for {snapshot.city}: "
            f"{snapshot.temperature_c}°C, {snapshot.description}"
        )
        return snapshot

    def _parse(self, data: dict, city: str) -> WeatherSnapshot:
        weather_array = data.get("weather") or []
        if not weather_array:
            raise FetchFailedError("Response missing 'weather' array")
        weather = weather_array[0]

        main_data = data.get("main") or {}
        if not main_data:
            raise FetchFailedError("Response missing 'main' block")

        wind_data = data.get("wind") or {}
        wind_deg = wind_data.get("deg")
        sys_data = data.get("sys") or {}
        icon_code = weather.get("icon", "")

        return WeatherSnapshot(
            city=data.get("name") or city,
            country_code=sys_data.get("country", ""),
            temperature_c=round_half_up(main_data["temp"]),
            feels_like_c=round_half_up(main_data["feels_like"]),
            description=weather.get("description", ""),
            humidity_pct=int(main_data["humidity"]),
            wind_kmh=to_kmh(wind_data.get("speed", 0.0)),
            pressure_hpa=int(main_data["pressure"]),
            icon_glyph=icon_glyph(icon_code),
            wind_direction_deg=int(wind_deg) % 360 if wind_deg is not None else None,
            wind_gust_kmh=to_kmh(wind_data.get("gust")),
            icon_code=icon_code,
            observed_at=data.get("dt", 0),
        )

    def _handle_error_response(self, response: requests.Response, city: str) -> None:
        """Raise the typed error matching an unsuccessful response."""
        status = response.status_code
        if status == 404:
            raise CityNotFoundError(city)
        if status == 401:
            raise AuthenticationError("OpenWeather rejected the API key (HTTP 401)")

        try:
            error_data = response.json()
            message = error_data.get("message", "Unknown error")
            logging.error(f"OpenWeather API error response: {error_data}")
        except (ValueError, AttributeError):
            message = response.text[:200]
            logging.error(f"Non-JSON error response: HTTP {status}, body: {response.text[:500]}")

        raise FetchFailedError(f"OpenWeather API error {status}: {message}", status_code=status)
