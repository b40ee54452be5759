"""Presentation helpers - map raw API values to display values. Pure functions."""
from typing import Dict, Optional, Tuple

CLEAR_DAY = "☀️"
CLEAR_NIGHT = "🌙"
PARTLY_CLOUDY = "⛅"
CLOUDY = "☁️"
RAIN = "🌧️"
RAIN_SUN = "🌦️"
STORM = "⛈️"
SNOW = "❄️"
FOG = "🌫️"
UNKNOWN_GLYPH = "🌡️"

# OpenWeather icon codes: https://openweathermap.org/weather-conditions
ICON_GLYPHS: Dict[str, str] = {
    "01d": CLEAR_DAY,
    "01n": CLEAR_NIGHT,
    "02d": PARTLY_CLOUDY,
    "02n": CLOUDY,
    "03d": CLOUDY,
    "03n": CLOUDY,
    "04d": CLOUDY,
    "04n": CLOUDY,
    "09d": RAIN,
    "09n": RAIN,
    "10d": RAIN_SUN,
    "10n": RAIN,
    "11d": STORM,
    "11n": STORM,
    "13d": SNOW,
    "13n": SNOW,
    "50d": FOG,
    "50n": FOG,
}

COLD = "cold"
MILD = "mild"
WARM = "warm"
HOT = "hot"

SEVERITY_COLORS: Dict[str, Tuple[int, int, int]] = {
    COLD: (13, 202, 240),   # info
    MILD: (25, 135, 84),    # success
    WARM: (255, 193, 7),    # warning
    HOT: (220, 53, 69),     # danger
}

COMPASS_POINTS = ("N", "NE", "E", "SE", "S", "SO", "O", "NO")


def icon_glyph(code: Optional[str]) -> str:
    """Return the display glyph for an API icon code, or the unknown glyph."""
    return ICON_GLYPHS.get(code or "", UNKNOWN_GLYPH)


def temperature_severity(temp_c: int) -> str:
    """
    Classify a temperature into a display band.

    Cold (< 10°C), mild (10-24°C), warm (25-34°C), hot (>= 35°C).
    """
    if temp_c < 10:
        return COLD
    elif temp_c < 25:
        return MILD
    elif temp_c < 35:
        return WARM
    return HOT


def severity_color(severity: str) -> Tuple[int, int, int]:
    """RGB badge colour for a severity band."""
    return SEVERITY_COLORS[severity]


def wind_compass(degrees: Optional[int]) -> str:
    """Spanish 8-point compass label for a wind direction, '' if unknown."""
    if degrees is None:
        return ""
    index = int(((degrees % 360) + 22.5) // 45) % 8
    return COMPASS_POINTS[index]
