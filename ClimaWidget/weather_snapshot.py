"""Weather domain model - an immutable reading for one city."""
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class WeatherSnapshot:
    """Point-in-time weather for one city, already converted for display."""
    city: str
    country_code: str  # e.g., "AR"
    temperature_c: int
    feels_like_c: int
    description: str  # e.g., "nubes dispersas"
    humidity_pct: int
    wind_kmh: int
    pressure_hpa: int
    icon_glyph: str

    # Only present when the API reports them
    wind_direction_deg: Optional[int] = None
    wind_gust_kmh: Optional[int] = None

    icon_code: str = ""  # raw API code, e.g. "10d"
    observed_at: int = 0  # UNIX timestamp (UTC), 0 if unknown
