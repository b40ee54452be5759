"""Static catalog of selectable cities."""
from typing import Optional

CITY_CATALOG = (
    "Buenos Aires",
    "Córdoba",
    "Rosario",
    "Mendoza",
    "San Juan",
    "La Rioja",
    "Jujuy",
    "Necochea",
    "Concepción",
    "Bariloche",
    "San Miguel de Tucumán",
)

DEFAULT_CITY = "San Miguel de Tucumán"


def resolve_city(text: str) -> Optional[str]:
    """
    Resolve user input to a catalog entry.

    Accepts a 1-based position in the catalog or a city name
    (case-insensitive). Returns None if nothing matches.
    """
    text = text.strip()
    if not text:
        return None

    if text.isdigit():
        index = int(text) - 1
        if 0 <= index < len(CITY_CATALOG):
            return CITY_CATALOG[index]
        return None

    wanted = text.casefold()
    for city in CITY_CATALOG:
        if city.casefold() == wanted:
            return city
    return None
