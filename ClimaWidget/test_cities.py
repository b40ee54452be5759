"""Tests for the city catalog."""
from cities import CITY_CATALOG, DEFAULT_CITY, resolve_city


def test_catalog_order():
    """The catalog keeps its display order and default city."""
    assert CITY_CATALOG[0] == "Buenos Aires"
    assert CITY_CATALOG[-1] == "San Miguel de Tucumán"
    assert len(CITY_CATALOG) == 11
    assert DEFAULT_CITY in CITY_CATALOG


def test_resolve_city_by_name():
    assert resolve_city("Mendoza") == "Mendoza"
    assert resolve_city("  córdoba ") == "Córdoba"
    assert resolve_city("SAN MIGUEL DE TUCUMÁN") == "San Miguel de Tucumán"


def test_resolve_city_by_position():
    assert resolve_city("1") == "Buenos Aires"
    assert resolve_city("11") == "San Miguel de Tucumán"


def test_resolve_city_unknown():
    assert resolve_city("Atlantis") is None
    assert resolve_city("0") is None
    assert resolve_city("12") is None
    assert resolve_city("") is None
    # Accents matter
    assert resolve_city("Cordoba") is None
