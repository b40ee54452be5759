"""Tests for weather_snapshot module."""
import dataclasses
import pytest
from weather_snapshot import WeatherSnapshot


def make_snapshot(**overrides):
    fields = dict(
        city="Mendoza",
        country_code="AR",
        temperature_c=21,
        feels_like_c=20,
        description="cielo claro",
        humidity_pct=40,
        wind_kmh=11,
        pressure_hpa=1015,
        icon_glyph="☀️",
    )
    fields.update(overrides)
    return WeatherSnapshot(**fields)


def test_snapshot_creation():
    """Test creating a snapshot with required fields only."""
    snapshot = make_snapshot()

    assert snapshot.city == "Mendoza"
    assert snapshot.country_code == "AR"
    assert snapshot.temperature_c == 21
    assert snapshot.wind_direction_deg is None
    assert snapshot.wind_gust_kmh is None
    assert snapshot.icon_code == ""
    assert snapshot.observed_at == 0


def test_snapshot_is_immutable():
    """Snapshots are replaced, never modified."""
    snapshot = make_snapshot()

    with pytest.raises(dataclasses.FrozenInstanceError):
        snapshot.temperature_c = 30
