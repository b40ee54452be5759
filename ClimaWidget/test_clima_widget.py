"""Tests for the terminal host."""
import asyncio
import io
import pytest
from unittest.mock import patch
from clima_widget import ConsoleView, dispatch_command, load_config, parse_args, run_widget
from test_weather_controller import ScriptedProvider
from test_weather_snapshot import make_snapshot
from view_state import ViewState, ViewStatus
from weather_controller import REFRESH_INTERVAL_SECONDS, WeatherController
from weather_provider import CityNotFoundError


class Spawned:
    """Collects coroutines instead of scheduling them."""

    def __init__(self):
        self.coros = []

    def __call__(self, coro):
        self.coros.append(coro)

    def close(self):
        for coro in self.coros:
            coro.close()


@pytest.fixture
def spawned():
    spawn = Spawned()
    yield spawn
    spawn.close()


@pytest.fixture
def controller():
    return WeatherController(ScriptedProvider(make_snapshot()), city="Mendoza")


def test_parse_args_defaults():
    args = parse_args([])

    assert args.refresh == REFRESH_INTERVAL_SECONDS
    assert args.timeout == 10
    assert args.city is None
    assert args.png is None
    assert args.once is False


def test_load_config(monkeypatch):
    monkeypatch.setenv("WEATHER_API_KEY", "secret")
    monkeypatch.delenv("WEATHER_CITY", raising=False)

    with patch("clima_widget.load_dotenv"):
        api_key, city = load_config()

    assert api_key == "secret"
    assert city == "San Miguel de Tucumán"


def test_load_config_city_from_env_and_arg(monkeypatch):
    monkeypatch.setenv("WEATHER_API_KEY", "secret")
    monkeypatch.setenv("WEATHER_CITY", "rosario")

    with patch("clima_widget.load_dotenv"):
        assert load_config()[1] == "Rosario"
        assert load_config("4")[1] == "Mendoza"


def test_load_config_missing_key(monkeypatch):
    monkeypatch.delenv("WEATHER_API_KEY", raising=False)

    with patch("clima_widget.load_dotenv"):
        with pytest.raises(SystemExit) as exc_info:
            load_config()

    assert "WEATHER_API_KEY" in str(exc_info.value)


def test_load_config_unknown_city(monkeypatch):
    monkeypatch.setenv("WEATHER_API_KEY", "secret")

    with patch("clima_widget.load_dotenv"):
        with pytest.raises(SystemExit):
            load_config("Atlantis")


def test_dispatch_refresh(controller, spawned):
    # Freshly created controllers are loading; pretend the first fetch finished
    controller._state = ViewState("Mendoza", snapshot=make_snapshot())

    assert dispatch_command(controller, "r\n", spawned) is True
    assert len(spawned.coros) == 1


def test_dispatch_ignored_while_loading(controller, spawned):
    assert controller.state.is_loading is True

    assert dispatch_command(controller, "r", spawned) is True
    assert dispatch_command(controller, "c 2", spawned) is True
    assert spawned.coros == []


def test_dispatch_select_city(controller, spawned):
    controller._state = ViewState("Mendoza", snapshot=make_snapshot())

    dispatch_command(controller, "c Córdoba", spawned)

    assert len(spawned.coros) == 1


def test_dispatch_unknown_city(controller, spawned, capsys):
    controller._state = ViewState("Mendoza", snapshot=make_snapshot())

    dispatch_command(controller, "c Atlantis", spawned)

    assert spawned.coros == []
    assert "Ciudad desconocida: Atlantis" in capsys.readouterr().out


def test_dispatch_list_and_quit(controller, spawned, capsys):
    assert dispatch_command(controller, "l", spawned) is True
    assert "11. San Miguel de Tucumán" in capsys.readouterr().out
    assert dispatch_command(controller, "q", spawned) is False
    assert dispatch_command(controller, "", spawned) is True


def test_console_view_writes_panel(tmp_path):
    stream = io.StringIO()
    png = tmp_path / "widget.png"
    view = ConsoleView(str(png), stream=stream)

    view(ViewState("Mendoza", snapshot=make_snapshot()))

    assert "Mendoza, AR" in stream.getvalue()
    assert png.exists()


def test_run_widget_once():
    """--once mounts, renders the first result and disposes."""
    provider = ScriptedProvider(make_snapshot(city="Rosario"))
    args = parse_args(["--once", "--city", "Rosario"])

    with patch("clima_widget.OpenWeatherProvider", return_value=provider), \
            patch("clima_widget.ConsoleView", return_value=lambda state: None):
        state = asyncio.run(run_widget(args, "secret", "Rosario"))

    assert provider.cities == ["Rosario"]
    assert state.status == ViewStatus.SUCCESS


def test_run_widget_once_error():
    provider = ScriptedProvider(CityNotFoundError("Rosario"))
    args = parse_args(["--once"])

    with patch("clima_widget.OpenWeatherProvider", return_value=provider), \
            patch("clima_widget.ConsoleView", return_value=lambda state: None):
        state = asyncio.run(run_widget(args, "secret", "Rosario"))

    assert state.status == ViewStatus.FAILED
    assert "Rosario" in state.error_message
