"""Terminal host for the current-weather widget."""
import argparse
import asyncio
import logging
import os
import signal
import sys
from typing import Callable, Coroutine, Optional, Set, Tuple

from dotenv import load_dotenv

from cities import CITY_CATALOG, DEFAULT_CITY, resolve_city
from layout import panel_lines, render_view
from openweather_provider import OpenWeatherProvider
from panel_canvas import PILCanvas
from view_state import ViewState
from weather_controller import REFRESH_INTERVAL_SECONDS, WeatherController

BASE_DIR = os.path.dirname(os.path.abspath(__file__))
DEFAULT_LOG_FILE = os.path.join(BASE_DIR, "clima-widget.log")

HELP_TEXT = "Comandos: r = actualizar, c <n|ciudad> = cambiar ciudad, l = listar ciudades, q = salir"


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser("Current weather widget")
    parser.add_argument("--log-file", default=DEFAULT_LOG_FILE)
    parser.add_argument("--city", default=None, help="Catalog city name or 1-based position")
    parser.add_argument("--refresh", type=float, default=REFRESH_INTERVAL_SECONDS,
                        help="Seconds between scheduled refreshes")
    parser.add_argument("--timeout", type=int, default=10, help="HTTP timeout in seconds")
    parser.add_argument("--png", default=None, help="Also render the widget to this PNG file")
    parser.add_argument("--once", action="store_true", help="Fetch and render once, then exit")
    parser.add_argument("--verbose", action="store_true")
    return parser.parse_args(argv)


def setup_logging(log_file: str, verbose: bool) -> None:
    log_level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler(log_file)
        ]
    )


def load_config(city_arg: Optional[str] = None) -> Tuple[str, str]:
    load_dotenv()
    api_key = os.getenv("WEATHER_API_KEY")
    city_text = city_arg or os.getenv("WEATHER_CITY") or DEFAULT_CITY

    if not api_key:
        raise SystemExit("Missing WEATHER_API_KEY in environment")

    city = resolve_city(city_text)
    if city is None:
        raise SystemExit(f"Unknown city '{city_text}'. Choose one of: {', '.join(CITY_CATALOG)}")

    logging.info("Configuration loaded: city=%s", city)
    return api_key, city


class ConsoleView:
    """Prints every state change and optionally mirrors it to a PNG."""

    def __init__(self, png_path: Optional[str] = None, stream=None):
        self.png_path = png_path
        self.stream = stream or sys.stdout
        self._canvas = PILCanvas() if png_path else None

    def __call__(self, state: ViewState) -> None:
        self.stream.write("\n".join(panel_lines(state)) + "\n\n")
        self.stream.flush()
        if self._canvas is not None:
            render_view(self._canvas, state)
            self._canvas.save(self.png_path)
            logging.debug("Widget image written to %s", self.png_path)


def dispatch_command(
    controller: WeatherController,
    line: str,
    spawn: Callable[[Coroutine], None]
) -> bool:
    """
    Apply one console command to the controller.

    Controls are disabled while a fetch is in flight, so refresh and city
    changes are ignored until it completes.

    Returns:
        False when the user asked to quit
    """
    command, _, arg = line.strip().partition(" ")
    command = command.lower()

    if not command:
        return True
    if command in ("q", "salir"):
        return False
    if command in ("l", "ciudades"):
        for position, city in enumerate(CITY_CATALOG, start=1):
            print(f"{position:2d}. {city}")
        return True

    state = controller.state
    if command in ("r", "actualizar", "reintentar"):
        if state.is_loading:
            logging.info("Refresh ignored: already loading")
            return True
        spawn(controller.refresh())
        return True

    if command in ("c", "ciudad"):
        city = resolve_city(arg)
        if city is None:
            print(f"Ciudad desconocida: {arg.strip()}")
            return True
        if state.is_loading:
            logging.info("City change to %s ignored: already loading", city)
            return True
        spawn(controller.select_city(city))
        return True

    print(HELP_TEXT)
    return True


async def run_widget(args: argparse.Namespace, api_key: str, city: str) -> ViewState:
    provider = OpenWeatherProvider(api_key=api_key, timeout=args.timeout)
    controller = WeatherController(
        provider,
        city=city,
        refresh_interval_seconds=args.refresh,
        on_change=ConsoleView(args.png),
    )

    loop = asyncio.get_running_loop()
    stop = asyncio.Event()
    tasks: Set[asyncio.Task] = set()

    def spawn(coro: Coroutine) -> None:
        task = loop.create_task(coro)
        tasks.add(task)
        task.add_done_callback(tasks.discard)

    def on_input() -> None:
        line = sys.stdin.readline()
        if not line or not dispatch_command(controller, line, spawn):
            stop.set()

    for signum in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(signum, stop.set)

    async with controller:
        if args.once:
            return controller.state

        print(HELP_TEXT)
        loop.add_reader(sys.stdin.fileno(), on_input)
        try:
            await stop.wait()
        finally:
            loop.remove_reader(sys.stdin.fileno())

    logging.info("Stopping widget")
    return controller.state


def main() -> None:
    args = parse_args()
    setup_logging(args.log_file, args.verbose)
    api_key, city = load_config(args.city)

    state = asyncio.run(run_widget(args, api_key, city))

    if args.once and state.error_message:
        raise SystemExit(1)


if __name__ == "__main__":
    main()
