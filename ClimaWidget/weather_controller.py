"""Widget controller - decides when to fetch and applies results to the view state."""
import asyncio
import contextlib
import logging
from typing import Callable, Optional
from cities import DEFAULT_CITY
from view_state import ViewState, apply_error, apply_snapshot, begin_fetch, initial_state
from weather_provider import FetchFailedError, WeatherProviderBase, WeatherProviderError

REFRESH_INTERVAL_SECONDS = 5 * 60


class WeatherController:
    """
    Owns the widget's view state and the refresh timer.

    Fetches are triggered on mount, on city change, on every timer tick and
    on manual refresh. The provider call runs in a worker thread; the state
    is only ever replaced from the event loop.

    Each trigger gets a generation number and only the newest trigger may
    apply its result, so a slow response for a previous city never
    overwrites the current one.
    """

    def __init__(
        self,
        provider: WeatherProviderBase,
        city: str = DEFAULT_CITY,
        refresh_interval_seconds: float = REFRESH_INTERVAL_SECONDS,
        on_change: Optional[Callable[[ViewState], None]] = None
    ):
        """
        Initialize controller.

        Args:
            provider: Weather provider to fetch from
            city: Initially selected city
            refresh_interval_seconds: Time between scheduled refreshes
            on_change: Called with the new state after every transition
        """
        self.provider = provider
        self.refresh_interval_seconds = refresh_interval_seconds
        self.on_change = on_change

        self._state = initial_state(city)
        self._generation = 0
        self._timer: Optional[asyncio.Task] = None
        self._mounted = False
        self._disposed = False

    @property
    def state(self) -> ViewState:
        return self._state

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    async def __aenter__(self) -> "WeatherController":
        await self.mount()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.dispose()

    async def mount(self) -> None:
        """Start the refresh timer and load the selected city."""
        if self._disposed:
            raise RuntimeError("Weather controller already disposed")
        if self._mounted:
            return
        self._mounted = True
        logging.info(
            f"Weather widget mounted for {self._state.selected_city} "
            f"(refresh every {self.refresh_interval_seconds}s)"
        )
        self._start_timer()
        await self._load()

    async def select_city(self, city: str) -> None:
        """Switch to another city. Restarts the refresh timer."""
        if city == self._state.selected_city:
            logging.debug(f"City {city} already selected, ignoring")
            return
        logging.info(f"City changed: {self._state.selected_city} -> {city}")
        self._start_timer()
        await self._load(city)

    async def refresh(self) -> None:
        """Manual refresh (also the retry action). Does not touch the timer."""
        logging.info(f"Manual refresh for {self._state.selected_city}")
        await self._load()

    async def dispose(self) -> None:
        """Cancel the timer. No state changes happen after this returns."""
        if self._disposed:
            return
        self._disposed = True
        timer, self._timer = self._timer, None
        if timer is not None:
            timer.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await timer
        logging.info("Weather widget disposed")

    def _start_timer(self) -> None:
        if not self._mounted or self._disposed:
            return
        if self._timer is not None:
            self._timer.cancel()
        self._timer = asyncio.create_task(self._refresh_loop())

    async def _refresh_loop(self) -> None:
        while True:
            await asyncio.sleep(self.refresh_interval_seconds)
            logging.info(f"Scheduled refresh for {self._state.selected_city}")
            try:
                await self._load()
            except Exception as exc:
                logging.exception(f"Scheduled refresh failed: {exc}")

    async def _load(self, city: Optional[str] = None) -> None:
        if self._disposed:
            return

        self._generation += 1
        generation = self._generation
        self._set_state(begin_fetch(self._state, city))
        target = self._state.selected_city
        logging.debug(f"Weather request #{generation} for {target}")

        try:
            snapshot = await asyncio.to_thread(self.provider.get_current, target)
        except WeatherProviderError as e:
            if self._superseded(generation, target):
                return
            logging.warning(f"Weather fetch for {target} failed: {e}")
            self._set_state(apply_error(self._state, e))
            return
        except Exception as e:
            if self._superseded(generation, target):
                return
            logging.error(f"Unexpected error fetching weather for {target}: {e}", exc_info=True)
            self._set_state(apply_error(self._state, FetchFailedError(f"Unexpected error: {e}")))
            return

        if self._superseded(generation, target):
            return
        logging.info(
            f"Weather updated for {target}: {snapshot.temperature_c}°C, {snapshot.description}"
        )
        self._set_state(apply_snapshot(self._state, snapshot))

    def _superseded(self, generation: int, city: str) -> bool:
        if self._disposed:
            logging.debug(f"Dropping result for {city}: widget disposed")
            return True
        if generation != self._generation:
            logging.info(
                f"Dropping result for {city}: request #{generation} "
                f"superseded by #{self._generation}"
            )
            return True
        return False

    def _set_state(self, state: ViewState) -> None:
        if self._disposed:
            return
        self._state = state
        if self.on_change is not None:
            try:
                self.on_change(state)
            except Exception as exc:
                logging.exception(f"Render callback failed: {exc}")
