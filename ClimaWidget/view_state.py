"""Widget view state and the pure transitions applied to it."""
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional
from weather_provider import AuthenticationError, CityNotFoundError, WeatherProviderError
from weather_snapshot import WeatherSnapshot

GENERIC_ERROR_MESSAGE = "Error al cargar el clima. Intenta nuevamente."
AUTH_ERROR_MESSAGE = "Error de autenticación. Verifica la configuración."


class ViewStatus(Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class ViewState:
    """Everything the widget renders. Replaced, never mutated."""
    selected_city: str
    snapshot: Optional[WeatherSnapshot] = None
    is_loading: bool = False
    error_message: Optional[str] = None

    @property
    def status(self) -> ViewStatus:
        if self.is_loading:
            return ViewStatus.LOADING
        if self.error_message is not None:
            return ViewStatus.FAILED
        if self.snapshot is not None:
            return ViewStatus.SUCCESS
        return ViewStatus.IDLE


def initial_state(city: str) -> ViewState:
    """State of a freshly created widget: loading, nothing to show yet."""
    return ViewState(selected_city=city, is_loading=True)


def begin_fetch(state: ViewState, city: Optional[str] = None) -> ViewState:
    """
    Enter Loading for a new trigger.

    The error is cleared right away; the previous snapshot stays visible
    until the new result arrives.
    """
    return replace(
        state,
        selected_city=city if city is not None else state.selected_city,
        is_loading=True,
        error_message=None,
    )


def apply_snapshot(state: ViewState, snapshot: WeatherSnapshot) -> ViewState:
    return replace(state, snapshot=snapshot, is_loading=False, error_message=None)


def apply_error(state: ViewState, error: WeatherProviderError) -> ViewState:
    """Leave Loading with a message. Stale snapshot is kept."""
    return replace(state, is_loading=False, error_message=error_message(error))


def error_message(error: WeatherProviderError) -> str:
    """User-facing message for a fetch error, chosen by error type."""
    if isinstance(error, CityNotFoundError):
        return f'No se encontró la ciudad "{error.city}". Verifica el nombre.'
    if isinstance(error, AuthenticationError):
        return AUTH_ERROR_MESSAGE
    return GENERIC_ERROR_MESSAGE
