"""Layout and rendering logic for the weather widget - pure functions for testability."""
import time
from dataclasses import dataclass
from typing import List, Tuple
from cities import CITY_CATALOG
from presentation import severity_color, temperature_severity, wind_compass
from view_state import ViewState
from weather_snapshot import WeatherSnapshot

LOADING_REGION = "loading"
ERROR_REGION = "error"
WEATHER_REGION = "weather"

MARGIN = 8
LINE_HEIGHT = 16
CHAR_WIDTH = 7  # rough estimate for the default font

TEXT_COLOR = (220, 220, 220)
MUTED_COLOR = (150, 150, 150)
DISABLED_COLOR = (100, 100, 100)
ACCENT_COLOR = (0, 113, 255)
ERROR_COLOR = (220, 53, 69)
BADGE_TEXT_COLOR = (0, 0, 0)

REFRESH_NOTICE = "Se actualiza cada 5 min"


class DrawOp:
    """Represents a drawing operation (for testing/layout calculation)."""
    def __init__(self, op_type: str, **kwargs):
        self.op_type = op_type
        self.kwargs = kwargs

    @property
    def role(self) -> str:
        return self.kwargs.get("role", "")


@dataclass(frozen=True)
class Control:
    """An interactive element of the widget and whether it accepts input."""
    name: str
    label: str
    disabled: bool = False
    busy: bool = False
    options: Tuple[str, ...] = ()


def primary_region(state: ViewState) -> str:
    """
    Which region drives rendering.

    An error wins over everything else. Otherwise any snapshot is shown,
    even while a refresh is in flight, and the loading region only appears
    when there is nothing to show yet.
    """
    if state.error_message is not None:
        return ERROR_REGION
    if state.snapshot is not None:
        return WEATHER_REGION
    return LOADING_REGION


def build_controls(state: ViewState) -> List[Control]:
    """City selector and refresh control, both disabled while loading."""
    controls = [
        Control(
            "city_selector",
            f"Ciudad: {state.selected_city} ▾",
            disabled=state.is_loading,
            options=CITY_CATALOG,
        ),
        Control(
            "refresh",
            "Actualizando..." if state.is_loading else "Actualizar",
            disabled=state.is_loading,
            busy=state.is_loading,
        ),
    ]
    if primary_region(state) == ERROR_REGION:
        controls.append(Control("retry", "Reintentar", disabled=state.is_loading))
    return controls


def _text(text: str, x: int, y: int, color: Tuple[int, int, int], role: str) -> DrawOp:
    return DrawOp("text", text=text, x=x, y=y, r=color[0], g=color[1], b=color[2], role=role)


def _weather_panel(snapshot: WeatherSnapshot, x: int, y: int) -> Tuple[List[DrawOp], int]:
    ops = []

    # Icon and temperature badge share the first row
    ops.append(_text(snapshot.icon_glyph, x, y, TEXT_COLOR, "icon"))
    temp_text = f"{snapshot.temperature_c}°C"
    badge_x = x + 3 * CHAR_WIDTH
    badge_w = len(temp_text) * CHAR_WIDTH + 8
    badge_color = severity_color(temperature_severity(snapshot.temperature_c))
    ops.append(DrawOp(
        "rect",
        x=badge_x,
        y=y,
        w=badge_w,
        h=LINE_HEIGHT,
        r=badge_color[0],
        g=badge_color[1],
        b=badge_color[2],
        role="temperature_badge"
    ))
    ops.append(_text(temp_text, badge_x + 4, y, BADGE_TEXT_COLOR, "temperature"))
    y += LINE_HEIGHT + 4

    location = snapshot.city
    if snapshot.country_code:
        location = f"{snapshot.city}, {snapshot.country_code}"
    ops.append(_text(location, x, y, TEXT_COLOR, "location"))
    y += LINE_HEIGHT
    ops.append(_text(snapshot.description.capitalize(), x, y, TEXT_COLOR, "description"))
    y += LINE_HEIGHT

    wind = f"Viento: {snapshot.wind_kmh} km/h"
    compass = wind_compass(snapshot.wind_direction_deg)
    if compass:
        wind += f" {compass}"
    if snapshot.wind_gust_kmh is not None:
        wind += f" (ráfagas {snapshot.wind_gust_kmh} km/h)"

    details = [
        (f"Sensación térmica: {snapshot.feels_like_c}°C", "feels_like"),
        (f"Humedad: {snapshot.humidity_pct}%", "humidity"),
        (wind, "wind"),
        (f"Presión: {snapshot.pressure_hpa} hPa", "pressure"),
    ]
    for text, role in details:
        ops.append(_text(text, x, y, TEXT_COLOR, role))
        y += LINE_HEIGHT

    if snapshot.observed_at:
        observed = time.strftime("%H:%M", time.localtime(snapshot.observed_at))
        ops.append(_text(f"Actualizado {observed}", x, y, MUTED_COLOR, "updated"))
        y += LINE_HEIGHT

    ops.append(_text(REFRESH_NOTICE, x, y, MUTED_COLOR, "notice"))
    y += LINE_HEIGHT
    return ops, y


def calculate_layout(state: ViewState, width: int = 320, height: int = 240) -> List[DrawOp]:
    """
    Calculate layout operations for the widget.

    This is a pure function that returns drawing operations,
    making it easy to test without actual rendering.

    Args:
        state: View state to display
        width: Canvas width
        height: Canvas height

    Returns:
        List of DrawOp objects representing what to draw
    """
    ops = []
    x = MARGIN
    y = MARGIN

    ops.append(_text("Clima", x, y, ACCENT_COLOR, "header"))
    y += LINE_HEIGHT + 4

    # Controls on one row, refresh right-aligned when it fits
    controls = build_controls(state)
    selector, refresh = controls[0], controls[1]
    ops.append(_text(
        selector.label, x, y,
        DISABLED_COLOR if selector.disabled else TEXT_COLOR,
        selector.name
    ))
    refresh_x = max(x + (len(selector.label) + 2) * CHAR_WIDTH,
                    width - MARGIN - len(refresh.label) * CHAR_WIDTH)
    ops.append(_text(
        refresh.label, refresh_x, y,
        DISABLED_COLOR if refresh.disabled else ACCENT_COLOR,
        refresh.name
    ))
    y += LINE_HEIGHT + 8

    region = primary_region(state)
    if region == LOADING_REGION:
        ops.append(_text("Cargando clima...", x, y, MUTED_COLOR, "loading"))
        return ops

    if region == ERROR_REGION:
        ops.append(_text(state.error_message, x, y, ERROR_COLOR, "error"))
        y += LINE_HEIGHT
        ops.append(_text(f"[{controls[2].label}]", x, y, ACCENT_COLOR, "retry"))
        y += LINE_HEIGHT + 8

    if state.snapshot is not None:
        panel_ops, y = _weather_panel(state.snapshot, x, y)
        ops.extend(panel_ops)

    return ops


def panel_lines(state: ViewState, width: int = 320) -> List[str]:
    """Text of the layout, one string per row (for console output)."""
    rows = {}
    for op in calculate_layout(state, width):
        if op.op_type != "text":
            continue
        rows.setdefault(op.kwargs["y"], []).append(op.kwargs["text"])
    return ["  ".join(texts) for _, texts in sorted(rows.items())]


def render_view(canvas, state: ViewState) -> None:
    """
    Render the widget onto a canvas.

    Args:
        canvas: PanelCanvas instance (PIL or fake)
        state: View state to display
    """
    canvas.clear()

    for op in calculate_layout(state, canvas.width, canvas.height):
        kw = op.kwargs
        if op.op_type == "rect":
            canvas.fill_rect(kw["x"], kw["y"], kw["w"], kw["h"], kw["r"], kw["g"], kw["b"])
        elif op.op_type == "text":
            canvas.draw_text(kw["x"], kw["y"], kw["text"], kw["r"], kw["g"], kw["b"])
