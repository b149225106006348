"""Text rendering of the five view states."""

import math
from datetime import UTC, datetime, tzinfo

from weatherview.client.state import Done, Failed, LoadState, Loading, Locating
from weatherview.models.weather import WeatherSnapshot

ICON_URL_TEMPLATE = "https://openweathermap.org/img/wn/{icon}@2x.png"
TITLE = "Weather at your location"


def icon_url(snapshot: WeatherSnapshot) -> str | None:
    condition = snapshot.primary_condition
    if condition is None or not condition.icon:
        return None
    return ICON_URL_TEMPLATE.format(icon=condition.icon)


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def format_clock_time(unix: int, tz_offset_seconds: int) -> str:
    """Local clock time for an epoch, shown as 'HH:MM UTC' of unix + offset."""
    shifted = datetime.fromtimestamp(unix + tz_offset_seconds, tz=UTC)
    return shifted.strftime("%H:%M") + " UTC"


def format_updated(unix: int, tz: tzinfo | None = None) -> str:
    return datetime.fromtimestamp(unix, tz=tz).strftime("%Y-%m-%d %H:%M:%S")


def feels_like(snapshot: WeatherSnapshot) -> int:
    return round_half_up((snapshot.main.temp_min + snapshot.main.temp_max) / 2)


def render_state(state: LoadState, tz: tzinfo | None = None) -> str:
    """Render any load state as terminal text."""
    lines = [TITLE, ""]
    if isinstance(state, Locating):
        lines += ["⏳ Locating you…", "Tip: If prompted, allow location access."]
    elif isinstance(state, Loading):
        lines += ["⏳ Fetching weather…"]
    elif isinstance(state, Failed):
        lines += [
            "Something went wrong",
            state.message,
            "Common fixes: enable location, check connection, refresh.",
        ]
    elif isinstance(state, Done):
        lines += render_snapshot(state.data, tz=tz)
    return "\n".join(lines).rstrip()


def render_snapshot(s: WeatherSnapshot, tz: tzinfo | None = None) -> list[str]:
    place = f"{s.name}, {s.country}" if s.country else s.name
    condition = s.primary_condition
    summary = ""
    if condition is not None:
        summary = (condition.description or condition.main).capitalize()

    wind_speed = s.wind.speed if s.wind and s.wind.speed is not None else 0
    clouds = s.clouds if s.clouds is not None else 0

    lines = [
        f"[Now] {place}",
        f"Updated: {format_updated(s.dt, tz)}",
    ]
    if summary:
        lines.append(summary)
    url = icon_url(s)
    if url:
        lines.append(f"Icon: {url}")
    lines += [
        "",
        f"{round_half_up(s.main.temp)}°  feels like ~ {feels_like(s)}°",
        "",
        f"{'Min / Max':<10} {round_half_up(s.main.temp_min)}° / {round_half_up(s.main.temp_max)}°",
        f"{'Humidity':<10} {_num(s.main.humidity)}%",
        f"{'Pressure':<10} {_num(s.main.pressure)} hPa",
        f"{'Wind':<10} {_num(wind_speed)} m/s",
        f"{'Clouds':<10} {_num(clouds)}%",
        f"{'Sunrise':<10} {format_clock_time(s.sunrise, s.timezone)}",
        f"{'Sunset':<10} {format_clock_time(s.sunset, s.timezone)}",
    ]
    return lines


def _num(value: float) -> str:
    """Drop a trailing .0 the way the upstream JSON shows whole numbers."""
    return str(int(value)) if float(value).is_integer() else str(value)
