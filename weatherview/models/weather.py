"""OpenWeatherMap current-weather data models."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Condition:
    main: str
    description: str
    icon: str


@dataclass(frozen=True)
class Measurements:
    temp: float  # °C
    humidity: float  # %
    pressure: float  # hPa
    temp_min: float
    temp_max: float


@dataclass(frozen=True)
class Wind:
    speed: float | None = None  # m/s
    deg: float | None = None


@dataclass(frozen=True)
class WeatherSnapshot:
    name: str
    dt: int  # epoch seconds, UTC
    timezone: int  # seconds from UTC
    sunrise: int
    sunset: int
    main: Measurements
    conditions: tuple[Condition, ...] = ()
    country: str | None = None
    wind: Wind | None = None
    clouds: float | None = None
    raw: dict = field(default_factory=dict, repr=False, compare=False)

    @property
    def primary_condition(self) -> Condition | None:
        return self.conditions[0] if self.conditions else None


def parse_snapshot(raw: dict) -> WeatherSnapshot:
    """Build a WeatherSnapshot from the upstream JSON body.

    Raises ValueError when the payload lacks the fields the view needs.
    """
    if not isinstance(raw, dict):
        raise ValueError("Malformed weather payload: expected a JSON object")

    main = raw.get("main")
    sys_ = raw.get("sys")
    if not isinstance(main, dict):
        raise ValueError("Malformed weather payload: missing 'main'")
    if not isinstance(sys_, dict) or "sunrise" not in sys_ or "sunset" not in sys_:
        raise ValueError("Malformed weather payload: missing 'sys' sunrise/sunset")

    try:
        measurements = Measurements(
            temp=float(main["temp"]),
            humidity=float(main.get("humidity", 0)),
            pressure=float(main.get("pressure", 0)),
            temp_min=float(main.get("temp_min", main["temp"])),
            temp_max=float(main.get("temp_max", main["temp"])),
        )
    except (KeyError, TypeError) as e:
        raise ValueError(f"Malformed weather payload: bad 'main' ({e})") from e

    conditions = tuple(
        Condition(
            main=w.get("main", ""),
            description=w.get("description", ""),
            icon=w.get("icon", ""),
        )
        for w in raw.get("weather") or []
        if isinstance(w, dict)
    )

    wind = None
    if isinstance(raw.get("wind"), dict):
        wind = Wind(speed=raw["wind"].get("speed"), deg=raw["wind"].get("deg"))

    clouds = None
    if isinstance(raw.get("clouds"), dict):
        clouds = raw["clouds"].get("all")

    try:
        dt = int(raw.get("dt", 0))
        timezone = int(raw.get("timezone", 0))
        sunrise = int(sys_["sunrise"])
        sunset = int(sys_["sunset"])
    except (TypeError, ValueError) as e:
        raise ValueError(f"Malformed weather payload: bad timestamps ({e})") from e

    return WeatherSnapshot(
        name=raw.get("name", ""),
        dt=dt,
        timezone=timezone,
        sunrise=sunrise,
        sunset=sunset,
        main=measurements,
        conditions=conditions,
        country=sys_.get("country") or None,
        wind=wind,
        clouds=clouds,
        raw=raw,
    )
