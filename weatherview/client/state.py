"""View load states as a tagged union: each variant carries only its payload."""

from dataclasses import dataclass
from enum import StrEnum
from typing import ClassVar, TypeAlias

from weatherview.models.common import Coordinates
from weatherview.models.weather import WeatherSnapshot


class LoadKind(StrEnum):
    IDLE = "idle"
    LOCATING = "locating"
    LOADING = "loading"
    DONE = "done"
    ERROR = "error"


@dataclass(frozen=True)
class Idle:
    kind: ClassVar[LoadKind] = LoadKind.IDLE


@dataclass(frozen=True)
class Locating:
    kind: ClassVar[LoadKind] = LoadKind.LOCATING


@dataclass(frozen=True)
class Loading:
    coords: Coordinates
    kind: ClassVar[LoadKind] = LoadKind.LOADING


@dataclass(frozen=True)
class Done:
    data: WeatherSnapshot
    kind: ClassVar[LoadKind] = LoadKind.DONE


@dataclass(frozen=True)
class Failed:
    message: str
    kind: ClassVar[LoadKind] = LoadKind.ERROR


LoadState: TypeAlias = Idle | Locating | Loading | Done | Failed
