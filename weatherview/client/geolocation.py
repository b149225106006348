"""Platform location capabilities with a callback-based contract.

A capability exposes get_current_position(on_success, on_error, options) and
reports exactly one outcome on the running event loop, some time later.
"""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import IntEnum
from typing import Protocol

import httpx

from weatherview.config.schema import IP_LOOKUP_URL

logger = logging.getLogger(__name__)


class PositionErrorCode(IntEnum):
    PERMISSION_DENIED = 1
    POSITION_UNAVAILABLE = 2
    TIMEOUT = 3


@dataclass(frozen=True)
class Position:
    latitude: float
    longitude: float
    accuracy: float | None = None  # metres


@dataclass(frozen=True)
class PositionError:
    code: int
    message: str = ""


@dataclass(frozen=True)
class PositionOptions:
    enable_high_accuracy: bool = True
    timeout_ms: int = 12000
    maximum_age_ms: int = 0


SuccessCallback = Callable[[Position], None]
ErrorCallback = Callable[[PositionError], None]


class Geolocation(Protocol):
    def get_current_position(
        self,
        on_success: SuccessCallback,
        on_error: ErrorCallback,
        options: PositionOptions,
    ) -> None: ...


class FixedGeolocation:
    """Reports a configured position on the next loop iteration."""

    def __init__(self, latitude: float, longitude: float):
        self.position = Position(latitude=latitude, longitude=longitude, accuracy=0.0)

    def get_current_position(
        self,
        on_success: SuccessCallback,
        on_error: ErrorCallback,
        options: PositionOptions,
    ) -> None:
        asyncio.get_running_loop().call_soon(on_success, self.position)


class IpGeolocation:
    """Approximate position from an ip-api.com style lookup.

    The lookup is coarse regardless of enable_high_accuracy, and never
    reuses an earlier answer (maximum_age_ms is always honoured as 0).
    """

    def __init__(
        self,
        url: str = IP_LOOKUP_URL,
        allowed: bool = True,
    ):
        self.url = url
        self.allowed = allowed
        self._tasks: set[asyncio.Task] = set()

    def get_current_position(
        self,
        on_success: SuccessCallback,
        on_error: ErrorCallback,
        options: PositionOptions,
    ) -> None:
        loop = asyncio.get_running_loop()
        if not self.allowed:
            loop.call_soon(
                on_error,
                PositionError(PositionErrorCode.PERMISSION_DENIED, "IP lookup not allowed"),
            )
            return
        task = loop.create_task(self._lookup(on_success, on_error, options))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _lookup(
        self,
        on_success: SuccessCallback,
        on_error: ErrorCallback,
        options: PositionOptions,
    ) -> None:
        timeout = options.timeout_ms / 1000
        try:
            async with httpx.AsyncClient(timeout=timeout) as client:
                resp = await asyncio.wait_for(client.get(self.url), timeout)
            resp.raise_for_status()
            data = resp.json()
        except (TimeoutError, httpx.TimeoutException) as e:
            logger.warning("IP geolocation timed out after %dms", options.timeout_ms)
            on_error(PositionError(PositionErrorCode.TIMEOUT, str(e)))
            return
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
            logger.warning("IP geolocation failed: %s", e)
            on_error(PositionError(PositionErrorCode.POSITION_UNAVAILABLE, str(e)))
            return
        except Exception as e:
            logger.exception("IP geolocation crashed")
            on_error(PositionError(PositionErrorCode.POSITION_UNAVAILABLE, str(e)))
            return

        if not isinstance(data, dict) or data.get("status") != "success":
            message = data.get("message", "") if isinstance(data, dict) else ""
            logger.warning("IP geolocation lookup unsuccessful: %s", message)
            on_error(PositionError(PositionErrorCode.POSITION_UNAVAILABLE, message))
            return

        try:
            position = Position(latitude=float(data["lat"]), longitude=float(data["lon"]))
        except (KeyError, TypeError, ValueError) as e:
            on_error(PositionError(PositionErrorCode.POSITION_UNAVAILABLE, str(e)))
            return
        on_success(position)
