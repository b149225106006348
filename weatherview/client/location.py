"""One-shot location acquisition over a callback-based capability."""

import asyncio
import logging

from weatherview.client.geolocation import (
    Geolocation,
    Position,
    PositionError,
    PositionErrorCode,
    PositionOptions,
)
from weatherview.errors import (
    LocationError,
    LocationPermissionDenied,
    LocationTimeout,
    LocationUnavailable,
    LocationUnknown,
    LocationUnsupported,
)
from weatherview.models.common import Coordinates

logger = logging.getLogger(__name__)

# High accuracy, 12s timeout, never a cached fix.
DEFAULT_OPTIONS = PositionOptions(enable_high_accuracy=True, timeout_ms=12000, maximum_age_ms=0)

_ERRORS_BY_CODE: dict[int, type[LocationError]] = {
    PositionErrorCode.PERMISSION_DENIED: LocationPermissionDenied,
    PositionErrorCode.POSITION_UNAVAILABLE: LocationUnavailable,
    PositionErrorCode.TIMEOUT: LocationTimeout,
}


def location_error_for(error: PositionError) -> LocationError:
    """Map a capability error code to its user-facing LocationError."""
    return _ERRORS_BY_CODE.get(error.code, LocationUnknown)()


class LocationAcquirer:
    def __init__(
        self,
        geolocation: Geolocation | None,
        options: PositionOptions = DEFAULT_OPTIONS,
    ):
        self.geolocation = geolocation
        self.options = options

    async def acquire(self) -> Coordinates:
        """Request a single fix. Raises a LocationError subclass on failure.

        No retry; only the first callback the capability fires counts.
        """
        if self.geolocation is None:
            raise LocationUnsupported()

        future: asyncio.Future[Coordinates] = asyncio.get_running_loop().create_future()

        def on_success(position: Position) -> None:
            if not future.done():
                future.set_result(Coordinates(position.latitude, position.longitude))

        def on_error(error: PositionError) -> None:
            if not future.done():
                logger.info("Location request failed: code=%s %s", error.code, error.message)
                future.set_exception(location_error_for(error))

        self.geolocation.get_current_position(on_success, on_error, self.options)
        return await future
