"""View controller: location -> proxy fetch -> render state.

Owns the load-state machine. At most one weather fetch is in flight; starting
a new one cancels the previous task, and a fetch only commits its outcome
while it is still the controller's current fetch task.
"""

import asyncio
import logging
from collections.abc import Callable
from typing import Protocol

from weatherview.client.location import LocationAcquirer
from weatherview.client.state import Done, Failed, Idle, LoadState, Loading, Locating
from weatherview.errors import LocationError, LocationUnknown, WeatherFetchError
from weatherview.models.common import Coordinates
from weatherview.models.weather import WeatherSnapshot

logger = logging.getLogger(__name__)

FALLBACK_FETCH_ERROR = "Failed to load weather."

Listener = Callable[[LoadState], None]


class WeatherSource(Protocol):
    async def get_weather(self, coords: Coordinates) -> WeatherSnapshot: ...


class ViewController:
    def __init__(self, acquirer: LocationAcquirer, api: WeatherSource):
        self.acquirer = acquirer
        self.api = api
        self.state: LoadState = Idle()
        self.coords: Coordinates | None = None
        self._listeners: list[Listener] = []
        self._started = False
        self._locate_task: asyncio.Task | None = None
        self._fetch_task: asyncio.Task | None = None

    @property
    def is_busy(self) -> bool:
        return isinstance(self.state, (Locating, Loading))

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def start(self) -> asyncio.Task | None:
        """Begin acquisition. Only the first call does anything."""
        if self._started:
            return None
        self._started = True
        return self._begin_locating()

    def refresh(self) -> asyncio.Task | None:
        """User-triggered re-run. No-op while locating or loading."""
        if self.is_busy:
            logger.debug("Refresh ignored while %s", self.state.kind)
            return None
        self._started = True
        return self._begin_locating()

    def fetch_weather(self, coords: Coordinates) -> asyncio.Task:
        """Cancel any in-flight fetch, then issue a new one for coords."""
        previous = self._fetch_task
        if previous is not None and not previous.done():
            logger.debug("Cancelling superseded weather fetch")
            previous.cancel()
        self._set_state(Loading(coords))
        task = asyncio.get_running_loop().create_task(self._run_fetch(coords))
        self._fetch_task = task
        return task

    async def settle(self) -> LoadState:
        """Wait until no acquisition or fetch is pending; return the final state."""
        if self._locate_task is not None:
            await asyncio.wait([self._locate_task])
        while self._fetch_task is not None and not self._fetch_task.done():
            await asyncio.wait([self._fetch_task])
        return self.state

    def _begin_locating(self) -> asyncio.Task:
        self.coords = None
        self._set_state(Locating())
        self._locate_task = asyncio.get_running_loop().create_task(self._locate())
        return self._locate_task

    async def _locate(self) -> None:
        try:
            coords = await self.acquirer.acquire()
        except LocationError as e:
            self._set_state(Failed(e.message))
            return
        except Exception as e:
            logger.warning("Location request crashed: %s", e)
            self._set_state(Failed(LocationUnknown().message))
            return
        self.coords = coords
        self.fetch_weather(coords)

    async def _run_fetch(self, coords: Coordinates) -> None:
        try:
            snapshot = await self.api.get_weather(coords)
        except asyncio.CancelledError:
            logger.debug("Weather fetch for %s discarded", coords)
            raise
        except WeatherFetchError as e:
            self._commit(Failed(str(e)))
            return
        except Exception as e:
            logger.warning("Weather fetch failed: %s", e)
            self._commit(Failed(str(e) or FALLBACK_FETCH_ERROR))
            return
        self._commit(Done(snapshot))

    def _commit(self, state: LoadState) -> None:
        if asyncio.current_task() is not self._fetch_task:
            return
        self._set_state(state)

    def _set_state(self, state: LoadState) -> None:
        self.state = state
        for listener in self._listeners:
            listener(state)
