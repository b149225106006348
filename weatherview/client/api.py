"""Client for the weather proxy's /api/weather endpoint."""

import logging

import httpx

from weatherview.errors import WeatherFetchError
from weatherview.models.common import Coordinates
from weatherview.models.weather import WeatherSnapshot, parse_snapshot

logger = logging.getLogger(__name__)

DEFAULT_PROXY_URL = "http://127.0.0.1:8000"


class WeatherApiClient:
    def __init__(self, base_url: str = DEFAULT_PROXY_URL, timeout: float = 15.0):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    async def get_weather(self, coords: Coordinates) -> WeatherSnapshot:
        """Fetch current weather for coords through the proxy.

        Raises WeatherFetchError on non-2xx. Network failures propagate as
        httpx errors; cancellation propagates as asyncio.CancelledError.
        """
        url = f"{self.base_url}/api/weather"
        params = {"lat": str(coords.latitude), "lon": str(coords.longitude)}
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            resp = await client.get(url, params=params)

        if not resp.is_success:
            message = error_message(resp)
            logger.warning("Proxy returned %d: %s", resp.status_code, message)
            raise WeatherFetchError(message, resp.status_code)

        return parse_snapshot(resp.json())


def error_message(resp: httpx.Response) -> str:
    """The proxy's `error` string when present, else a generic network error."""
    try:
        body = resp.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and isinstance(body.get("error"), str):
        return body["error"]
    return f"Network error ({resp.status_code})"
