"""OpenWeatherMap current-weather client. Single attempt, no caching."""

import logging
import os

import httpx

from weatherview.config.schema import OPENWEATHER_BASE_URL
from weatherview.errors import ConfigurationError, UnexpectedError, UpstreamError

logger = logging.getLogger(__name__)

API_KEY_ENV = "OPENWEATHER_API_KEY"
CURRENT_WEATHER_PATH = "/data/2.5/weather"
NO_CACHE_HEADERS = {"Cache-Control": "no-cache", "Pragma": "no-cache"}


class OpenWeatherClient:
    """Thin wrapper around the "current weather by coordinates" endpoint.

    Units are fixed to metric (Celsius, m/s). The API key comes from
    OPENWEATHER_API_KEY unless passed explicitly and is never logged.
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str = OPENWEATHER_BASE_URL,
        timeout: float = 10.0,
    ):
        self.api_key = api_key or os.environ.get(API_KEY_ENV, "")
        if not self.api_key:
            raise ConfigurationError(f"Missing {API_KEY_ENV}")
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def get_current_weather(self, lat: str, lon: str) -> dict:
        """Fetch current conditions for lat/lon and return the upstream JSON as-is.

        Raises UpstreamError on non-2xx (status preserved, body text as detail)
        and UnexpectedError on network or parse failures.
        """
        url = f"{self.base_url}{CURRENT_WEATHER_PATH}"
        params = {"lat": lat, "lon": lon, "appid": self.api_key, "units": "metric"}
        try:
            resp = httpx.get(
                url, params=params, headers=NO_CACHE_HEADERS, timeout=self.timeout
            )
        except httpx.HTTPError as e:
            logger.error("OpenWeather request failed for lat=%s lon=%s: %s", lat, lon, e)
            raise UnexpectedError("Unexpected server error", detail=str(e)) from e

        if not resp.is_success:
            logger.warning(
                "OpenWeather returned %d for lat=%s lon=%s", resp.status_code, lat, lon
            )
            raise UpstreamError(
                "OpenWeather request failed",
                status_code=resp.status_code,
                detail=resp.text,
            )

        try:
            return resp.json()
        except ValueError as e:
            logger.error("OpenWeather returned malformed JSON: %s", e)
            raise UnexpectedError("Unexpected server error", detail=str(e)) from e
