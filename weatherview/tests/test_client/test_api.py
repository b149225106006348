"""Tests for the proxy client with mocked httpx."""

import asyncio

import httpx
import pytest
import respx

from weatherview.client.api import WeatherApiClient
from weatherview.errors import WeatherFetchError
from weatherview.models.common import Coordinates

PROXY = "http://test-proxy.example.com"
ENDPOINT = f"{PROXY}/api/weather"


@pytest.fixture
def api() -> WeatherApiClient:
    return WeatherApiClient(PROXY, timeout=1.0)


def _fetch(api: WeatherApiClient, coords: Coordinates = Coordinates(52.52, 13.41)):
    return asyncio.run(api.get_weather(coords))


class TestGetWeather:
    @respx.mock
    def test_success(self, api: WeatherApiClient, weather_payload: dict):
        route = respx.get(ENDPOINT).mock(return_value=httpx.Response(200, json=weather_payload))
        snapshot = _fetch(api)

        assert snapshot.name == "Berlin"
        params = route.calls[0].request.url.params
        assert params["lat"] == "52.52"
        assert params["lon"] == "13.41"

    @respx.mock
    def test_proxy_error_string_used(self, api: WeatherApiClient):
        respx.get(ENDPOINT).mock(
            return_value=httpx.Response(
                401, json={"error": "OpenWeather request failed", "detail": "invalid key"}
            )
        )
        with pytest.raises(WeatherFetchError) as exc:
            _fetch(api)
        assert str(exc.value) == "OpenWeather request failed"
        assert exc.value.status_code == 401

    @respx.mock
    def test_non_string_error_falls_back(self, api: WeatherApiClient):
        respx.get(ENDPOINT).mock(return_value=httpx.Response(500, json={"error": 42}))
        with pytest.raises(WeatherFetchError) as exc:
            _fetch(api)
        assert str(exc.value) == "Network error (500)"

    @respx.mock
    def test_non_json_body_falls_back(self, api: WeatherApiClient):
        respx.get(ENDPOINT).mock(return_value=httpx.Response(502, text="Bad Gateway"))
        with pytest.raises(WeatherFetchError) as exc:
            _fetch(api)
        assert str(exc.value) == "Network error (502)"

    @respx.mock
    def test_network_error_propagates(self, api: WeatherApiClient):
        respx.get(ENDPOINT).mock(side_effect=httpx.ConnectError("connection refused"))
        with pytest.raises(httpx.ConnectError):
            _fetch(api)
