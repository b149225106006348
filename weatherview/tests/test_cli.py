"""Tests for CLI commands."""

import io
import json
from pathlib import Path

import httpx
import respx

from weatherview.cli import build_geolocation, main
from weatherview.client.api import WeatherApiClient
from weatherview.client.controller import ViewController
from weatherview.client.geolocation import FixedGeolocation, IpGeolocation
from weatherview.client.location import LocationAcquirer
from weatherview.config.schema import ClientConfig, LocationConfig


def _config(tmp_path: Path) -> Path:
    path = tmp_path / "test.yaml"
    path.write_text("client:\n  proxy_url: http://test-proxy.example.com\n")
    return path


class TestCLI:
    def test_no_command_returns_1(self, capsys):
        assert main([]) == 1

    def test_config_show(self, tmp_path: Path, capsys):
        result = main(["--config", str(_config(tmp_path)), "config", "show"])
        assert result == 0
        assert "test-proxy.example.com" in capsys.readouterr().out

    def test_config_get(self, tmp_path: Path, capsys):
        result = main(["--config", str(_config(tmp_path)), "config", "get", "client.location.provider"])
        assert result == 0
        assert capsys.readouterr().out.strip() == "ip"

    def test_config_get_unknown_key(self, tmp_path: Path, capsys):
        result = main(["--config", str(_config(tmp_path)), "config", "get", "nope"])
        assert result == 1
        assert "Error" in capsys.readouterr().out

    @respx.mock
    def test_show_renders_weather(self, tmp_path: Path, capsys, weather_payload: dict):
        respx.get("http://test-proxy.example.com/api/weather").mock(
            return_value=httpx.Response(200, json=weather_payload)
        )
        result = main([
            "--config", str(_config(tmp_path)),
            "show", "--lat", "52.52", "--lon", "13.41",
        ])
        assert result == 0
        out = capsys.readouterr().out
        assert "Berlin, DE" in out
        assert "Sunrise" in out

    @respx.mock
    def test_show_json(self, tmp_path: Path, capsys, weather_payload: dict):
        respx.get("http://test-proxy.example.com/api/weather").mock(
            return_value=httpx.Response(200, json=weather_payload)
        )
        result = main([
            "--config", str(_config(tmp_path)),
            "show", "--lat", "52.52", "--lon", "13.41", "--json",
        ])
        assert result == 0
        assert json.loads(capsys.readouterr().out) == weather_payload

    @respx.mock
    def test_show_error_returns_1(self, tmp_path: Path, capsys):
        respx.get("http://test-proxy.example.com/api/weather").mock(
            return_value=httpx.Response(500, json={"error": "Missing OPENWEATHER_API_KEY"})
        )
        result = main([
            "--config", str(_config(tmp_path)),
            "show", "--lat", "52.52", "--lon", "13.41",
        ])
        assert result == 1
        out = capsys.readouterr().out
        assert "Something went wrong" in out
        assert "Missing OPENWEATHER_API_KEY" in out


class TestBuildGeolocation:
    def test_explicit_position_wins(self):
        assert isinstance(build_geolocation(ClientConfig(), 1.0, 2.0), FixedGeolocation)

    def test_ip_provider(self):
        geo = build_geolocation(ClientConfig())
        assert isinstance(geo, IpGeolocation)
        assert geo.allowed is True

    def test_fixed_provider(self):
        config = ClientConfig(location=LocationConfig(provider="fixed", latitude=1.0, longitude=2.0))
        geo = build_geolocation(config)
        assert geo.position.latitude == 1.0

    def test_none_provider(self):
        config = ClientConfig(location=LocationConfig(provider="none"))
        assert build_geolocation(config) is None


class _NeverAnswers:
    def get_current_position(self, on_success, on_error, options):
        pass


class TestWatch:
    def _run(self, monkeypatch, tmp_path: Path, geolocation, stdin: str) -> int:
        def fake_build_controller(config, lat=None, lon=None):
            return ViewController(LocationAcquirer(geolocation), WeatherApiClient(config.proxy_url))

        monkeypatch.setattr("weatherview.cli.build_controller", fake_build_controller)
        monkeypatch.setattr("sys.stdin", io.StringIO(stdin))
        return main(["--config", str(_config(tmp_path)), "watch"])

    def test_refresh_ignored_while_busy_and_q_quits(self, monkeypatch, tmp_path: Path, capsys):
        result = self._run(monkeypatch, tmp_path, _NeverAnswers(), "\n\nq\nignored after quit\n")
        assert result == 0
        out = capsys.readouterr().out
        assert "Locating you…" in out
        assert out.count("Busy, refresh ignored") == 2

    def test_refresh_after_error_reruns(self, monkeypatch, tmp_path: Path, capsys):
        result = self._run(monkeypatch, tmp_path, None, "\nquit\n")
        assert result == 0
        out = capsys.readouterr().out
        assert out.count("Geolocation is not supported in this browser.") == 2
        assert "Busy" not in out

    def test_eof_exits(self, monkeypatch, tmp_path: Path, capsys):
        assert self._run(monkeypatch, tmp_path, _NeverAnswers(), "") == 0
