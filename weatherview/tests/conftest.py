"""Shared test fixtures."""

import json
from pathlib import Path

import pytest
import yaml

from weatherview.models.weather import WeatherSnapshot, parse_snapshot


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def weather_payload(fixtures_dir: Path) -> dict:
    """Upstream current-weather body for Berlin."""
    with open(fixtures_dir / "openweather_current.json") as f:
        return json.load(f)


@pytest.fixture
def snapshot(weather_payload: dict) -> WeatherSnapshot:
    return parse_snapshot(weather_payload)


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "proxy": {"port": 9000},
        "client": {"location": {"provider": "fixed", "latitude": 52.52, "longitude": 13.41}},
    }
    path = tmp_path / "test_config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path
