"""YAML config loader with dotted-key lookup."""

from pathlib import Path
from typing import Any

import yaml

from weatherview.config.schema import AppConfig


def load_config(path: str | Path) -> AppConfig:
    """Load and validate config from a YAML file. An empty file yields defaults."""
    path = Path(path)
    with open(path) as f:
        raw = yaml.safe_load(f) or {}
    return AppConfig(**raw)


def get_config_value(config: AppConfig, dotted_key: str) -> Any:
    """Get a config value by dotted key path. E.g. 'client.location.provider'."""
    obj: Any = config
    for part in dotted_key.split("."):
        if isinstance(obj, list):
            obj = obj[int(part)]
        elif isinstance(obj, dict):
            obj = obj[part]
        elif part in getattr(type(obj), "model_fields", {}):
            obj = getattr(obj, part)
        else:
            raise KeyError(f"Config key not found: {dotted_key}")
    return obj
