"""CLI entry point for the weather proxy and terminal view."""

import argparse
import asyncio
import json
import logging
import sys

from weatherview.client.api import WeatherApiClient
from weatherview.client.controller import ViewController
from weatherview.client.geolocation import FixedGeolocation, Geolocation, IpGeolocation
from weatherview.client.location import LocationAcquirer
from weatherview.client.render import render_state
from weatherview.client.state import Done
from weatherview.config.loader import get_config_value, load_config
from weatherview.config.schema import AppConfig, ClientConfig, LocationProvider

DEFAULT_CONFIG = "ops/configs/default.yaml"

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="weatherview",
        description="Current weather at your location",
    )
    parser.add_argument("--config", default=DEFAULT_CONFIG, help="Config YAML path")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    sub = parser.add_subparsers(dest="command")

    # serve
    serve_p = sub.add_parser("serve", help="Run the weather proxy")
    serve_p.add_argument("--host", help="Bind address (overrides config)")
    serve_p.add_argument("--port", type=int, help="Bind port (overrides config)")

    # show / watch
    show_p = sub.add_parser("show", help="Locate, fetch and print the weather once")
    _add_position_args(show_p)
    show_p.add_argument("--json", action="store_true", help="Print the raw weather JSON")
    watch_p = sub.add_parser("watch", help="Interactive view: Enter refreshes, q quits")
    _add_position_args(watch_p)

    # config show / config get
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display current config")
    get_p = config_sub.add_parser("get", help="Print one config value")
    get_p.add_argument("key", help="Dotted key, e.g. client.location.provider")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_config(args.config)

    if args.command == "serve":
        return _cmd_serve(config, args)
    elif args.command == "show":
        return asyncio.run(_cmd_show(config, args))
    elif args.command == "watch":
        return asyncio.run(_cmd_watch(config, args))
    elif args.command == "config":
        return _cmd_config(config, args)
    else:
        parser.print_help()
        return 1


def _add_position_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--lat", type=float, help="Use a fixed latitude")
    p.add_argument("--lon", type=float, help="Use a fixed longitude")


def build_geolocation(
    config: ClientConfig, lat: float | None = None, lon: float | None = None
) -> Geolocation | None:
    """Pick the location capability: explicit --lat/--lon win over config."""
    if lat is not None and lon is not None:
        return FixedGeolocation(lat, lon)
    location = config.location
    if location.provider == LocationProvider.FIXED:
        return FixedGeolocation(location.latitude, location.longitude)
    if location.provider == LocationProvider.IP:
        return IpGeolocation(location.ip_lookup_url, allowed=location.allow_ip_lookup)
    return None


def build_controller(
    config: ClientConfig, lat: float | None = None, lon: float | None = None
) -> ViewController:
    acquirer = LocationAcquirer(build_geolocation(config, lat, lon))
    api = WeatherApiClient(config.proxy_url, timeout=config.timeout_seconds)
    return ViewController(acquirer, api)


def _cmd_serve(config: AppConfig, args) -> int:
    import uvicorn

    from weatherview.proxy.app import create_app

    host = args.host or config.proxy.host
    port = args.port or config.proxy.port
    logger.info("Starting weather proxy on %s:%d", host, port)
    uvicorn.run(create_app(config.proxy), host=host, port=port)
    return 0


async def _cmd_show(config: AppConfig, args) -> int:
    controller = build_controller(config.client, args.lat, args.lon)
    controller.start()
    state = await controller.settle()
    if args.json and isinstance(state, Done):
        print(json.dumps(state.data.raw, indent=2))
    else:
        print(render_state(state))
    return 0 if isinstance(state, Done) else 1


async def _cmd_watch(config: AppConfig, args) -> int:
    controller = build_controller(config.client, args.lat, args.lon)
    controller.subscribe(lambda state: print(render_state(state) + "\n"))
    controller.start()

    loop = asyncio.get_running_loop()
    while True:
        line = await loop.run_in_executor(None, sys.stdin.readline)
        if not line or line.strip().lower() in ("q", "quit"):
            break
        if controller.refresh() is None:
            print("Busy, refresh ignored")
    return 0


def _cmd_config(config: AppConfig, args) -> int:
    if args.config_command == "show":
        print(config.model_dump_json(indent=2))
        return 0
    elif args.config_command == "get":
        try:
            value = get_config_value(config, args.key)
        except (KeyError, IndexError, ValueError) as e:
            print(f"Error: {e}")
            return 1
        if hasattr(value, "model_dump_json"):
            print(value.model_dump_json(indent=2))
        else:
            print(value)
        return 0
    else:
        print("Use: config show | config get key")
        return 1
