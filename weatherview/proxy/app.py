"""Weather proxy: FastAPI app that forwards lat/lon to OpenWeatherMap.

The OPENWEATHER_API_KEY stays on the server; callers only ever see the
upstream weather JSON or a structured error body.

Usage:
    uvicorn weatherview.proxy.app:app
    python -m weatherview serve --port 8000
"""

import logging
import os

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from weatherview import __version__
from weatherview.config.schema import ProxyConfig
from weatherview.errors import ProxyError, UnexpectedError, ValidationError
from weatherview.proxy.openweather_client import API_KEY_ENV, OpenWeatherClient

logger = logging.getLogger(__name__)

NO_STORE = {"Cache-Control": "no-store"}


def create_app(config: ProxyConfig | None = None) -> FastAPI:
    config = config or ProxyConfig()

    app = FastAPI(title="Weather View Proxy", version=__version__)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    @app.exception_handler(ProxyError)
    async def _proxy_error(request: Request, exc: ProxyError) -> JSONResponse:
        return JSONResponse(exc.to_body(), status_code=exc.status_code, headers=NO_STORE)

    @app.get("/api/weather")
    def get_weather(lat: str | None = None, lon: str | None = None):
        """Current weather for lat/lon, relayed verbatim from OpenWeatherMap."""
        try:
            client = OpenWeatherClient(
                base_url=config.upstream_base_url,
                timeout=config.timeout_seconds,
            )
            if not lat or not lon:
                raise ValidationError("lat and lon query params are required")
            data = client.get_current_weather(lat, lon)
        except ProxyError:
            raise
        except Exception as e:
            logger.exception("Unexpected error serving lat=%s lon=%s", lat, lon)
            raise UnexpectedError("Unexpected server error", detail=str(e)) from e

        return JSONResponse(data, status_code=200, headers=NO_STORE)

    @app.get("/api/health")
    def get_health():
        """Liveness plus whether the credential is present. Never reveals the key."""
        return JSONResponse(
            {"status": "ok", "api_key_configured": bool(os.environ.get(API_KEY_ENV))},
            headers=NO_STORE,
        )

    return app


app = create_app()
