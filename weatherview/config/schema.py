"""Pydantic v2 configuration schema with strict validation."""

from enum import StrEnum

from pydantic import BaseModel, Field, model_validator

OPENWEATHER_BASE_URL = "https://api.openweathermap.org"
IP_LOOKUP_URL = "http://ip-api.com/json"


class LocationProvider(StrEnum):
    IP = "ip"
    FIXED = "fixed"
    NONE = "none"  # no location capability at all


class ProxyConfig(BaseModel):
    model_config = {"extra": "forbid"}

    host: str = "127.0.0.1"
    port: int = Field(default=8000, ge=1, le=65535)
    upstream_base_url: str = OPENWEATHER_BASE_URL
    timeout_seconds: float = Field(default=10.0, gt=0.0)
    cors_origins: list[str] = ["*"]


class LocationConfig(BaseModel):
    model_config = {"extra": "forbid"}

    provider: LocationProvider = LocationProvider.IP
    latitude: float | None = Field(default=None, ge=-90.0, le=90.0)
    longitude: float | None = Field(default=None, ge=-180.0, le=180.0)
    ip_lookup_url: str = IP_LOOKUP_URL
    allow_ip_lookup: bool = True

    @model_validator(mode="after")
    def _fixed_needs_coordinates(self) -> "LocationConfig":
        if self.provider == LocationProvider.FIXED and (
            self.latitude is None or self.longitude is None
        ):
            raise ValueError("fixed location provider requires latitude and longitude")
        return self


class ClientConfig(BaseModel):
    model_config = {"extra": "forbid"}

    proxy_url: str = "http://127.0.0.1:8000"
    timeout_seconds: float = Field(default=15.0, gt=0.0)
    location: LocationConfig = LocationConfig()


class AppConfig(BaseModel):
    model_config = {"extra": "forbid"}

    proxy: ProxyConfig = ProxyConfig()
    client: ClientConfig = ClientConfig()
