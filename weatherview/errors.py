"""Error taxonomy for the proxy and the client view."""


class WeatherViewError(Exception):
    """Base class for all weatherview errors."""


# --- Proxy side ---


class ProxyError(WeatherViewError):
    """An error the proxy answers with a structured JSON body."""

    status_code = 500

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        detail: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.detail = detail

    def to_body(self) -> dict:
        body = {"error": self.message}
        if self.detail is not None:
            body["detail"] = self.detail
        return body


class ValidationError(ProxyError):
    """Required query parameters are missing or empty."""

    status_code = 400


class ConfigurationError(ProxyError):
    """The server-side credential is not configured."""

    status_code = 500


class UpstreamError(ProxyError):
    """Upstream answered non-2xx; its status code is preserved."""


class UnexpectedError(ProxyError):
    """Network, URL or parse failure while talking to upstream."""

    status_code = 500


# --- Client side ---


class LocationError(WeatherViewError):
    """Base class for location acquisition failures."""

    message = "Failed to get your location."

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class LocationUnsupported(LocationError):
    message = "Geolocation is not supported in this browser."


class LocationPermissionDenied(LocationError):
    message = "Permission denied. Please allow location access and try again."


class LocationUnavailable(LocationError):
    message = "Location unavailable. Check your device settings and try again."


class LocationTimeout(LocationError):
    message = "Location request timed out. Please try again."


class LocationUnknown(LocationError):
    message = "Failed to get your location."


class WeatherFetchError(WeatherViewError):
    """The proxy answered non-2xx."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code
