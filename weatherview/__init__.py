"""Current weather at your location: OpenWeatherMap proxy and terminal view."""

__version__ = "0.1.0"
