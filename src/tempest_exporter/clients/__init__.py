"""HTTP clients for weather data sources."""

from .weatherflow import WeatherFlowClient

__all__ = [
    "WeatherFlowClient",
]
