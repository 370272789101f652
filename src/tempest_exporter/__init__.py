"""Tempest Weather Station Exporter - Prometheus metrics from the WeatherFlow API.

This package fetches the latest observation of a WeatherFlow Tempest station
and republishes every numeric field as a Prometheus gauge labelled with the
station identity. Indoor sensor readings, when present, replace their outdoor
counterparts.

Usage:
    from tempest_exporter.metrics import MetricRegistry
    from tempest_exporter.overlay import resolve_indoor
    from tempest_exporter.schemas import Observation, StationResponse
"""

__version__ = "0.1.0"

from .config import Settings, WeatherFlowConfig, get_settings
from .metrics import MetricRegistry
from .overlay import resolve_indoor
from .schemas import Observation, StationResponse

__all__ = [
    "MetricRegistry",
    "Observation",
    "Settings",
    "StationResponse",
    "WeatherFlowConfig",
    "get_settings",
    "resolve_indoor",
]
