"""Prometheus metrics for station observations and exporter health."""

from .health import ExporterHealth
from .registry import MetricRegistry, Series

__all__ = [
    "ExporterHealth",
    "MetricRegistry",
    "Series",
]
