"""Enums for Tempest observation schemas."""

from enum import Enum


class FieldKind(str, Enum):
    """Value kind of an observation field."""

    NUMERIC = "numeric"
    TEXT = "text"


class StatusCode(int, Enum):
    """WeatherFlow API status codes the exporter cares about."""

    SUCCESS = 0
