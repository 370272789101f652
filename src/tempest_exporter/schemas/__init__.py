"""Tempest station data schemas.

Pydantic models for decoding the WeatherFlow observations API, plus the
declarative field table the overlay and metric registry iterate over.
"""

from .enums import FieldKind, StatusCode
from .fields import (
    INDOOR_SUFFIX,
    OBSERVATION_FIELDS,
    FieldSpec,
    base_fields,
    base_numeric_field_names,
    field_spec,
)
from .observation import Observation
from .station import IDENTITY_LABELS, StationResponse, StationStatus

__all__ = [
    "FieldKind",
    "FieldSpec",
    "IDENTITY_LABELS",
    "INDOOR_SUFFIX",
    "OBSERVATION_FIELDS",
    "Observation",
    "StationResponse",
    "StationStatus",
    "StatusCode",
    "base_fields",
    "base_numeric_field_names",
    "field_spec",
]
