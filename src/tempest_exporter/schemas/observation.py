"""Observation schema for Tempest station data."""

from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator


class Observation(BaseModel):
    """One observation snapshot from the WeatherFlow station observations API.

    Numeric fields default to ``0.0`` and text fields to ``""``: the upstream API
    does not distinguish an absent reading from a zero one. Fields named
    ``<base>_indoor`` are indoor variants of ``<base>``.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    # Atmospheric
    air_density: float = 0.0
    air_density_indoor: float = 0.0
    air_temperature: float = 0.0
    air_temperature_indoor: float = 0.0
    barometric_pressure: float = 0.0
    barometric_pressure_indoor: float = 0.0
    delta_t: float = 0.0
    delta_t_indoor: float = 0.0
    dew_point: float = 0.0
    dew_point_indoor: float = 0.0
    feels_like: float = 0.0
    feels_like_indoor: float = 0.0
    heat_index: float = 0.0
    heat_index_indoor: float = 0.0
    pressure_trend: str = ""
    pressure_trend_indoor: str = ""
    relative_humidity: float = 0.0
    relative_humidity_indoor: float = 0.0
    sea_level_pressure: float = 0.0
    sea_level_pressure_indoor: float = 0.0
    station_pressure: float = 0.0
    station_pressure_indoor: float = 0.0
    wet_bulb_temperature: float = 0.0
    wet_bulb_temperature_indoor: float = 0.0

    # Light
    brightness: float = 0.0
    solar_radiation: float = 0.0
    uv: float = 0.0

    # Lightning
    lightning_strike_count: float = 0.0
    lightning_strike_count_indoor: float = 0.0
    lightning_strike_count_last_1hr: float = 0.0
    lightning_strike_count_last_1hr_indoor: float = 0.0
    lightning_strike_count_last_3hr: float = 0.0
    lightning_strike_count_last_3hr_indoor: float = 0.0
    lightning_strike_last_distance: float = 0.0
    lightning_strike_last_distance_indoor: float = 0.0
    lightning_strike_last_epoch: float = 0.0
    lightning_strike_last_epoch_indoor: float = 0.0

    # Precipitation
    precip: float = 0.0
    precip_accum_last_1hr: float = 0.0
    precip_accum_local_day: float = 0.0
    precip_accum_local_yesterday: float = 0.0
    precip_accum_local_yesterday_final: float = 0.0
    precip_analysis_type_yesterday: float = 0.0
    precip_minutes_local_day: float = 0.0
    precip_minutes_local_yesterday: float = 0.0
    precip_minutes_local_yesterday_final: float = 0.0

    # Wind
    wind_avg: float = 0.0
    wind_chill: float = 0.0
    wind_chill_indoor: float = 0.0
    wind_direction: float = 0.0
    wind_gust: float = 0.0
    wind_lull: float = 0.0

    # Metadata
    timestamp: float = 0.0

    @field_validator("*", mode="before")
    @classmethod
    def null_as_default(cls, v: Any, info: ValidationInfo) -> Any:
        """Decode JSON null the same way as a missing key."""
        if v is None and info.field_name is not None:
            return cls.model_fields[info.field_name].default
        return v
