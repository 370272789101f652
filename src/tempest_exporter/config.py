"""Configuration settings loaded from environment variables."""

from typing import Annotated

from pydantic import Field
from pydantic_settings import BaseSettings


class WeatherFlowConfig(BaseSettings):
    """WeatherFlow station and exporter configuration."""

    api_token: Annotated[str, Field(min_length=1)]
    station_id: Annotated[str, Field(min_length=1)]
    base_url: str = "https://swd.weatherflow.com/swd/rest"
    listen_addr: str = "0.0.0.0"
    listen_port: int = 6969
    refresh_interval_seconds: float = 15.0
    request_timeout_seconds: float = 30.0
    exit_on_fetch_error: bool = False  # Exit instead of skipping the cycle when a refresh fails

    model_config = {"env_prefix": "WEATHERFLOW_"}


class MetricsConfig(BaseSettings):
    """Metric naming configuration."""

    namespace: str = "tempest"
    subsystem: str = "station"

    model_config = {"env_prefix": "METRICS_"}


class Settings(BaseSettings):
    """Application settings combining all configs."""

    log_level: str = "INFO"
    weatherflow: WeatherFlowConfig = Field(default_factory=WeatherFlowConfig)
    metrics: MetricsConfig = Field(default_factory=MetricsConfig)


def get_settings() -> Settings:
    """Load settings from environment."""
    return Settings()


_SETTINGS_MODELS: dict[str, type[BaseSettings]] = {
    model.__name__: model for model in (Settings, WeatherFlowConfig, MetricsConfig)
}


def env_var_name(model_title: str, loc: tuple[int | str, ...]) -> str:
    """Environment variable behind a validation error location.

    Args:
        model_title: Title of the model that failed, e.g. ``"MetricsConfig"``.
        loc: Error location within that model, nested configs first.

    Returns:
        Variable name such as ``WEATHERFLOW_API_TOKEN``.
    """
    if not loc:
        return "?"
    model = _SETTINGS_MODELS.get(model_title, Settings)
    for part in loc[:-1]:
        field = model.model_fields.get(str(part))
        if field is None or not (
            isinstance(field.annotation, type) and issubclass(field.annotation, BaseSettings)
        ):
            break
        model = field.annotation
    prefix = model.model_config.get("env_prefix", "")
    return f"{prefix}{loc[-1]}".upper()
