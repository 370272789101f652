"""Unit test fixtures - configs and sample data."""

import pytest

from tempest_exporter.config import WeatherFlowConfig


@pytest.fixture
def weatherflow_config(sample_station_id: str) -> WeatherFlowConfig:
    """WeatherFlow configuration for testing."""
    return WeatherFlowConfig(
        api_token="test-token",
        station_id=sample_station_id,
        base_url="https://swd.weatherflow.com/swd/rest",
        refresh_interval_seconds=0.01,
        request_timeout_seconds=5.0,
    )


@pytest.fixture
def identity_labels() -> dict[str, str]:
    """Identity labels of the fixture station."""
    return {
        "station_id": "42",
        "station_name": "Home",
        "public_name": "Elm Street",
        "latitude": "4.552E+01",
        "longitude": "-1.2268E+02",
        "timezone": "America/Los_Angeles",
        "elevation": "6.15E+01",
    }
