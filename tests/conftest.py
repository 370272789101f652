"""Shared test fixtures for all tests."""

import json
from pathlib import Path

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures" / "weatherflow"


@pytest.fixture
def sample_station_id() -> str:
    """Sample WeatherFlow station ID for testing."""
    return "42"


@pytest.fixture
def station_payload() -> dict:
    """Station observations response with one observation."""
    return json.loads((FIXTURES_DIR / "station_observation.json").read_text())


@pytest.fixture
def station_no_obs_payload() -> dict:
    """Station observations response with an empty observation list."""
    return json.loads((FIXTURES_DIR / "station_no_obs.json").read_text())
