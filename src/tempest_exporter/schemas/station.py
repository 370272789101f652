"""Station envelope schema for the WeatherFlow observations API."""

import math
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from .enums import StatusCode
from .observation import Observation

# Label keys attached to every station metric, fixed for the process lifetime.
IDENTITY_LABELS: tuple[str, ...] = (
    "station_id",
    "station_name",
    "public_name",
    "latitude",
    "longitude",
    "timezone",
    "elevation",
)


def format_label_float(value: float) -> str:
    """Render a float label value in shortest round-trip scientific notation.

    ``45.52`` becomes ``4.552E+01`` and ``0.0`` becomes ``0E+00``.
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    digits = Decimal(repr(value)).normalize().as_tuple().digits
    return f"{value:.{len(digits) - 1}E}"


class StationStatus(BaseModel):
    """API call status."""

    model_config = ConfigDict(extra="ignore")

    status_code: int = StatusCode.SUCCESS
    status_message: str = ""

    @property
    def ok(self) -> bool:
        return self.status_code == StatusCode.SUCCESS


class StationResponse(BaseModel):
    """Response of ``GET /observations/station/{station_id}``.

    Carries the station identity and location plus a list of observation
    snapshots, of which only the first is ever consumed.
    """

    model_config = ConfigDict(extra="ignore")

    station_id: int
    station_name: str = ""
    public_name: str = ""
    latitude: float = 0.0
    longitude: float = 0.0
    timezone: str = ""
    elevation: float = 0.0
    status: StationStatus = Field(default_factory=StationStatus)
    obs: list[Observation] = Field(default_factory=list)

    @property
    def latest_observation(self) -> Observation | None:
        """Most recent observation, or None when the station reported nothing."""
        if not self.obs:
            return None
        return self.obs[0]

    def identity_labels(self) -> dict[str, str]:
        """Station identity as Prometheus label values, keyed by IDENTITY_LABELS."""
        return {
            "station_id": str(self.station_id),
            "station_name": self.station_name,
            "public_name": self.public_name,
            "latitude": format_label_float(self.latitude),
            "longitude": format_label_float(self.longitude),
            "timezone": self.timezone,
            "elevation": format_label_float(self.elevation),
        }
