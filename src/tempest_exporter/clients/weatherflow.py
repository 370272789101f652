"""WeatherFlow station observations API client."""

import logging

import httpx
from pydantic import ValidationError

from ..config import WeatherFlowConfig
from ..exceptions import FetchError, StationStatusError
from ..schemas import StationResponse

logger = logging.getLogger(__name__)


class WeatherFlowClient:
    """HTTP client for the WeatherFlow Tempest REST API.

    Fetches the latest observation of a single station. Every failure, from a
    dropped connection to a payload that does not match the schema, surfaces as
    :class:`FetchError`.
    """

    def __init__(
        self,
        config: WeatherFlowConfig,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize WeatherFlow client.

        Args:
            config: WeatherFlow configuration settings.
            http_client: Optional custom HTTP client for testing.
        """
        self.config = config
        self._http_client = http_client

    @property
    def http_client(self) -> httpx.AsyncClient:
        """Lazy-initialize HTTP client."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                timeout=self.config.request_timeout_seconds,
                follow_redirects=True,
                headers={"Accept": "application/json"},
            )
        return self._http_client

    async def close(self) -> None:
        """Close HTTP client."""
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None

    def observation_url(self, station_id: str) -> str:
        return f"{self.config.base_url.rstrip('/')}/observations/station/{station_id}"

    async def get_station_observation(self, station_id: str | None = None) -> StationResponse:
        """Fetch the latest observations for a station.

        Args:
            station_id: Station to query, defaults to the configured station.

        Returns:
            Decoded station envelope; ``obs`` may be empty.

        Raises:
            StationStatusError: If the API reports a non-success status.
            FetchError: On network, HTTP status, JSON or schema errors.
        """
        station_id = station_id or self.config.station_id
        url = self.observation_url(station_id)

        try:
            response = await self.http_client.get(url, params={"token": self.config.api_token})
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            # The request URL carries the token, keep it out of the message
            raise FetchError(
                f"station {station_id} observations returned HTTP {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise FetchError(
                f"error getting data from station {station_id}: {type(e).__name__}"
            ) from e
        except ValueError as e:
            raise FetchError(f"station {station_id} returned malformed JSON: {e}") from e

        try:
            station = StationResponse.model_validate(data)
        except ValidationError as e:
            raise FetchError(
                f"station {station_id} response does not match the expected schema: "
                f"{e.error_count()} error(s)"
            ) from e

        if not station.status.ok:
            raise StationStatusError(station.status.status_code, station.status.status_message)

        logger.debug(
            "Fetched %d observation(s) for station %s (%s)",
            len(station.obs),
            station.station_id,
            station.station_name,
        )
        return station
