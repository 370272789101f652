"""Station exporter: one refresh cycle from API fetch to metric registry."""

import logging

from .clients import WeatherFlowClient
from .config import WeatherFlowConfig
from .exceptions import FetchError
from .metrics import ExporterHealth, MetricRegistry
from .overlay import resolve_indoor
from .schemas import StationResponse, base_numeric_field_names

logger = logging.getLogger(__name__)


class StationExporter:
    """Keeps a MetricRegistry in step with one WeatherFlow station.

    :meth:`start` performs the startup fetch and fixes the registry shape;
    :meth:`run_once` is one refresh cycle.
    """

    def __init__(
        self,
        config: WeatherFlowConfig,
        registry: MetricRegistry,
        health: ExporterHealth | None = None,
        client: WeatherFlowClient | None = None,
    ) -> None:
        """Initialize station exporter.

        Args:
            config: WeatherFlow configuration.
            registry: Metric registry to keep updated.
            health: Optional health metrics, created on the registry's
                Prometheus registry when omitted.
            client: Optional WeatherFlowClient for testing.
        """
        self.config = config
        self.registry = registry
        self.health = health or ExporterHealth(registry.registry, namespace=registry.namespace)
        self._client = client

    @property
    def client(self) -> WeatherFlowClient:
        """Lazy-initialize WeatherFlow client."""
        if self._client is None:
            self._client = WeatherFlowClient(self.config)
        return self._client

    async def start(self) -> None:
        """Fetch once, initialize the registry shape and publish the first values.

        Raises:
            FetchError: If the startup fetch fails. Without it there are no
                label keys to build the registry with.
        """
        logger.info("Fetching startup observation for station %s", self.config.station_id)
        station = await self.client.get_station_observation()

        labels = station.identity_labels()
        self.registry.initialize(base_numeric_field_names(), labels.keys())
        logger.info(
            "Exporting station %s (%s)",
            station.station_id,
            station.public_name or station.station_name,
        )

        updated = self._update(station)
        self.health.record_success(empty=not updated)

    async def run_once(self) -> bool:
        """Run one refresh cycle.

        Returns:
            True if the registry was updated, False if the station returned no
            observation or the fetch failed.

        Raises:
            FetchError: Only when ``exit_on_fetch_error`` is set.
        """
        logger.info("Getting latest observation...")
        try:
            station = await self.client.get_station_observation()
        except FetchError as e:
            self.health.record_failure()
            if self.config.exit_on_fetch_error:
                raise
            logger.error("Refresh failed, keeping previous values: %s", e)
            return False

        updated = self._update(station)
        self.health.record_success(empty=not updated)
        return updated

    def _update(self, station: StationResponse) -> bool:
        observation = station.latest_observation
        if observation is None:
            logger.info("Station %s returned no observations", station.station_id)
            return False

        self.registry.apply(resolve_indoor(observation), station.identity_labels())
        return True

    async def close(self) -> None:
        """Clean up resources."""
        if self._client is not None:
            await self._client.close()
