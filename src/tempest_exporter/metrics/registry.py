"""Metric registry exposing one gauge per observation field."""

import logging
import threading
from dataclasses import dataclass
from typing import Iterable, Iterator, Mapping

from prometheus_client import CollectorRegistry
from prometheus_client.core import GaugeMetricFamily

from ..exceptions import RegistryConfigError, RegistryStateError
from ..schemas import Observation

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Series:
    """Current state of one gauge: its value and the label values it carries."""

    value: float
    labels: tuple[str, ...]


class MetricRegistry:
    """Fixed-shape registry of station gauges.

    The shape (field names and label keys) is set once by :meth:`initialize`
    and never changes afterwards. :meth:`apply` replaces every series' value and
    label values from the latest observation. Scrapes read the registry through
    the Prometheus collector protocol (:meth:`collect`) from another thread;
    each series is swapped as a single immutable object under a lock, so a
    scrape never sees a value paired with stale labels.
    """

    def __init__(
        self,
        namespace: str = "tempest",
        subsystem: str = "station",
        registry: CollectorRegistry | None = None,
    ) -> None:
        """Initialize metric registry.

        Args:
            namespace: First component of every metric name.
            subsystem: Second component of every metric name.
            registry: Prometheus registry to register with on initialize.
                A private one is created when omitted.
        """
        self.namespace = namespace
        self.subsystem = subsystem
        self.registry = registry if registry is not None else CollectorRegistry()
        self._lock = threading.Lock()
        self._field_names: tuple[str, ...] = ()
        self._label_keys: tuple[str, ...] = ()
        self._series: dict[str, Series | None] = {}
        self._initialized = False

    @property
    def initialized(self) -> bool:
        return self._initialized

    @property
    def field_names(self) -> tuple[str, ...]:
        """Registered field names, in registration order."""
        return self._field_names

    @property
    def label_keys(self) -> tuple[str, ...]:
        return self._label_keys

    def metric_name(self, field_name: str) -> str:
        """Full metric name for a field, e.g. ``tempest_station_air_temperature``."""
        return "_".join(part for part in (self.namespace, self.subsystem, field_name) if part)

    def initialize(self, field_names: Iterable[str], label_keys: Iterable[str]) -> None:
        """Create one series per field, all sharing the given label keys.

        Args:
            field_names: Numeric base field names to export.
            label_keys: Label keys attached to every series.

        Raises:
            RegistryStateError: If the registry was already initialized.
            RegistryConfigError: If no field names are given.
            ValueError: If the names collide on the Prometheus registry; the
                registry stays uninitialized.
        """
        if self._initialized:
            raise RegistryStateError("metric registry is already initialized")

        names = tuple(dict.fromkeys(field_names))
        if not names:
            raise RegistryConfigError("metric registry needs at least one field")

        with self._lock:
            self._field_names = names
            self._label_keys = tuple(label_keys)
            self._series = {name: None for name in names}

        # describe() needs the shape; roll it back if the names collide
        try:
            self.registry.register(self)
        except ValueError:
            with self._lock:
                self._field_names = ()
                self._label_keys = ()
                self._series = {}
            raise
        self._initialized = True

        logger.info(
            "Registered %d station metrics with labels: %s",
            len(names),
            ", ".join(self._label_keys),
        )

    def apply(self, observation: Observation, labels: Mapping[str, str]) -> None:
        """Set every series from an observation and a label set.

        Fields the observation does not carry and text values are skipped; the
        series keeps its previous state. Label values fully replace the
        previous ones.

        Raises:
            RegistryStateError: If called before :meth:`initialize`.
        """
        if not self._initialized:
            raise RegistryStateError("metric registry must be initialized before apply")

        label_values = tuple(str(labels.get(key, "")) for key in self._label_keys)
        updated = 0
        for name in self._field_names:
            value = getattr(observation, name, None)
            if value is None:
                logger.debug("Observation has no field %s, keeping previous value", name)
                continue
            if isinstance(value, str):
                continue
            series = Series(value=float(value), labels=label_values)
            with self._lock:
                self._series[name] = series
            updated += 1

        logger.debug("Applied %d of %d station metrics", updated, len(self._field_names))

    def snapshot(self) -> dict[str, Series | None]:
        """Copy of the current series, keyed by field name. Unset series map to None."""
        with self._lock:
            return dict(self._series)

    def describe(self) -> Iterator[GaugeMetricFamily]:
        for name in self._field_names:
            yield self._family(name)

    def collect(self) -> Iterator[GaugeMetricFamily]:
        for name, series in self.snapshot().items():
            family = self._family(name)
            if series is not None:
                family.add_metric(list(series.labels), series.value)
            yield family

    def _family(self, field_name: str) -> GaugeMetricFamily:
        return GaugeMetricFamily(
            self.metric_name(field_name),
            f"Tempest station observation field {field_name}",
            labels=list(self._label_keys),
        )
