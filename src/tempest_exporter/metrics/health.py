"""Exporter self-monitoring metrics."""

import time

from prometheus_client import CollectorRegistry, Counter, Gauge


class ExporterHealth:
    """Refresh-loop health, exposed next to the station metrics.

    Fetch failures during refresh do not stop the exporter; they show up here
    instead.
    """

    def __init__(self, registry: CollectorRegistry, namespace: str = "tempest") -> None:
        self.refreshes = Counter(
            "refresh",
            "Refresh cycles attempted",
            namespace=namespace,
            subsystem="exporter",
            registry=registry,
        )
        self.failures = Counter(
            "refresh_failures",
            "Refresh cycles that failed to fetch or decode an observation",
            namespace=namespace,
            subsystem="exporter",
            registry=registry,
        )
        self.empty = Counter(
            "observations_empty",
            "Refresh cycles where the station returned no observation",
            namespace=namespace,
            subsystem="exporter",
            registry=registry,
        )
        self.last_success = Gauge(
            "last_refresh_success",
            "Whether the last refresh cycle succeeded (1) or failed (0)",
            namespace=namespace,
            subsystem="exporter",
            registry=registry,
        )
        self.last_success_timestamp = Gauge(
            "last_refresh_timestamp_seconds",
            "Unix time of the last successful refresh cycle",
            namespace=namespace,
            subsystem="exporter",
            registry=registry,
        )

    def record_success(self, empty: bool = False) -> None:
        self.refreshes.inc()
        if empty:
            self.empty.inc()
        self.last_success.set(1)
        self.last_success_timestamp.set(time.time())

    def record_failure(self) -> None:
        self.refreshes.inc()
        self.failures.inc()
        self.last_success.set(0)
