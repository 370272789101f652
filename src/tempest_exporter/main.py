"""Main entry point for running the Tempest station exporter."""

import argparse
import asyncio
import logging
import sys
from typing import NoReturn

from prometheus_client import generate_latest
from pydantic import ValidationError

from . import __version__
from .config import Settings, env_var_name, get_settings
from .exceptions import ConfigurationError, FetchError
from .exporter import StationExporter
from .metrics import MetricRegistry
from .server import METRICS_PATH, bind_socket, create_metrics_server

logger = logging.getLogger(__name__)


def setup_logging(level: str = "INFO") -> None:
    """Configure logging for the application."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )
    # Reduce noise from httpx
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def load_settings() -> Settings:
    """Load settings, turning validation failures into a readable error.

    Raises:
        ConfigurationError: If a required variable is missing or invalid.
    """
    try:
        return get_settings()
    except ValidationError as e:
        problems = [
            f"{env_var_name(e.title, error['loc'])} ({error['msg']})" for error in e.errors()
        ]
        raise ConfigurationError("please set " + ", ".join(problems)) from e


async def run_exporter(
    exporter: StationExporter,
    shutdown_event: asyncio.Event,
    interval: float,
) -> None:
    """Refresh the registry every ``interval`` seconds until shutdown.

    A cycle starts only after the previous one and its wait have finished.

    Raises:
        FetchError: When the exporter is configured to exit on fetch errors.
    """
    while not shutdown_event.is_set():
        try:
            await asyncio.wait_for(shutdown_event.wait(), timeout=interval)
            # If we get here, shutdown was signaled
            break
        except asyncio.TimeoutError:
            pass

        try:
            await exporter.run_once()
        except FetchError:
            raise
        except Exception as e:
            logger.error("Error in refresh cycle: %s", e, exc_info=True)


async def run(settings: Settings, port: int | None = None, once: bool = False) -> None:
    """Start the exporter and serve metrics until shutdown.

    Args:
        settings: Application settings.
        port: Listen port, overrides the configured one.
        once: Fetch once, print the exposition to stdout and return.

    Raises:
        OSError: If the listen address cannot be bound.
        FetchError: If the startup fetch fails.
    """
    registry = MetricRegistry(
        namespace=settings.metrics.namespace,
        subsystem=settings.metrics.subsystem,
    )
    exporter = StationExporter(settings.weatherflow, registry)

    if once:
        try:
            await exporter.start()
            sys.stdout.write(generate_latest(registry.registry).decode("utf-8"))
        finally:
            await exporter.close()
        return

    sock = bind_socket(settings.weatherflow.listen_addr, port or settings.weatherflow.listen_port)
    try:
        await exporter.start()

        # The server handles SIGINT/SIGTERM; the refresh loop stops with it
        server = create_metrics_server(registry.registry)
        shutdown_event = asyncio.Event()
        serve_task = asyncio.create_task(server.serve(sockets=[sock]), name="metrics-server")
        serve_task.add_done_callback(lambda _: shutdown_event.set())
        logger.info("Serving metrics on %s:%d%s", *sock.getsockname()[:2], METRICS_PATH)

        try:
            await run_exporter(
                exporter,
                shutdown_event,
                settings.weatherflow.refresh_interval_seconds,
            )
        finally:
            server.should_exit = True
            await serve_task
    finally:
        sock.close()
        await exporter.close()


def parse_args() -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Tempest Weather Station - Prometheus Exporter",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Serve metrics on the configured port
  tempest-exporter

  # Fetch once and print the metrics (useful for testing)
  tempest-exporter --once

  # Serve on another port with debug logging
  tempest-exporter --port 9100 --log-level DEBUG

Environment Variables:
  WEATHERFLOW_API_TOKEN        WeatherFlow API token (required)
  WEATHERFLOW_STATION_ID       Station to export (required)
  WEATHERFLOW_LISTEN_PORT      Port serving /metrics (default: 6969)
  WEATHERFLOW_REFRESH_INTERVAL_SECONDS  Seconds between fetches (default: 15)
  WEATHERFLOW_EXIT_ON_FETCH_ERROR       Exit when a refresh fails (default: false)
  LOG_LEVEL                    Logging level (default: INFO)
        """,
    )

    parser.add_argument(
        "--once",
        action="store_true",
        help="Fetch one observation, print the metrics and exit",
    )

    parser.add_argument(
        "--port",
        type=int,
        help="Port serving /metrics (default: WEATHERFLOW_LISTEN_PORT)",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: LOG_LEVEL or INFO)",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    return parser.parse_args()


def main() -> NoReturn:
    """Main entry point."""
    args = parse_args()

    try:
        settings = load_settings()
    except ConfigurationError as e:
        setup_logging(args.log_level or "INFO")
        logger.error("%s", e)
        sys.exit(1)

    setup_logging(args.log_level or settings.log_level)
    logger.info("Tempest exporter starting for station %s", settings.weatherflow.station_id)

    try:
        asyncio.run(run(settings, port=args.port, once=args.once))
    except FetchError as e:
        logger.error("%s", e)
        sys.exit(1)
    except OSError as e:
        logger.error("Cannot serve metrics: %s", e)
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")

    logger.info("Shutdown complete")
    sys.exit(0)


if __name__ == "__main__":
    main()
