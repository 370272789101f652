"""HTTP server exposing the metric registry for Prometheus scrapes."""

import logging
import socket

import uvicorn
from fastapi import FastAPI, Response
from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry, generate_latest

logger = logging.getLogger(__name__)

METRICS_PATH = "/metrics"


def create_app(registry: CollectorRegistry) -> FastAPI:
    """Build the app serving ``GET /metrics``; any other path answers 404."""
    app = FastAPI(title="tempest-exporter", docs_url=None, redoc_url=None, openapi_url=None)

    # Sync endpoint: rendered in the threadpool, concurrently with refreshes
    @app.get(METRICS_PATH)
    def metrics() -> Response:
        return Response(content=generate_latest(registry), media_type=CONTENT_TYPE_LATEST)

    return app


def bind_socket(host: str, port: int) -> socket.socket:
    """Bind the listen socket up front so a busy port fails before serving.

    Raises:
        OSError: If the address cannot be bound.
    """
    family = socket.AF_INET6 if ":" in host else socket.AF_INET
    sock = socket.socket(family, socket.SOCK_STREAM)
    try:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        sock.bind((host, port))
    except OSError:
        sock.close()
        raise
    sock.set_inheritable(True)
    return sock


def create_metrics_server(registry: CollectorRegistry) -> uvicorn.Server:
    """Uvicorn server for the metrics app, logging through the root logger.

    Requests are logged on ``uvicorn.access``.
    """
    config = uvicorn.Config(
        create_app(registry),
        log_config=None,
        access_log=True,
        lifespan="off",
    )
    return uvicorn.Server(config)
