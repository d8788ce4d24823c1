"""HTTP server for exposing Prometheus metrics.

Serves /metrics with the built-in prometheus_client HTTP server from a
daemon thread so it never blocks the agent's event loop or its shutdown.
"""

import os
import logging
from threading import Thread
from prometheus_client import start_http_server

logger = logging.getLogger(__name__)

DEFAULT_METRICS_PORT = 8000


def start_metrics_server(port: int = DEFAULT_METRICS_PORT) -> None:
    try:
        start_http_server(port)
        logger.info(f"Prometheus metrics available at http://0.0.0.0:{port}/metrics")
    except OSError as e:
        logger.error(f"Failed to start metrics server on port {port}: {e}")
        raise


def init_metrics_server() -> Thread:
    """Start the metrics server on METRICS_PORT (default 8000) in a daemon thread."""
    port = int(os.environ.get('METRICS_PORT', DEFAULT_METRICS_PORT))
    thread = Thread(target=start_metrics_server, args=(port,), daemon=True)
    thread.start()
    logger.info(f"Metrics server initialization complete (port: {port})")
    return thread
