"""Prometheus monitoring backend for status updates.

PrometheusMonitor turns status update lifecycle events into Prometheus
metrics: how long update cycles take, how many of them wrote versus found
nothing to change, how often writes conflicted, and which errors ended them.
"""

from typing import Dict, Optional, Any
import time
import logging

from prometheus_client import Counter, Histogram, REGISTRY, CollectorRegistry

from kwork.sensors.base import StatusSensor

logger = logging.getLogger(__name__)

RESULT_WRITTEN = "written"
RESULT_UNCHANGED = "unchanged"
RESULT_FAILURE = "failure"


class PrometheusMonitor(StatusSensor):
    """Prometheus metrics monitor for work status updates.

    Example:
        monitor = PrometheusMonitor()

        state = monitor.on_status_update_start("cluster1", "work1")
        monitor.on_status_update_complete("cluster1", "work1", state, True, True)
    """

    def __init__(self, registry: CollectorRegistry = REGISTRY):
        super().__init__()

        self.status_update_duration = Histogram(
            'kwork_status_update_duration_seconds',
            'Time spent in a fetch, mutate, compare and write cycle',
            labelnames=['namespace', 'result'],
            buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.5, 5.0, 10.0],
            registry=registry,
        )

        self.status_updates = Counter(
            'kwork_status_updates_total',
            'Total number of status update cycles',
            labelnames=['namespace', 'work_name', 'result'],
            registry=registry,
        )

        self.status_update_conflicts = Counter(
            'kwork_status_update_conflicts_total',
            'Total number of status writes rejected for a stale resourceVersion',
            labelnames=['namespace', 'work_name'],
            registry=registry,
        )

        self.status_update_errors = Counter(
            'kwork_status_update_errors_total',
            'Total number of failed status update cycles',
            labelnames=['namespace', 'work_name', 'error_type'],
            registry=registry,
        )

        logger.info("PrometheusMonitor initialized with all metrics")

    def on_status_update_start(
        self,
        namespace: str,
        name: str,
    ) -> Optional[Dict[str, Any]]:
        return {'start_time': time.time()}

    def on_status_update_complete(
        self,
        namespace: str,
        name: str,
        state: Optional[Dict[str, Any]],
        changed: bool,
        success: bool,
        error: Optional[Exception] = None,
    ) -> None:
        """Record update duration and result."""
        if not success:
            result = RESULT_FAILURE
        elif changed:
            result = RESULT_WRITTEN
        else:
            result = RESULT_UNCHANGED

        if state:
            duration = time.time() - state['start_time']
            self.status_update_duration.labels(
                namespace=namespace,
                result=result,
            ).observe(duration)

        self.status_updates.labels(
            namespace=namespace,
            work_name=name,
            result=result,
        ).inc()

        if error:
            self.status_update_errors.labels(
                namespace=namespace,
                work_name=name,
                error_type=error.__class__.__name__,
            ).inc()

    def on_status_update_conflict(
        self,
        namespace: str,
        name: str,
        attempt: int,
    ) -> None:
        self.status_update_conflicts.labels(
            namespace=namespace,
            work_name=name,
        ).inc()
