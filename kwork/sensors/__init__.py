"""Status update sensor framework.

Non-invasive instrumentation of status update cycles through hooks.

Key components:
- StatusSensor: Base class defining the status update hooks
- SensorDelegate: Fan-out for routing events to multiple sensor backends
- PrometheusMonitor: Prometheus metrics exporter

Usage:
    from kwork.sensors import SensorDelegate, PrometheusMonitor

    delegate = SensorDelegate()
    delegate.add(PrometheusMonitor())
    updater = StatusUpdater(store, sensor=delegate)
"""

from kwork.sensors.base import StatusSensor
from kwork.sensors.delegate import SensorDelegate
from kwork.sensors.prometheus import PrometheusMonitor
from kwork.sensors.server import init_metrics_server

__all__ = [
    'StatusSensor',
    'SensorDelegate',
    'PrometheusMonitor',
    'init_metrics_server',
]
