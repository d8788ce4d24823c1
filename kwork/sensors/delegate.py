"""Sensor delegation for fan-out pattern.

SensorDelegate routes sensor events to multiple monitoring backends. Each
backend receives the same events and keeps independent state. A failing
backend is logged and never breaks the status update it observes.
"""

from typing import Set, Dict, Optional, Any
import logging

from kwork.sensors.base import StatusSensor

logger = logging.getLogger(__name__)


class SensorDelegate(StatusSensor):
    """Delegate sensor that fans out events to multiple backends.

    Example:
        delegate = SensorDelegate()
        delegate.add(LoggingSensor())
        delegate.add(PrometheusMonitor())

        state = delegate.on_status_update_start("cluster1", "work1")
        delegate.on_status_update_complete("cluster1", "work1", state, True, True)
    """

    def __init__(self) -> None:
        self._sensors: Set[StatusSensor] = set()

    def add(self, sensor: StatusSensor) -> None:
        logger.info(f"Adding sensor: {sensor.__class__.__name__}")
        self._sensors.add(sensor)

    def remove(self, sensor: StatusSensor) -> None:
        logger.info(f"Removing sensor: {sensor.__class__.__name__}")
        self._sensors.discard(sensor)

    def clear(self) -> None:
        logger.info(f"Clearing {len(self._sensors)} sensors")
        self._sensors.clear()

    def on_status_update_start(
        self,
        namespace: str,
        name: str,
    ) -> Optional[Dict[StatusSensor, Any]]:
        """Delegate status_update_start to all sensors.

        Returns:
            Dict mapping each sensor to its returned state, or None if no sensors
        """
        if not self._sensors:
            return None

        states = {}
        for sensor in self._sensors:
            try:
                state = sensor.on_status_update_start(namespace, name)
                if state is not None:
                    states[sensor] = state
            except Exception as e:
                logger.error(
                    f"Error in {sensor.__class__.__name__}.on_status_update_start: {e}",
                    exc_info=True,
                )

        return states if states else None

    def on_status_update_complete(
        self,
        namespace: str,
        name: str,
        state: Optional[Dict[StatusSensor, Any]],
        changed: bool,
        success: bool,
        error: Optional[Exception] = None,
    ) -> None:
        """Delegate status_update_complete to all sensors with their specific state."""
        for sensor in self._sensors:
            try:
                sensor_state = state.get(sensor) if state else None
                sensor.on_status_update_complete(
                    namespace, name, sensor_state, changed, success, error
                )
            except Exception as e:
                logger.error(
                    f"Error in {sensor.__class__.__name__}.on_status_update_complete: {e}",
                    exc_info=True,
                )

    def on_status_update_conflict(
        self,
        namespace: str,
        name: str,
        attempt: int,
    ) -> None:
        for sensor in self._sensors:
            try:
                sensor.on_status_update_conflict(namespace, name, attempt)
            except Exception as e:
                logger.error(
                    f"Error in {sensor.__class__.__name__}.on_status_update_conflict: {e}",
                    exc_info=True,
                )
