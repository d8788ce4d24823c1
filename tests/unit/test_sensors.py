"""Unit tests for status update sensors."""

import pytest
from unittest.mock import Mock
from prometheus_client import CollectorRegistry
from kwork.sensors import PrometheusMonitor, SensorDelegate, StatusSensor


@pytest.fixture
def registry():
    return CollectorRegistry()


@pytest.fixture
def monitor(registry):
    return PrometheusMonitor(registry=registry)


def sample(registry, name, **labels):
    return registry.get_sample_value(name, labels)


class TestPrometheusMonitor:
    def test_written(self, registry, monitor):
        state = monitor.on_status_update_start("cluster1", "work1")
        monitor.on_status_update_complete("cluster1", "work1", state, True, True)
        assert sample(
            registry, "kwork_status_updates_total",
            namespace="cluster1", work_name="work1", result="written",
        ) == 1.0
        assert sample(
            registry, "kwork_status_update_duration_seconds_count",
            namespace="cluster1", result="written",
        ) == 1.0

    def test_unchanged(self, registry, monitor):
        monitor.on_status_update_complete("cluster1", "work1", None, False, True)
        assert sample(
            registry, "kwork_status_updates_total",
            namespace="cluster1", work_name="work1", result="unchanged",
        ) == 1.0

    def test_failure(self, registry, monitor):
        monitor.on_status_update_complete(
            "cluster1", "work1", None, False, False, RuntimeError("boom")
        )
        assert sample(
            registry, "kwork_status_update_errors_total",
            namespace="cluster1", work_name="work1", error_type="RuntimeError",
        ) == 1.0

    def test_conflicts(self, registry, monitor):
        monitor.on_status_update_conflict("cluster1", "work1", 1)
        monitor.on_status_update_conflict("cluster1", "work1", 2)
        assert sample(
            registry, "kwork_status_update_conflicts_total",
            namespace="cluster1", work_name="work1",
        ) == 2.0


class TestSensorDelegate:
    def test_fan_out_with_per_sensor_state(self):
        first, second = Mock(spec=StatusSensor), Mock(spec=StatusSensor)
        first.on_status_update_start.return_value = {"n": 1}
        second.on_status_update_start.return_value = None
        delegate = SensorDelegate()
        delegate.add(first)
        delegate.add(second)

        state = delegate.on_status_update_start("cluster1", "work1")
        delegate.on_status_update_complete("cluster1", "work1", state, True, True)

        first.on_status_update_complete.assert_called_once_with(
            "cluster1", "work1", {"n": 1}, True, True, None
        )
        second.on_status_update_complete.assert_called_once_with(
            "cluster1", "work1", None, True, True, None
        )

    def test_failing_sensor_is_isolated(self):
        broken, healthy = Mock(spec=StatusSensor), Mock(spec=StatusSensor)
        broken.on_status_update_conflict.side_effect = RuntimeError("broken")
        delegate = SensorDelegate()
        delegate.add(broken)
        delegate.add(healthy)

        delegate.on_status_update_conflict("cluster1", "work1", 1)
        healthy.on_status_update_conflict.assert_called_once_with("cluster1", "work1", 1)

    def test_empty(self):
        delegate = SensorDelegate()
        assert delegate.on_status_update_start("cluster1", "work1") is None
        delegate.remove(StatusSensor())
        delegate.clear()
