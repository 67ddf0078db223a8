"""
Unit tests for threshold evaluation.
"""

from sysmonitor.config import ThresholdConfig
from sysmonitor.core.alerts import AlertKind
from sysmonitor.core.evaluator import ThresholdEvaluator

from conftest import make_snapshot


class TestThresholdEvaluator:
    """Test threshold evaluator."""

    def test_no_alerts_below_thresholds(self, thresholds):
        alerts = ThresholdEvaluator().evaluate(make_snapshot(cpu=50, memory=40.0, disk=30), thresholds)
        assert alerts == []

    def test_all_kinds_in_fixed_order(self, thresholds):
        snapshot = make_snapshot(cpu=99, memory=97.5, disk=95)
        alerts = ThresholdEvaluator().evaluate(snapshot, thresholds)

        assert [a.kind for a in alerts] == [AlertKind.CPU, AlertKind.MEMORY, AlertKind.DISK]
        assert [a.observed_value for a in alerts] == [99, 97.5, 95]
        assert [a.threshold for a in alerts] == [80, 80, 90]
        assert all(a.timestamp == snapshot.timestamp for a in alerts)

    def test_order_is_fixed_when_only_some_exceed(self, thresholds):
        alerts = ThresholdEvaluator().evaluate(make_snapshot(cpu=85, memory=10.0, disk=95), thresholds)
        assert [a.kind for a in alerts] == [AlertKind.CPU, AlertKind.DISK]

    def test_no_alert_exactly_at_threshold(self):
        thresholds = ThresholdConfig(cpu=80, memory=80.5, disk=90)
        alerts = ThresholdEvaluator().evaluate(make_snapshot(cpu=80, memory=80.5, disk=90), thresholds)
        assert alerts == []

    def test_just_above_threshold_alerts(self):
        thresholds = ThresholdConfig(cpu=80, memory=80.0, disk=90)
        alerts = ThresholdEvaluator().evaluate(make_snapshot(cpu=81, memory=80.1, disk=91), thresholds)
        assert len(alerts) == 3

    def test_alert_message(self, thresholds):
        alert = ThresholdEvaluator().evaluate(make_snapshot(cpu=85), thresholds)[0]
        assert alert.message == "CPU usage high: 85% (threshold 80%)"
