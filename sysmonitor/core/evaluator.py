"""Threshold evaluation of metric snapshots."""
from typing import List

from ..collectors.system_models import MetricSnapshot
from ..config import ThresholdConfig
from .alerts import Alert, AlertKind


class ThresholdEvaluator:
    """Compares a snapshot against the configured alert thresholds."""

    def evaluate(self, snapshot: MetricSnapshot, thresholds: ThresholdConfig) -> List[Alert]:
        """Return alerts in CPU, MEMORY, DISK order for values strictly above threshold."""
        readings = (
            (AlertKind.CPU, snapshot.cpu_percent, thresholds.cpu),
            (AlertKind.MEMORY, snapshot.memory_percent, thresholds.memory),
            (AlertKind.DISK, snapshot.disk_percent, thresholds.disk),
        )
        return [
            Alert(kind, value, threshold, snapshot.timestamp)
            for kind, value, threshold in readings
            if value > threshold
        ]
