"""Alert data model for system monitoring."""
from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class AlertKind(Enum):
    """Monitored resource. Declaration order is the evaluation order."""
    CPU = "CPU"
    MEMORY = "MEMORY"
    DISK = "DISK"


@dataclass(frozen=True)
class Alert:
    """A resource reading that exceeded its alert threshold."""
    kind: AlertKind
    observed_value: float
    threshold: float
    timestamp: datetime

    @property
    def message(self) -> str:
        """Human readable one-line description."""
        return (f"{self.kind.value} usage high: {self.observed_value:g}% "
                f"(threshold {self.threshold:g}%)")
