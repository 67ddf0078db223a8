"""Alert threshold configuration data structure."""
from dataclasses import dataclass

from ..core.errors import ConfigError


@dataclass(frozen=True)
class ThresholdConfig:
    """Usage percentages above which an alert is raised."""
    cpu: float = 80.0
    memory: float = 80.0
    disk: float = 90.0

    def __post_init__(self):
        """Reject values outside the percent range."""
        for name in ("cpu", "memory", "disk"):
            value = getattr(self, name)
            if not 0 <= value <= 100:
                raise ConfigError(f"{name} alert threshold must be within 0-100, got {value}")
