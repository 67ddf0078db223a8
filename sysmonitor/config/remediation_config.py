"""Automated remediation configuration data structure."""
import threading
from dataclasses import dataclass, field
from typing import FrozenSet

from ..core.errors import ConfigError

# Longest wait time.sleep and Event.wait accept; also rejects inf and nan.
MAX_WAIT = threading.TIMEOUT_MAX


@dataclass(frozen=True)
class RemediationConfig:
    """Kill thresholds, usage floors and safety settings for remediation."""
    cpu_kill_threshold: float = 95.0
    memory_kill_threshold: float = 95.0
    cpu_usage_floor: float = 50.0
    memory_usage_floor: float = 20.0
    protected_processes: FrozenSet[str] = field(default_factory=frozenset)
    cooldown_seconds: float = 60.0
    grace_period: float = 2.0
    auto_kill_enabled: bool = False

    def __post_init__(self):
        """Reject values the remediation protocol cannot work with."""
        for name in ("cpu_kill_threshold", "memory_kill_threshold",
                     "cpu_usage_floor", "memory_usage_floor"):
            value = getattr(self, name)
            if not 0 <= value <= 100:
                raise ConfigError(f"{name} must be within 0-100, got {value}")
        if self.cooldown_seconds <= 0:
            raise ConfigError(f"cooldown must be positive, got {self.cooldown_seconds}")
        if not 0 <= self.grace_period <= MAX_WAIT:
            raise ConfigError(
                f"grace period must be between 0 and {MAX_WAIT:g} seconds, got {self.grace_period}"
            )
