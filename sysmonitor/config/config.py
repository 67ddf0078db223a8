"""Main configuration data structure."""
from dataclasses import dataclass, field
from typing import Tuple

from ..core.errors import ConfigError
from .remediation_config import MAX_WAIT, RemediationConfig
from .threshold_config import ThresholdConfig

DEFAULT_INTERFACES = ("eth", "ens", "enp", "eno", "wl")


@dataclass(frozen=True)
class Config:
    """Main configuration class.

    Loaded once at startup and read-only afterwards; changing it requires
    a restart.
    """
    interval: float = 5.0
    thresholds: ThresholdConfig = field(default_factory=ThresholdConfig)
    remediation: RemediationConfig = field(default_factory=RemediationConfig)
    top_process_count: int = 10
    disk_path: str = "/"
    network_interfaces: Tuple[str, ...] = DEFAULT_INTERFACES
    network_settle: float = 1.0
    log_file: str = "monitor.log"
    csv_file: str = "system_metrics.csv"

    def __post_init__(self):
        """Validate cross-field constraints."""
        if not 0 < self.interval <= MAX_WAIT:
            raise ConfigError(
                f"interval must be positive and at most {MAX_WAIT:g} seconds, got {self.interval}"
            )
        if self.top_process_count <= 0:
            raise ConfigError(f"top process count must be positive, got {self.top_process_count}")
        if not 0 <= self.network_settle <= MAX_WAIT:
            raise ConfigError(
                f"network settle time must be between 0 and {MAX_WAIT:g} seconds, "
                f"got {self.network_settle}"
            )
        if self.remediation.cpu_kill_threshold < self.thresholds.cpu:
            raise ConfigError(
                f"CPU kill threshold ({self.remediation.cpu_kill_threshold}) "
                f"is below the CPU alert threshold ({self.thresholds.cpu})"
            )
        if self.remediation.memory_kill_threshold < self.thresholds.memory:
            raise ConfigError(
                f"memory kill threshold ({self.remediation.memory_kill_threshold}) "
                f"is below the memory alert threshold ({self.thresholds.memory})"
            )
