"""Exception types raised by the monitoring engine."""


class MonitorError(Exception):
    """Base class for all monitor errors."""


class ConfigError(MonitorError):
    """Configuration file or value is invalid."""


class SamplingError(MonitorError):
    """No system data source could be read."""


class SignalDeliveryError(MonitorError):
    """A termination signal could not be delivered to a process."""

    def __init__(self, pid: int, signal_name: str, cause: Exception):
        self.pid = pid
        self.signal_name = signal_name
        self.cause = cause
        super().__init__(f"{signal_name} to PID {pid} failed: {cause}")


class RemediationSkip(MonitorError):
    """A remediation step declined to act. Carries the skip reason."""

    reason = "skipped"

    def __init__(self, detail: str = ""):
        self.detail = detail
        super().__init__(f"{self.reason}: {detail}" if detail else self.reason)


class CandidateNotFound(RemediationSkip):
    reason = "no candidate"


class ProcessExited(RemediationSkip):
    reason = "process exited"


class BelowUsageFloor(RemediationSkip):
    reason = "usage below floor"


class Protected(RemediationSkip):
    reason = "protected"


class CoolingDown(RemediationSkip):
    reason = "cooldown active"
