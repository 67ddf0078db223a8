"""Live access to the OS process table for remediation."""
from typing import Optional

import psutil

from ..core.errors import ProcessExited, SignalDeliveryError

# create_time values are floats rounded differently across psutil calls
START_TIME_TOLERANCE = 0.01


class ProcessTable:
    """Thin psutil wrapper used to re-check and signal processes.

    Every call goes back to the OS; nothing is cached between calls since
    the process table can change at any moment.
    """

    def exists(self, pid: int, started_at: Optional[float] = None) -> bool:
        """True if ``pid`` is alive and, when given, started at ``started_at``."""
        try:
            proc = psutil.Process(pid)
            if proc.status() == psutil.STATUS_ZOMBIE:
                return False
            if started_at is not None:
                return abs(proc.create_time() - started_at) <= START_TIME_TOLERANCE
            return True
        except psutil.NoSuchProcess:
            return False
        except psutil.AccessDenied:
            # Cannot inspect it, but it is there.
            return True

    def name(self, pid: int) -> Optional[str]:
        """Current command name for ``pid``, or None if it cannot be resolved."""
        try:
            return psutil.Process(pid).name()
        except (psutil.NoSuchProcess, psutil.AccessDenied):
            return None

    def terminate(self, pid: int):
        """Send the graceful termination signal (SIGTERM)."""
        self._signal(pid, "SIGTERM", forced=False)

    def kill(self, pid: int):
        """Send the forced termination signal (SIGKILL)."""
        self._signal(pid, "SIGKILL", forced=True)

    @staticmethod
    def _signal(pid: int, signal_name: str, forced: bool):
        """Deliver a signal, raising ProcessExited if the process is already gone."""
        try:
            proc = psutil.Process(pid)
            if forced:
                proc.kill()
            else:
                proc.terminate()
        except psutil.NoSuchProcess as e:
            raise ProcessExited(f"PID {pid} gone before {signal_name}") from e
        except (psutil.AccessDenied, psutil.Error, OSError) as e:
            raise SignalDeliveryError(pid, signal_name, e) from e
