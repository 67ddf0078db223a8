"""System data models for the system collector."""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple


@dataclass(frozen=True)
class ProcessInfo:
    """One process as seen at sample time.

    The pid identifies the process only at sample time; the OS reuses pids,
    so ``started_at`` (process create time) is kept to detect reuse.
    """
    pid: int
    user: str
    name: str
    cpu_percent: float
    memory_percent: float
    started_at: Optional[float] = None


@dataclass(frozen=True)
class MetricSnapshot:
    """Immutable system state captured once per tick."""
    timestamp: datetime
    cpu_percent: int
    memory_percent: float
    disk_percent: int
    network_rx_kbps: int
    network_tx_kbps: int
    top_processes: Tuple[ProcessInfo, ...] = ()
    top_memory_processes: Tuple[ProcessInfo, ...] = ()

    @property
    def top_process(self) -> Optional[ProcessInfo]:
        """Highest-CPU process, if any was sampled."""
        return self.top_processes[0] if self.top_processes else None
