"""System metrics collector for CPU, memory, disk, network and processes."""
import logging
import time
from datetime import datetime
from typing import Callable, List, Optional, Tuple

import psutil

from ..config import Config
from ..core.errors import SamplingError
from .network_collector import NetworkCollector
from .system_models import MetricSnapshot, ProcessInfo

logger = logging.getLogger(__name__)

PROCESS_ATTRS = ["pid", "name", "username", "cpu_percent", "memory_percent", "create_time"]


class MetricSampler:
    """Reads instantaneous system state into a MetricSnapshot.

    A metric whose source cannot be read is reported as zero; only when
    CPU, memory and disk all fail does sampling raise SamplingError.
    """

    def __init__(self, config: Config, waiter: Callable[[float], object] = time.sleep):
        """Initialize the sampler and prime the CPU counters."""
        self.config = config
        self.network = NetworkCollector(config, waiter)
        self._prime_cpu_counters()

    def sample(self) -> MetricSnapshot:
        """Take one snapshot. Blocks for the network settle interval."""
        timestamp = datetime.now()
        cpu, cpu_ok = self._read(self._cpu_percent, "CPU")
        memory, memory_ok = self._read(self._memory_percent, "memory")
        disk, disk_ok = self._read(self._disk_percent, "disk")
        if not (cpu_ok or memory_ok or disk_ok):
            raise SamplingError("CPU, memory and disk usage are all unreadable")

        rx_kbps, tx_kbps = self.network.measure()
        by_cpu, by_memory = self._top_processes()

        return MetricSnapshot(
            timestamp=timestamp,
            cpu_percent=int(round(cpu)),
            memory_percent=round(memory, 1),
            disk_percent=int(round(disk)),
            network_rx_kbps=rx_kbps,
            network_tx_kbps=tx_kbps,
            top_processes=tuple(by_cpu),
            top_memory_processes=tuple(by_memory),
        )

    def check_sources(self):
        """Raise SamplingError if none of the CPU, memory or disk sources is usable."""
        readers = [(self._cpu_percent, "CPU"), (self._memory_percent, "memory"),
                   (self._disk_percent, "disk")]
        if not any(self._read(reader, label)[1] for reader, label in readers):
            raise SamplingError("no usable data source (CPU, memory and disk all failed)")

    def _read(self, reader: Callable[[], float], label: str) -> Tuple[float, bool]:
        """Call one metric reader, degrading to zero on failure."""
        try:
            return float(reader()), True
        except (OSError, psutil.Error) as e:
            logger.warning("Cannot read %s usage, reporting 0: %s", label, e)
            return 0.0, False

    def _cpu_percent(self) -> float:
        """System-wide CPU usage since the previous call."""
        return psutil.cpu_percent(interval=None)

    def _memory_percent(self) -> float:
        """Used memory as a percentage of total."""
        return psutil.virtual_memory().percent

    def _disk_percent(self) -> float:
        """Usage of the filesystem holding the configured path."""
        return psutil.disk_usage(self.config.disk_path).percent

    def _prime_cpu_counters(self):
        """First cpu_percent calls return 0.0, so take a throwaway reading."""
        try:
            psutil.cpu_percent(interval=None)
        except (OSError, psutil.Error):
            pass
        try:
            for proc in psutil.process_iter():
                try:
                    proc.cpu_percent(None)
                except (psutil.NoSuchProcess, psutil.AccessDenied):
                    continue
        except (OSError, psutil.Error) as e:
            logger.warning("Cannot list processes: %s", e)

    def _top_processes(self) -> Tuple[List[ProcessInfo], List[ProcessInfo]]:
        """Return the top processes ordered by CPU and by memory."""
        processes: List[ProcessInfo] = []
        for proc in psutil.process_iter(PROCESS_ATTRS):
            info = self._process_info(proc)
            if info is not None:
                processes.append(info)

        limit = self.config.top_process_count
        by_cpu = sorted(processes, key=lambda p: p.cpu_percent, reverse=True)[:limit]
        by_memory = sorted(processes, key=lambda p: p.memory_percent, reverse=True)[:limit]
        return by_cpu, by_memory

    @staticmethod
    def _process_info(proc: psutil.Process) -> Optional[ProcessInfo]:
        """Build a ProcessInfo from a process_iter entry, None if unusable."""
        try:
            info = proc.info
        except (psutil.NoSuchProcess, psutil.AccessDenied):
            return None
        pid = info.get("pid")
        if not pid:
            return None
        return ProcessInfo(
            pid=int(pid),
            user=info.get("username") or "",
            name=info.get("name") or "",
            cpu_percent=float(info.get("cpu_percent") or 0.0),
            memory_percent=round(float(info.get("memory_percent") or 0.0), 1),
            started_at=info.get("create_time"),
        )
