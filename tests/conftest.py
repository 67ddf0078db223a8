"""
Pytest configuration and shared fixtures for the test suite.
"""

import logging
from datetime import datetime
from typing import Dict, List, Optional

import pytest

from sysmonitor.collectors.system_models import MetricSnapshot, ProcessInfo
from sysmonitor.config import Config, RemediationConfig, ThresholdConfig
from sysmonitor.core.cooldown import CooldownTracker
from sysmonitor.core.errors import ProcessExited, SignalDeliveryError
from sysmonitor.core.protection import ProtectedProcessRegistry


class FakeProcessTable:
    """In-memory stand-in for the OS process table.

    ``survives_sigterm`` holds pids that ignore the graceful signal;
    ``deny`` holds pids whose signals fail with a permission error.
    """

    def __init__(self, processes: Optional[Dict[int, str]] = None):
        self.processes: Dict[int, str] = dict(processes or {})
        self.survives_sigterm = set()
        self.deny = set()
        self.signals: List[tuple] = []

    def exists(self, pid, started_at=None):
        return pid in self.processes

    def name(self, pid):
        return self.processes.get(pid)

    def terminate(self, pid):
        self._deliver(pid, "SIGTERM")
        if pid not in self.survives_sigterm:
            del self.processes[pid]

    def kill(self, pid):
        self._deliver(pid, "SIGKILL")
        del self.processes[pid]

    def _deliver(self, pid, signal_name):
        if pid not in self.processes:
            raise ProcessExited(f"PID {pid}")
        if pid in self.deny:
            raise SignalDeliveryError(pid, signal_name, PermissionError("Operation not permitted"))
        self.signals.append((signal_name, pid))


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


def make_process(pid=4242, name="stress", cpu=92.0, memory=5.0, user="alice"):
    return ProcessInfo(pid=pid, user=user, name=name, cpu_percent=cpu, memory_percent=memory)


def make_snapshot(cpu=10, memory=10.0, disk=10, processes=(), memory_processes=None,
                  rx=0, tx=0):
    processes = tuple(processes)
    if memory_processes is None:
        memory_processes = sorted(processes, key=lambda p: p.memory_percent, reverse=True)
    return MetricSnapshot(
        timestamp=datetime(2024, 5, 1, 12, 0, 0),
        cpu_percent=cpu,
        memory_percent=memory,
        disk_percent=disk,
        network_rx_kbps=rx,
        network_tx_kbps=tx,
        top_processes=processes,
        top_memory_processes=tuple(memory_processes),
    )


# ============================================================================
# Fixtures
# ============================================================================

@pytest.fixture
def thresholds() -> ThresholdConfig:
    return ThresholdConfig(cpu=80, memory=80, disk=90)


@pytest.fixture
def remediation_config() -> RemediationConfig:
    return RemediationConfig(
        cpu_kill_threshold=95,
        memory_kill_threshold=95,
        protected_processes=frozenset({"sshd", "systemd"}),
        cooldown_seconds=60,
        grace_period=2,
        auto_kill_enabled=True,
    )


@pytest.fixture
def config(thresholds, remediation_config) -> Config:
    return Config(interval=5, thresholds=thresholds, remediation=remediation_config,
                  network_settle=0)


@pytest.fixture
def registry(remediation_config) -> ProtectedProcessRegistry:
    return ProtectedProcessRegistry(remediation_config.protected_processes)


@pytest.fixture
def tracker() -> CooldownTracker:
    return CooldownTracker(60)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def process_table() -> FakeProcessTable:
    return FakeProcessTable()


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo setup_logging so caplog keeps seeing package records."""
    yield
    logger = logging.getLogger("sysmonitor")
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
