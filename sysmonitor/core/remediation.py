"""Automated remediation of resource alerts by terminating a process."""
import logging
import os
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, FrozenSet, Iterable, Optional, Union

from ..collectors.process_table import ProcessTable
from ..collectors.system_models import MetricSnapshot, ProcessInfo
from ..config import RemediationConfig
from .alerts import Alert, AlertKind
from .cooldown import CooldownTracker
from .errors import (
    BelowUsageFloor,
    CandidateNotFound,
    CoolingDown,
    ProcessExited,
    Protected,
    RemediationSkip,
    SignalDeliveryError,
)
from .protection import ProtectedProcessRegistry

logger = logging.getLogger(__name__)

# Short-lived commands that show up at the top of a CPU listing while it is taken.
DEFAULT_HELPER_COMMANDS = frozenset({"ps", "top", "awk", "sort", "head"})


class TerminationMethod(Enum):
    GRACEFUL = "graceful"
    FORCED = "forced"


@dataclass(frozen=True)
class Skipped:
    """Remediation was considered but not carried out."""
    reason: str
    kind: AlertKind
    pid: Optional[int] = None
    name: str = ""


@dataclass(frozen=True)
class Terminated:
    """The candidate process was terminated."""
    pid: int
    method: TerminationMethod
    kind: AlertKind
    name: str = ""


@dataclass(frozen=True)
class Failed:
    """Signal delivery failed; the process may still be running."""
    reason: str
    kind: AlertKind
    pid: Optional[int] = None
    name: str = ""


RemediationOutcome = Union[Skipped, Terminated, Failed]


class RemediationController:
    """Decides whether to terminate a process for an alert and does so safely.

    The protocol for one alert is: select a candidate, verify it still
    exists, verify its usage is above the floor, verify it is not protected,
    verify it is not cooling down, then send SIGTERM, wait the grace period
    and send SIGKILL if it survived. Every step that declines raises a
    RemediationSkip which becomes a Skipped outcome.

    The grace wait is deliberately blocking: the escalation decision needs
    the post-signal process state.
    """

    def __init__(self,
                 process_table: Optional[ProcessTable] = None,
                 sleep: Callable[[float], object] = time.sleep,
                 clock: Callable[[], float] = time.monotonic,
                 own_pid: Optional[int] = None,
                 helper_commands: Iterable[str] = DEFAULT_HELPER_COMMANDS):
        self.process_table = process_table or ProcessTable()
        self.sleep = sleep
        self.clock = clock
        self.own_pid = os.getpid() if own_pid is None else own_pid
        self.helper_commands: FrozenSet[str] = frozenset(helper_commands)

    @staticmethod
    def kill_threshold(kind: AlertKind, config: RemediationConfig) -> Optional[float]:
        """Kill threshold for an alert kind, None if the kind is never remediated."""
        if kind is AlertKind.CPU:
            return config.cpu_kill_threshold
        if kind is AlertKind.MEMORY:
            return config.memory_kill_threshold
        return None

    def should_remediate(self, alert: Alert, config: RemediationConfig) -> bool:
        """True if the alert enters the remediation protocol."""
        if not config.auto_kill_enabled:
            return False
        threshold = self.kill_threshold(alert.kind, config)
        return threshold is not None and alert.observed_value >= threshold

    def remediate(self,
                  alert: Alert,
                  snapshot: MetricSnapshot,
                  config: RemediationConfig,
                  registry: ProtectedProcessRegistry,
                  tracker: CooldownTracker) -> RemediationOutcome:
        """Run the remediation protocol for one alert."""
        if not self.should_remediate(alert, config):
            return Skipped("not eligible", alert.kind)

        candidate: Optional[ProcessInfo] = None
        name = ""
        try:
            candidate = self._select_candidate(alert.kind, snapshot)
            name = candidate.name
            self._verify_existence(candidate)
            self._verify_usage_floor(alert.kind, candidate, config)
            name = self._verify_not_protected(candidate, registry)
            self._verify_not_cooling_down(candidate, tracker)
            method = self._terminate(candidate, config.grace_period)
        except RemediationSkip as skip:
            logger.debug("Remediation for %s skipped: %s", alert.kind.value, skip)
            pid = candidate.pid if candidate else None
            return Skipped(skip.reason, alert.kind, pid, name)
        except SignalDeliveryError as e:
            logger.debug("Remediation for %s failed: %s", alert.kind.value, e)
            return Failed(str(e), alert.kind, candidate.pid, name)

        # One cooldown slot per remediation, whichever signal finished it.
        tracker.record(candidate.pid, self.clock())
        return Terminated(candidate.pid, method, alert.kind, name)

    def _select_candidate(self, kind: AlertKind, snapshot: MetricSnapshot) -> ProcessInfo:
        """Highest consumer for the alert's resource, excluding ourselves."""
        if kind is AlertKind.CPU:
            ranked = snapshot.top_processes
        elif kind is AlertKind.MEMORY:
            ranked = snapshot.top_memory_processes
        else:
            raise CandidateNotFound(f"{kind.value} alerts have no process candidate")

        for proc in ranked:
            if proc.pid == self.own_pid:
                continue
            if kind is AlertKind.CPU and proc.name in self.helper_commands:
                continue
            return proc
        raise CandidateNotFound(f"no process to target for {kind.value}")

    def _verify_existence(self, candidate: ProcessInfo):
        if not self.process_table.exists(candidate.pid, candidate.started_at):
            raise ProcessExited(f"PID {candidate.pid} ({candidate.name})")

    def _verify_usage_floor(self, kind: AlertKind, candidate: ProcessInfo,
                            config: RemediationConfig):
        if kind is AlertKind.CPU:
            usage, floor = candidate.cpu_percent, config.cpu_usage_floor
        else:
            usage, floor = candidate.memory_percent, config.memory_usage_floor
        if not usage > floor:
            raise BelowUsageFloor(f"PID {candidate.pid} at {usage:g}%, floor {floor:g}%")

    def _verify_not_protected(self, candidate: ProcessInfo,
                              registry: ProtectedProcessRegistry) -> str:
        """Check the live name against the registry and return it."""
        name = self.process_table.name(candidate.pid)
        if name is None:
            raise ProcessExited(f"PID {candidate.pid} name no longer resolvable")
        if registry.is_protected(name):
            raise Protected(f"PID {candidate.pid} ({name})")
        return name

    def _verify_not_cooling_down(self, candidate: ProcessInfo, tracker: CooldownTracker):
        if tracker.is_cooling_down(candidate.pid, self.clock()):
            raise CoolingDown(f"PID {candidate.pid}")

    def _terminate(self, candidate: ProcessInfo, grace_period: float) -> TerminationMethod:
        """Graceful signal, grace wait, forced signal if the process survived."""
        pid = candidate.pid
        self.process_table.terminate(pid)
        self.sleep(grace_period)
        if not self.process_table.exists(pid, candidate.started_at):
            return TerminationMethod.GRACEFUL
        try:
            self.process_table.kill(pid)
        except ProcessExited:
            # Exited between the existence check and SIGKILL.
            return TerminationMethod.GRACEFUL
        return TerminationMethod.FORCED
