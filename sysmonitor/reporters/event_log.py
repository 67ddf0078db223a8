"""Structured event log sink."""
import logging
from typing import Optional

from ..core.remediation import Failed, Skipped, Terminated
from ..logging_setup import ACTION, ALERT
from .base import Reporter


class EventLogReporter(Reporter):
    """Writes one log line per alert and per remediation outcome.

    Skipped remediations are logged at WARN and failures at ERROR, each
    with its reason, so every spike that was or was not acted upon can be
    audited from the log alone.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger("sysmonitor.events")

    def accept(self, snapshot, alerts, actions):
        self.logger.info(
            "CPU %d%% | MEM %.1f%% | DISK %d%% | RX %d KB/s | TX %d KB/s",
            snapshot.cpu_percent, snapshot.memory_percent, snapshot.disk_percent,
            snapshot.network_rx_kbps, snapshot.network_tx_kbps,
        )
        for alert in alerts:
            self.logger.log(ALERT, alert.message)
        for outcome in actions:
            self._log_outcome(outcome)

    def _log_outcome(self, outcome):
        target = _describe_target(outcome.pid, outcome.name)
        if isinstance(outcome, Terminated):
            self.logger.log(
                ACTION, "%s: terminated %s (%s)",
                outcome.kind.value, target, outcome.method.value,
            )
        elif isinstance(outcome, Skipped):
            self.logger.warning(
                "%s: remediation skipped for %s: %s",
                outcome.kind.value, target, outcome.reason,
            )
        elif isinstance(outcome, Failed):
            self.logger.error(
                "%s: remediation failed for %s: %s",
                outcome.kind.value, target, outcome.reason,
            )


def _describe_target(pid, name) -> str:
    if pid is None:
        return "no process"
    return f"PID={pid} ({name})" if name else f"PID={pid}"
