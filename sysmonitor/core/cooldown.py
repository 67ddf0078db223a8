"""Cooldown tracking for recently terminated processes."""
from dataclasses import dataclass
from typing import Dict, List


@dataclass(frozen=True)
class KillRecord:
    pid: int
    terminated_at: float


class CooldownTracker:
    """Remembers terminations so a pid is not targeted again too soon.

    Holds at most one record per pid. Records older than the window are
    pruned, so the tracker never reports a stale cooldown and never grows
    without bound.
    """

    def __init__(self, window: float):
        if window <= 0:
            raise ValueError(f"cooldown window must be positive, got {window}")
        self.window = window
        self._records: Dict[int, KillRecord] = {}

    def record(self, pid: int, now: float):
        """Record a termination of ``pid``, replacing any earlier record."""
        self._records[pid] = KillRecord(pid, now)

    def prune(self, now: float):
        """Drop every record whose window has elapsed."""
        expired = [pid for pid, rec in self._records.items()
                   if now - rec.terminated_at >= self.window]
        for pid in expired:
            del self._records[pid]

    def is_cooling_down(self, pid: int, now: float) -> bool:
        """True if ``pid`` was terminated less than one window ago."""
        self.prune(now)
        return pid in self._records

    def records(self) -> List[KillRecord]:
        return list(self._records.values())

    def __contains__(self, pid: int) -> bool:
        return pid in self._records

    def __len__(self) -> int:
        return len(self._records)
