"""Reporter capability shared by the dashboard and daemon sinks."""
import logging
from abc import ABC, abstractmethod
from typing import Iterable, List, Sequence

logger = logging.getLogger(__name__)


class Reporter(ABC):
    """Consumes the result of every monitoring tick.

    Subclasses implement :meth:`accept`; :meth:`start` and :meth:`close`
    bracket the loop's lifetime and default to no-ops.
    """

    def start(self):
        pass

    @abstractmethod
    def accept(self, snapshot, alerts: Sequence, actions: Sequence):
        """Handle one tick's snapshot, alerts and remediation outcomes."""

    def close(self):
        pass


class CompositeReporter(Reporter):
    """Fans every call out to several reporters, in order.

    A reporter that raises is logged and skipped; the others still run.
    """

    def __init__(self, reporters: Iterable[Reporter]):
        self.reporters: List[Reporter] = list(reporters)

    def start(self):
        for reporter in self.reporters:
            self._call(reporter, "start")

    def accept(self, snapshot, alerts, actions):
        for reporter in self.reporters:
            self._call(reporter, "accept", snapshot, alerts, actions)

    def close(self):
        for reporter in reversed(self.reporters):
            self._call(reporter, "close")

    @staticmethod
    def _call(reporter: Reporter, method: str, *args):
        try:
            getattr(reporter, method)(*args)
        except Exception:
            logger.exception("%s.%s failed", type(reporter).__name__, method)
