"""Timer-driven monitoring loop tying sampling, evaluation and remediation together."""
import logging
import signal
import threading
from dataclasses import dataclass
from typing import List, Optional

from ..collectors.system_collector import MetricSampler
from ..collectors.system_models import MetricSnapshot
from ..config import Config
from ..reporters.base import Reporter
from .alerts import Alert
from .cooldown import CooldownTracker
from .evaluator import ThresholdEvaluator
from .protection import ProtectedProcessRegistry
from .remediation import RemediationController, RemediationOutcome

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TickResult:
    """Everything one tick produced, handed to the reporter."""
    snapshot: MetricSnapshot
    alerts: List[Alert]
    actions: List[RemediationOutcome]


class MonitorLoop:
    """Runs sample -> evaluate -> remediate -> report on a fixed interval.

    Ticks never overlap. The interval is measured from the end of a tick,
    so a slow tick delays the next one instead of overlapping it. A stop
    request is observed between ticks and during the interval wait, never
    in the middle of a remediation.
    """

    def __init__(self,
                 config: Config,
                 sampler: MetricSampler,
                 controller: RemediationController,
                 reporter: Reporter,
                 evaluator: Optional[ThresholdEvaluator] = None,
                 registry: Optional[ProtectedProcessRegistry] = None,
                 tracker: Optional[CooldownTracker] = None,
                 stop_event: Optional[threading.Event] = None):
        """Initialize the loop and the state it owns across ticks."""
        self.config = config
        self.sampler = sampler
        self.controller = controller
        self.reporter = reporter
        self.evaluator = evaluator or ThresholdEvaluator()
        self.registry = registry or ProtectedProcessRegistry(config.remediation.protected_processes)
        self.tracker = tracker or CooldownTracker(config.remediation.cooldown_seconds)
        self.stop_event = stop_event or threading.Event()

    def tick(self) -> TickResult:
        """Run one full tick and hand the result to the reporter."""
        snapshot = self.sampler.sample()
        alerts = self.evaluator.evaluate(snapshot, self.config.thresholds)

        actions: List[RemediationOutcome] = []
        for alert in alerts:
            if self.controller.should_remediate(alert, self.config.remediation):
                actions.append(self.controller.remediate(
                    alert, snapshot, self.config.remediation, self.registry, self.tracker
                ))

        result = TickResult(snapshot, alerts, actions)
        self.reporter.accept(snapshot, alerts, actions)
        return result

    def run(self, max_ticks: Optional[int] = None):
        """Loop until stopped (or ``max_ticks`` ticks have run)."""
        self.reporter.start()
        try:
            ran = 0
            while not self.stop_event.is_set():
                try:
                    self.tick()
                except Exception:
                    logger.exception("Monitoring tick failed, continuing")
                ran += 1
                if max_ticks is not None and ran >= max_ticks:
                    break
                if self.stop_event.wait(self.config.interval):
                    break
        finally:
            self.reporter.close()

    def stop(self):
        """Request shutdown; takes effect at the next tick boundary or wait."""
        self.stop_event.set()

    def install_signal_handlers(self):
        """Route SIGTERM and SIGINT to stop() so shutdown is always clean."""
        def exit_handler(signum, frame):
            logger.info("Received signal %s, stopping after the current tick", signum)
            self.stop()

        signal.signal(signal.SIGTERM, exit_handler)
        signal.signal(signal.SIGINT, exit_handler)
