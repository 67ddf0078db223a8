"""Network throughput collector based on interface byte counters."""
import logging
import time
from typing import Callable, Optional, Tuple

import psutil

from ..config import Config

logger = logging.getLogger(__name__)


class NetworkCollector:
    """Measures receive/transmit rates across the configured interfaces.

    A rate needs two counter reads separated by ``network_settle`` seconds,
    so every call to :meth:`measure` blocks for that long. The wait goes
    through ``waiter`` so a stop event's ``wait`` can cut it short.
    """

    def __init__(self, config: Config, waiter: Callable[[float], object] = time.sleep,
                 clock: Callable[[], float] = time.monotonic):
        """Initialize the network collector."""
        self.config = config
        self.waiter = waiter
        self.clock = clock

    def measure(self) -> Tuple[int, int]:
        """Return ``(rx_kbps, tx_kbps)``; ``(0, 0)`` when no interface matches."""
        first = self._read_counters()
        if first is None:
            return 0, 0
        start = self.clock()
        self.waiter(self.config.network_settle)
        second = self._read_counters()
        elapsed = self.clock() - start
        if second is None:
            return 0, 0
        return self._rate(first, second, elapsed)

    def _read_counters(self) -> Optional[Tuple[int, int]]:
        """Sum byte counters over matching interfaces, or None if there are none."""
        try:
            counters = psutil.net_io_counters(pernic=True)
        except (OSError, psutil.Error) as e:
            logger.warning("Cannot read network counters: %s", e)
            return None

        prefixes = tuple(self.config.network_interfaces)
        matched = [c for nic, c in counters.items() if nic.startswith(prefixes)]
        if not matched:
            logger.debug("No network interface matches %s", ", ".join(prefixes))
            return None
        rx = sum(c.bytes_recv for c in matched)
        tx = sum(c.bytes_sent for c in matched)
        return rx, tx

    @staticmethod
    def _rate(first: Tuple[int, int], second: Tuple[int, int], elapsed: float) -> Tuple[int, int]:
        """Convert two counter reads into whole KB/s, clamped at zero."""
        elapsed = max(elapsed, 0.001)
        rx_kbps = max(0, int((second[0] - first[0]) / 1024 / elapsed))
        tx_kbps = max(0, int((second[1] - first[1]) / 1024 / elapsed))
        return rx_kbps, tx_kbps
