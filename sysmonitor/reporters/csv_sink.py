"""Append-only CSV history of tick metrics."""
import csv
from pathlib import Path
from typing import Union

from .base import Reporter

HEADER = [
    "Timestamp",
    "CPU_Usage(%)",
    "Memory_Usage(%)",
    "Disk_Usage(%)",
    "RX_KB/s",
    "TX_KB/s",
    "Top_Process",
    "Top_Process_CPU(%)",
]


class CsvReporter(Reporter):
    """Appends one row per tick; writes the header only into an empty file."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def start(self):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        if not self.path.exists() or self.path.stat().st_size == 0:
            with self.path.open("a", newline="", encoding="utf-8") as f:
                csv.writer(f).writerow(HEADER)

    def accept(self, snapshot, alerts, actions):
        if not self.path.exists() or self.path.stat().st_size == 0:
            self.start()
        top = snapshot.top_process
        row = [
            snapshot.timestamp.strftime("%Y-%m-%d %H:%M:%S"),
            snapshot.cpu_percent,
            f"{snapshot.memory_percent:.1f}",
            snapshot.disk_percent,
            snapshot.network_rx_kbps,
            snapshot.network_tx_kbps,
            top.name if top else "",
            f"{top.cpu_percent:.1f}" if top else "",
        ]
        with self.path.open("a", newline="", encoding="utf-8") as f:
            csv.writer(f).writerow(row)
