"""Terminal dashboard using Rich for live updates."""
from collections import deque
from datetime import datetime
from typing import Deque, Optional, Sequence, Tuple

from rich.console import Console
from rich.layout import Layout
from rich.live import Live
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .. import __version__
from ..collectors.system_models import MetricSnapshot
from ..core.remediation import Failed, Skipped, Terminated
from .base import Reporter

MAX_EVENTS = 50


def make_progress_bar(value: float, width: int = 20) -> str:
    """Render a percentage as a fixed-width text bar."""
    value = max(0.0, min(100.0, float(value)))
    filled = int(value * width / 100)
    bar = "█" * filled + "░" * (width - filled)
    return f"[{bar}] {value:5.1f}%"


class DashboardReporter(Reporter):
    """Full-screen Rich dashboard redrawn after every tick."""

    def __init__(self, console: Optional[Console] = None, screen: bool = True):
        """Initialize the dashboard and its layout."""
        self.console = console or Console()
        self.screen = screen
        self.layout = self._create_layout()
        self.events: Deque[Tuple[datetime, str, str]] = deque(maxlen=MAX_EVENTS)
        self._live: Optional[Live] = None

    def start(self):
        """Enter the live display."""
        self.layout["header"].update(
            Panel("Loading system metrics...", title="System Resources", border_style="blue")
        )
        self._live = Live(self.layout, console=self.console, screen=self.screen,
                          auto_refresh=False)
        self._live.start(refresh=True)

    def close(self):
        """Leave the live display and restore the terminal."""
        if self._live is not None:
            self._live.stop()
            self._live = None

    def accept(self, snapshot, alerts, actions):
        """Record the tick's events and redraw every panel."""
        for alert in alerts:
            self.events.append((alert.timestamp, "ALERT", alert.message))
        for outcome in actions:
            self.events.append((snapshot.timestamp, *_describe_outcome(outcome)))

        self.layout["header"].update(self._create_system_overview(snapshot))
        self.layout["processes"].update(self._create_process_table(snapshot))
        self.layout["events"].update(self._create_events_panel())
        if self._live is not None:
            self._live.refresh()

    def _create_layout(self) -> Layout:
        """Create the main layout structure."""
        layout = Layout()
        layout.split_column(
            Layout(name="header", size=7),
            Layout(name="processes"),
            Layout(name="events", size=8),
        )
        return layout

    def _create_system_overview(self, snapshot: MetricSnapshot) -> Panel:
        """System overview panel with progress bars and network rates."""
        lines = [
            f"CPU:     {make_progress_bar(snapshot.cpu_percent)}",
            f"Memory:  {make_progress_bar(snapshot.memory_percent)}",
            f"Disk:    {make_progress_bar(snapshot.disk_percent)}",
            f"Network: RX {snapshot.network_rx_kbps} KB/s | TX {snapshot.network_tx_kbps} KB/s",
        ]
        return Panel(
            "\n".join(lines),
            title=f"sysmonitor v{__version__} - {snapshot.timestamp.strftime('%Y-%m-%d %H:%M:%S')}",
            border_style="blue",
        )

    def _create_process_table(self, snapshot: MetricSnapshot) -> Panel:
        """Top processes by CPU."""
        table = Table(expand=True, box=None)
        table.add_column("PID", justify="right")
        table.add_column("User")
        table.add_column("Command")
        table.add_column("CPU%", justify="right")
        table.add_column("MEM%", justify="right")
        for proc in snapshot.top_processes:
            table.add_row(
                str(proc.pid), escape(proc.user), escape(proc.name),
                f"{proc.cpu_percent:.1f}", f"{proc.memory_percent:.1f}",
            )
        return Panel(table, title=f"Top {len(snapshot.top_processes)} Processes",
                     border_style="green")

    def _create_events_panel(self) -> Panel:
        """Most recent alerts and remediation outcomes."""
        if not self.events:
            return Panel("No alerts", title="Events", border_style="green")

        styles = {"ALERT": "yellow", "ACTION": "magenta", "WARN": "yellow", "ERROR": "red"}
        recent: Sequence = list(self.events)[-6:]
        lines = []
        for ts, level, message in recent:
            style = styles.get(level, "white")
            lines.append(f"[{style}][{level}][/{style}] {ts.strftime('%H:%M:%S')} - {escape(message)}")

        border_style = "red" if any(level == "ERROR" for _, level, _ in recent) else "yellow"
        return Panel("\n".join(lines), title=f"Events ({len(self.events)} recent)",
                     border_style=border_style)


def _describe_outcome(outcome) -> Tuple[str, str]:
    """Level and message for one remediation outcome."""
    kind = outcome.kind.value
    if isinstance(outcome, Terminated):
        return "ACTION", f"{kind}: terminated PID {outcome.pid} {outcome.name} ({outcome.method.value})"
    if isinstance(outcome, Failed):
        return "ERROR", f"{kind}: kill failed for PID {outcome.pid}: {outcome.reason}"
    if isinstance(outcome, Skipped):
        return "WARN", f"{kind}: skipped ({outcome.reason})"
    return "INFO", str(outcome)
