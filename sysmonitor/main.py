"""Main entry point for the sysmonitor system monitor."""
import argparse
import dataclasses
import logging
import sys
import threading
from typing import List, Optional

from .collectors.system_collector import MetricSampler
from .config import ConfigManager
from .core.errors import ConfigError, SamplingError
from .core.monitor_loop import MonitorLoop
from .core.remediation import RemediationController
from .logging_setup import setup_logging
from .reporters import CompositeReporter, CsvReporter, EventLogReporter
from .reporters.dashboard import DashboardReporter

DEFAULT_CONFIG = "monitor_config.conf"
MODES = ("daemon", "dashboard", "help")

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Command line parser. The mode is validated by hand to exit with 1."""
    parser = argparse.ArgumentParser(
        prog="sysmonitor",
        description="System resource monitor with optional automated remediation",
    )
    parser.add_argument("mode", nargs="?", default="help",
                        help="daemon | dashboard | help")
    parser.add_argument("--config", default=None,
                        help=f"key=value or YAML config file (default: ./{DEFAULT_CONFIG})")
    parser.add_argument("--interval", type=float, default=None,
                        help="seconds between ticks, overrides INTERVAL")
    parser.add_argument("--log-file", default=None, help="event log path, overrides LOG_FILE")
    parser.add_argument("--csv-file", default=None, help="metrics CSV path, overrides CSV_FILE")
    parser.add_argument("--verbose", action="store_true", help="log debug details")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the application."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.mode not in MODES:
        parser.print_usage(sys.stderr)
        print(f"sysmonitor: invalid mode {args.mode!r} (choose from {', '.join(MODES)})",
              file=sys.stderr)
        return 1
    if args.mode == "help":
        parser.print_help()
        return 0

    try:
        config = ConfigManager.load_config(args.config or DEFAULT_CONFIG,
                                           required=args.config is not None)
        overrides = {}
        if args.interval is not None:
            overrides["interval"] = args.interval
        if args.log_file:
            overrides["log_file"] = args.log_file
        if args.csv_file:
            overrides["csv_file"] = args.csv_file
        config = dataclasses.replace(config, **overrides)
    except ConfigError as e:
        print(f"sysmonitor: configuration error: {e}", file=sys.stderr)
        return 1

    setup_logging(
        log_file=config.log_file,
        console=args.mode == "daemon",
        level=logging.DEBUG if args.verbose else logging.INFO,
    )

    stop_event = threading.Event()
    sampler = MetricSampler(config, waiter=stop_event.wait)
    try:
        sampler.check_sources()
    except SamplingError as e:
        logger.error("Cannot start: %s", e)
        print(f"sysmonitor: {e}", file=sys.stderr)
        return 1

    events = EventLogReporter()
    if args.mode == "daemon":
        reporter = CompositeReporter([events, CsvReporter(config.csv_file)])
    else:
        reporter = CompositeReporter([events, DashboardReporter()])

    loop = MonitorLoop(config, sampler, RemediationController(), reporter,
                       stop_event=stop_event)
    loop.install_signal_handlers()

    logger.info(
        "Starting %s mode: interval %gs, auto-kill %s",
        args.mode, config.interval,
        "enabled" if config.remediation.auto_kill_enabled else "disabled",
    )
    loop.run()
    logger.info("Monitor stopped")
    return 0


if __name__ == "__main__":
    sys.exit(main())
