"""Logging configuration for the monitor.

Adds two levels on top of the standard ones: ``ALERT`` for threshold
breaches and ``ACTION`` for processes the monitor terminated. ``WARNING``
is rendered as ``WARN`` so log lines read ``[INFO]``, ``[WARN]``,
``[ALERT]``, ``[ACTION]`` or ``[ERROR]``.
"""
import logging
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

ACTION = 25
ALERT = 35

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

logging.addLevelName(ACTION, "ACTION")
logging.addLevelName(ALERT, "ALERT")
logging.addLevelName(logging.WARNING, "WARN")


def setup_logging(log_file: Optional[str] = None,
                  console: bool = True,
                  level: int = logging.INFO) -> logging.Logger:
    """Configure the ``sysmonitor`` logger tree.

    Args:
        log_file: Append-only event log; skipped when None.
        console: Attach a rich console handler. Off in dashboard mode,
            where the screen belongs to the live display.
        level: Minimum level for all handlers.

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger("sysmonitor")
    logger.setLevel(level)
    logger.propagate = False

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
        file_handler.setLevel(level)
        logger.addHandler(file_handler)

    if console:
        console_handler = RichHandler(
            console=Console(stderr=True),
            show_time=True,
            show_path=False,
            rich_tracebacks=True,
        )
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        console_handler.setLevel(level)
        logger.addHandler(console_handler)

    if not logger.handlers:
        logger.addHandler(logging.NullHandler())

    return logger
