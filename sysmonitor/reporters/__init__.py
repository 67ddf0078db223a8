from .base import CompositeReporter, Reporter
from .csv_sink import CsvReporter
from .event_log import EventLogReporter

__all__ = ["Reporter", "CompositeReporter", "CsvReporter", "EventLogReporter"]
