"""System resource monitor with safe automated remediation."""

__version__ = "0.3.0"
