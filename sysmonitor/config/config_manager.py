"""Configuration loading and management."""
import logging
import math
import shlex
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from ..core.errors import ConfigError
from .config import Config
from .remediation_config import RemediationConfig
from .threshold_config import ThresholdConfig

logger = logging.getLogger(__name__)

TRUE_VALUES = {"1", "true", "yes", "on"}
FALSE_VALUES = {"0", "false", "no", "off", ""}

# key -> (section, field, parser name)
KEYS = {
    "CPU_THRESHOLD": ("thresholds", "cpu", "percent"),
    "MEM_THRESHOLD": ("thresholds", "memory", "percent"),
    "DISK_THRESHOLD": ("thresholds", "disk", "percent"),
    "CPU_KILL_THRESHOLD": ("remediation", "cpu_kill_threshold", "percent"),
    "MEM_KILL_THRESHOLD": ("remediation", "memory_kill_threshold", "percent"),
    "CPU_MIN_USAGE": ("remediation", "cpu_usage_floor", "percent"),
    "MEM_MIN_USAGE": ("remediation", "memory_usage_floor", "percent"),
    "AUTO_KILL_ENABLED": ("remediation", "auto_kill_enabled", "bool"),
    "PROTECTED_PROCESSES": ("remediation", "protected_processes", "names"),
    "KILL_COOLDOWN": ("remediation", "cooldown_seconds", "seconds"),
    "GRACE_PERIOD": ("remediation", "grace_period", "seconds"),
    "INTERVAL": ("main", "interval", "seconds"),
    "TOP_PROCESSES": ("main", "top_process_count", "int"),
    "DISK_PATH": ("main", "disk_path", "str"),
    "NETWORK_INTERFACES": ("main", "network_interfaces", "names"),
    "NETWORK_SETTLE": ("main", "network_settle", "seconds"),
    "LOG_FILE": ("main", "log_file", "str"),
    "CSV_FILE": ("main", "csv_file", "str"),
}


class ConfigManager:
    """Configuration loading and management."""

    @staticmethod
    def load_config(config_path: Union[str, Path], required: bool = True) -> Config:
        """Load configuration from a key=value or YAML file.

        A missing file yields the defaults unless ``required`` is set.
        """
        path = Path(config_path)
        if not path.exists():
            if required:
                raise ConfigError(f"config file not found: {path}")
            logger.info("No config file at %s, using defaults", path)
            return Config()

        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"cannot read config file {path}: {e}") from e

        if path.suffix.lower() in (".yaml", ".yml"):
            raw = ConfigManager._parse_yaml(text, path)
        else:
            raw = ConfigManager.parse_key_values(text, path)
        return ConfigManager.from_mapping(raw)

    @staticmethod
    def parse_key_values(text: str, source: Union[str, Path] = "<string>") -> Dict[str, str]:
        """Parse shell-style ``KEY=value`` lines into a dict."""
        values: Dict[str, str] = {}
        for lineno, line in enumerate(text.splitlines(), start=1):
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if line.startswith("export "):
                line = line[len("export "):].lstrip()
            key, sep, value = line.partition("=")
            key = key.strip()
            if not sep or not key:
                raise ConfigError(f"{source}:{lineno}: expected KEY=value, got {line!r}")
            try:
                parts = shlex.split(value, comments=True)
            except ValueError as e:
                raise ConfigError(f"{source}:{lineno}: {e}") from e
            values[key.upper()] = " ".join(parts)
        return values

    @staticmethod
    def _parse_yaml(text: str, source: Path) -> Dict[str, Any]:
        """Parse a YAML mapping with the same keys as the key=value format."""
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ConfigError(f"{source}: invalid YAML: {e}") from e
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(f"{source}: top level must be a mapping")
        return {str(key).upper(): value for key, value in data.items()}

    @staticmethod
    def from_mapping(raw: Dict[str, Any]) -> Config:
        """Build a validated Config from already-parsed raw values."""
        sections: Dict[str, Dict[str, Any]] = {"main": {}, "thresholds": {}, "remediation": {}}
        for key, value in raw.items():
            if key not in KEYS:
                logger.debug("Ignoring unknown config key %s", key)
                continue
            section, name, kind = KEYS[key]
            sections[section][name] = _convert(key, value, kind)

        return Config(
            thresholds=ThresholdConfig(**sections["thresholds"]),
            remediation=RemediationConfig(**sections["remediation"]),
            **sections["main"],
        )


def _convert(key: str, value: Any, kind: str) -> Any:
    """Convert one raw config value according to its declared kind."""
    if kind == "bool":
        if isinstance(value, bool):
            return value
        text = str(value).strip().lower()
        if text in TRUE_VALUES:
            return True
        if text in FALSE_VALUES:
            return False
        raise ConfigError(f"{key}: expected a boolean, got {value!r}")

    if kind == "names":
        if isinstance(value, (list, tuple)):
            names = [str(v) for v in value]
        else:
            names = str(value).split()
        if key == "PROTECTED_PROCESSES":
            return frozenset(n for n in names if n)
        return tuple(n for n in names if n)

    if kind == "str":
        return str(value)

    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ConfigError(f"{key}: expected a number, got {value!r}") from None
    if kind == "int":
        if not math.isfinite(number) or number != int(number):
            raise ConfigError(f"{key}: expected an integer, got {value!r}")
        return int(number)
    return number
