from .config import Config
from .threshold_config import ThresholdConfig
from .remediation_config import RemediationConfig
from .config_manager import ConfigManager

__all__ = ["Config", "ThresholdConfig", "RemediationConfig", "ConfigManager"]
