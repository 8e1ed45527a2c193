"""MountFS Infrastructure Layer.

Services used by the namespace and the CLI:
- ConfigManager: Layered configuration (defaults, YAML files, environment)
- Logger: Structured logging system
"""

from .config_manager import ConfigError
from .config_manager import ConfigManager as Config
from .config_manager import ConfigSource
from .logger import Logger, LogLevel, configure_logging, get_logger

__all__ = [
    # Logger exports
    "Logger",
    "LogLevel",
    "configure_logging",
    "get_logger",
    # ConfigManager exports
    "ConfigSource",
    "ConfigError",
    "Config",
]
