#!/usr/bin/env python3
"""Layered configuration for MountFS.

Configuration is kept as one dictionary per source level and merged on read,
higher levels winning:

1. Compiled defaults (lowest)
2. System config
3. User config (the --config mount table)
4. Environment variables (MOUNTFS_SECTION_KEY=value)
5. CLI arguments (--mount, --debug, --log-file)
6. Runtime updates (highest)

Nested dictionaries are merged key by key. Anything else, including the
mount list, is replaced as a whole by the higher level.

Example:
    >>> config = ConfigManager("mounts.yaml")
    >>> config.get("mountfs.logging.level")
    'WARNING'
    >>> config.section()["mounts"]
    [{'path': '/assets', 'source': './static'}]
"""

import copy
import os
import threading
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from mountfs.core.constants import DEFAULT_CONFIG, ConfigKey, ErrorCode
from mountfs.core.errors import MountFSError

ENV_PREFIX = "MOUNTFS_"


class ConfigSource(Enum):
    """Configuration source precedence levels."""

    COMPILED_DEFAULTS = 1  # Lowest precedence
    SYSTEM_CONFIG = 2
    USER_CONFIG = 3
    ENVIRONMENT = 4
    CLI_ARGS = 5
    RUNTIME = 6  # Highest precedence


class ConfigError(MountFSError):
    """A configuration file is missing, unreadable or malformed."""

    error_code = ErrorCode.INVALID_INPUT


class ConfigManager:
    """Thread-safe layered configuration manager."""

    def __init__(self, config_file: Optional[str] = None, load_environment: bool = True):
        """Initialize configuration manager.

        Args:
            config_file: Mount table to load at the USER_CONFIG level
            load_environment: Read MOUNTFS_* variables from the environment
        """
        self._layers: Dict[ConfigSource, Dict[str, Any]] = {
            ConfigSource.COMPILED_DEFAULTS: copy.deepcopy(DEFAULT_CONFIG)
        }
        self._files: Dict[ConfigSource, Path] = {}
        self._lock = threading.RLock()

        if config_file:
            self.load_file(config_file)

        if load_environment:
            self._load_environment()

    def load_file(self, file_path: str, source: ConfigSource = ConfigSource.USER_CONFIG) -> None:
        """Load a YAML file as the given source level.

        Args:
            file_path: Path to YAML config file
            source: Configuration source level

        Raises:
            ConfigError: If file cannot be loaded or parsed
        """
        path = Path(file_path).expanduser().resolve()

        if not path.exists():
            raise ConfigError(f"Config file not found: {file_path}", ErrorCode.NOT_FOUND)

        try:
            with open(path, "r") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"YAML parse error in {file_path}: {e}")
        except OSError as e:
            raise ConfigError(f"Error loading config {file_path}: {e}", ErrorCode.INTERNAL_ERROR)

        if not isinstance(data, dict):
            raise ConfigError(f"Invalid config format in {file_path}")

        with self._lock:
            self._layers[source] = data
            self._files[source] = path

    def source_file(self, source: ConfigSource = ConfigSource.USER_CONFIG) -> Optional[Path]:
        """Return the resolved file a source level was loaded from, if any.

        Relative provider paths in a mount table are resolved against the
        directory of this file.
        """
        with self._lock:
            return self._files.get(source)

    def _load_environment(self) -> None:
        """Read MOUNTFS_SECTION_KEY=value variables into the ENVIRONMENT level.

        MOUNTFS_LOGGING_LEVEL=DEBUG becomes mountfs.logging.level. Variables
        with empty name parts, or whose prefix collides with a scalar set by
        another variable, are ignored.
        """
        tree: Dict[str, Any] = {}

        for key, value in os.environ.items():
            if not key.startswith(ENV_PREFIX):
                continue

            parts = key[len(ENV_PREFIX):].lower().split("_")
            if not all(parts):
                continue

            node = tree
            for part in parts[:-1]:
                node = node.setdefault(part, {})
                if not isinstance(node, dict):
                    break
            else:
                node[parts[-1]] = self._parse_env_value(value)

        if tree:
            with self._lock:
                self._layers[ConfigSource.ENVIRONMENT] = {ConfigKey.ROOT: tree}

    def _parse_env_value(self, value: str) -> Any:
        """Convert an environment string to bool, int or float where it reads as one."""
        lowered = value.lower()
        if lowered in ("true", "yes"):
            return True
        if lowered in ("false", "no"):
            return False

        for convert in (int, float):
            try:
                return convert(value)
            except ValueError:
                pass

        return value

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value by key.

        Args:
            key: Dot-separated key path (e.g., "mountfs.logging.level")
            default: Returned when no level defines the key

        Returns:
            Value from the highest level that defines key
        """
        with self._lock:
            for source in sorted(self._layers, key=lambda s: s.value, reverse=True):
                value = self._get_nested(self._layers[source], key)
                if value is not None:
                    return value
            return default

    def _get_nested(self, config: Dict[str, Any], key: str) -> Optional[Any]:
        current: Any = config
        for part in key.split("."):
            if not isinstance(current, dict) or part not in current:
                return None
            current = current[part]
        return current

    def set(self, key: str, value: Any, source: ConfigSource = ConfigSource.RUNTIME) -> None:
        """Set a dot-separated key at the given source level."""
        with self._lock:
            node = self._layers.setdefault(source, {})

            parts = key.split(".")
            for part in parts[:-1]:
                node = node.setdefault(part, {})

            node[parts[-1]] = value

    def get_all(self) -> Dict[str, Any]:
        """Merge every level, lowest first."""
        with self._lock:
            merged: Dict[str, Any] = {}
            for source in sorted(self._layers, key=lambda s: s.value):
                merged = self._deep_merge(merged, self._layers[source])
            return merged

    def _deep_merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        result = base.copy()

        for key, value in override.items():
            if isinstance(result.get(key), dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result

    def section(self) -> Dict[str, Any]:
        """Return the merged 'mountfs' section."""
        return self.get_all().get(ConfigKey.ROOT, {})
