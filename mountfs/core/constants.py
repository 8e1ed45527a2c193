"""
MountFS Core: Constants

This module provides system-wide constants, error codes, limits and the
default configuration shared by the path grammar, the namespace and the CLI.
"""
from enum import Enum, IntEnum

# Version information
MOUNTFS_VERSION = "1.0.0"


# Error codes (0-9 range)
class ErrorCode(IntEnum):
    """Standardized error codes for MountFS operations."""

    SUCCESS = 0  # Operation completed successfully
    INVALID_INPUT = 1  # Bad provider argument, invalid configuration
    NOT_FOUND = 2  # No mount produced a resource
    INVALID_PATH = 3  # Path contains a ".." segment
    CONFLICT = 4  # Mount registered through a non-directory node
    INTERNAL_ERROR = 6  # Bug in MountFS


# Path grammar
SEPARATOR = "/"
CURRENT_DIR = "."
PARENT_DIR = ".."
EXTENSION_SEPARATOR = "."

# Node name claiming the whole remaining path
SENTINEL_NAME = ""


class Limits:
    """System limits and default values."""

    # Path limits
    MAX_PATH_LENGTH = 4096

    # Nested namespace definitions in a mount table
    MAX_CONFIG_DEPTH = 16

    # Log file rotation
    LOG_FILE_MAX_BYTES = 10 * 1024 * 1024  # 10MB
    LOG_FILE_BACKUP_COUNT = 5


class MountType(Enum):
    """Provider types that can be declared in a mount table."""

    PHYSICAL = "physical"  # Directory on disk
    MEMORY = "memory"  # In-memory files
    NAMESPACE = "namespace"  # Nested namespace with its own mounts


# Configuration keys
class ConfigKey:
    """Configuration key constants."""

    # Top-level keys
    ROOT = "mountfs"
    VERSION = "version"
    MOUNTS = "mounts"
    LOGGING = "logging"

    # Mount entry keys
    MOUNT_PATH = "path"
    MOUNT_TYPE = "type"
    MOUNT_SOURCE = "source"
    MOUNT_FILES = "files"
    MOUNT_MOUNTS = "mounts"

    # Logging keys
    LOG_LEVEL = "level"
    LOG_FILE = "file"


# Default configuration values
DEFAULT_CONFIG = {
    ConfigKey.ROOT: {
        ConfigKey.VERSION: "1.0",
        ConfigKey.MOUNTS: [],
        ConfigKey.LOGGING: {
            ConfigKey.LOG_LEVEL: "WARNING",
            ConfigKey.LOG_FILE: None,
        },
    }
}
