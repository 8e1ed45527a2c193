"""
MountFS Core: Input Validators.

This module validates the mount-table configuration and the virtual paths
it contains before a namespace is assembled from it.
"""
from typing import Any, Dict

from mountfs.core.constants import ConfigKey, ErrorCode, Limits, MountType
from mountfs.core.errors import MountFSError
from mountfs.core.path import InvalidPathError, VirtualPath


class ValidationError(MountFSError):
    """Base exception for validation errors."""

    error_code = ErrorCode.INVALID_INPUT


def validate_config(config: Dict[str, Any]) -> bool:
    """Validate a MountFS configuration section.

    Args:
        config: Contents of the 'mountfs' section

    Returns:
        True if valid

    Raises:
        ValidationError: If configuration is invalid
    """
    if not isinstance(config, dict):
        raise ValidationError("Configuration must be a dictionary")

    if ConfigKey.VERSION in config:
        validate_version(config[ConfigKey.VERSION])

    if ConfigKey.MOUNTS in config:
        validate_mount_table(config[ConfigKey.MOUNTS])

    if ConfigKey.LOGGING in config:
        validate_logging_config(config[ConfigKey.LOGGING])

    return True


def validate_mount_table(mounts: Any, depth: int = 0) -> bool:
    """Validate a list of mount entries.

    Args:
        mounts: List of mount entry dictionaries
        depth: Nesting level of namespace entries

    Returns:
        True if valid

    Raises:
        ValidationError: If any entry is invalid
    """
    if depth > Limits.MAX_CONFIG_DEPTH:
        raise ValidationError(
            f"Nested namespaces exceed maximum depth ({Limits.MAX_CONFIG_DEPTH})"
        )

    if not isinstance(mounts, list):
        raise ValidationError("Mounts must be a list")

    for i, mount in enumerate(mounts):
        try:
            validate_mount_config(mount, depth)
        except ValidationError as e:
            raise ValidationError(f"Invalid mount configuration at index {i}: {e}", e.error_code)

    return True


def validate_mount_config(mount: Dict[str, Any], depth: int = 0) -> bool:
    """Validate a single mount entry.

    Args:
        mount: Mount entry dictionary
        depth: Nesting level of the entry

    Returns:
        True if valid

    Raises:
        ValidationError: If entry is invalid
    """
    if not isinstance(mount, dict):
        raise ValidationError("Mount must be a dictionary")

    # Required field: path
    if ConfigKey.MOUNT_PATH not in mount:
        raise ValidationError("Mount must have 'path' field")
    validate_virtual_path(mount[ConfigKey.MOUNT_PATH])

    # Optional field: type (defaults to physical)
    mount_type = mount.get(ConfigKey.MOUNT_TYPE, MountType.PHYSICAL.value)
    try:
        mount_type = MountType(mount_type)
    except ValueError:
        valid_types = [t.value for t in MountType]
        raise ValidationError(f"Invalid mount type: {mount_type}. Must be one of {valid_types}")

    if mount_type is MountType.PHYSICAL:
        source = mount.get(ConfigKey.MOUNT_SOURCE)
        if not isinstance(source, str) or not source:
            raise ValidationError("Physical mount must have a non-empty 'source' field")
        if "\0" in source:
            raise ValidationError("Mount source contains null bytes")

    elif mount_type is MountType.MEMORY:
        files = mount.get(ConfigKey.MOUNT_FILES, {})
        if not isinstance(files, dict):
            raise ValidationError("Memory mount 'files' must be a dictionary")
        for name, content in files.items():
            validate_virtual_path(name)
            if not isinstance(content, (str, bytes)):
                raise ValidationError(f"Memory file content must be text or bytes: {name}")

    elif mount_type is MountType.NAMESPACE:
        validate_mount_table(mount.get(ConfigKey.MOUNT_MOUNTS, []), depth + 1)

    return True


def validate_virtual_path(path: Any) -> bool:
    """Validate a virtual path from configuration.

    Args:
        path: Path to validate

    Returns:
        True if valid

    Raises:
        ValidationError: If path is invalid
    """
    if not isinstance(path, str):
        raise ValidationError(f"Path must be string, got {type(path)}")

    if len(path) > Limits.MAX_PATH_LENGTH:
        raise ValidationError(f"Path exceeds maximum length ({Limits.MAX_PATH_LENGTH})")

    if "\0" in path:
        raise ValidationError("Path contains null bytes")

    try:
        VirtualPath(path).validate()
    except InvalidPathError as e:
        raise ValidationError(str(e), ErrorCode.INVALID_PATH)

    return True


def validate_logging_config(logging_config: Any) -> bool:
    """Validate the logging section.

    Args:
        logging_config: Logging configuration dictionary

    Returns:
        True if valid

    Raises:
        ValidationError: If logging config is invalid
    """
    if not isinstance(logging_config, dict):
        raise ValidationError("Logging configuration must be a dictionary")

    level = logging_config.get(ConfigKey.LOG_LEVEL)
    if level is not None:
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if not isinstance(level, str) or level.upper() not in valid_levels:
            raise ValidationError(f"Invalid log level: {level}. Must be one of {sorted(valid_levels)}")

    log_file = logging_config.get(ConfigKey.LOG_FILE)
    if log_file is not None and not isinstance(log_file, str):
        raise ValidationError(f"Log file must be string: {log_file}")

    return True


def validate_version(version: Any) -> bool:
    """Validate configuration version.

    Args:
        version: Version string

    Returns:
        True if valid

    Raises:
        ValidationError: If version is unsupported
    """
    if not isinstance(version, str):
        raise ValidationError(f"Version must be string, got {type(version)}")

    supported_versions = {"1.0"}
    if version not in supported_versions:
        raise ValidationError(
            f"Unsupported configuration version: {version}. "
            f"Supported versions: {', '.join(sorted(supported_versions))}"
        )

    return True
