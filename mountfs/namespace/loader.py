"""
MountFS Namespace: Mount Table Loader.

Builds a Namespace from the 'mounts' list of a configuration:

    mountfs:
      mounts:
        - path: /
          source: ./defaults
        - path: /assets
          type: physical
          source: ./static
        - path: /motd
          type: memory
          files: {"/today.txt": "hello"}
        - path: /vendor
          type: namespace
          mounts:
            - path: /lib
              source: ./vendor/lib

Entries are mounted in list order, so later entries overlay earlier ones.
Relative 'source' directories are resolved against base_dir.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from mountfs.core.constants import ConfigKey, MountType
from mountfs.core.validators import validate_config, validate_mount_table
from mountfs.infrastructure.config_manager import ConfigManager, ConfigSource
from mountfs.infrastructure.logger import get_logger
from mountfs.namespace.base import Mount
from mountfs.namespace.memory import MemoryMount
from mountfs.namespace.namespace import Namespace
from mountfs.namespace.physical import PhysicalMount

logger = get_logger("mountfs.loader")


def build_mount(entry: Dict[str, Any], base_dir: Path) -> Mount:
    """
    Create the provider described by one mount entry.

    Args:
        entry: Validated mount entry
        base_dir: Directory relative sources are resolved against

    Returns:
        Provider instance

    Raises:
        InvalidInputError: If a physical source is not a directory
    """
    mount_type = MountType(entry.get(ConfigKey.MOUNT_TYPE, MountType.PHYSICAL.value))

    if mount_type is MountType.MEMORY:
        return MemoryMount(entry.get(ConfigKey.MOUNT_FILES, {}))

    if mount_type is MountType.NAMESPACE:
        return build_namespace(entry.get(ConfigKey.MOUNT_MOUNTS, []), base_dir, validate=False)

    source = Path(entry[ConfigKey.MOUNT_SOURCE]).expanduser()
    if not source.is_absolute():
        source = base_dir / source
    return PhysicalMount(source)


def build_namespace(
    mounts: List[Dict[str, Any]],
    base_dir: Optional[Union[str, Path]] = None,
    validate: bool = True,
) -> Namespace:
    """
    Build a Namespace from a list of mount entries.

    Args:
        mounts: Mount entries in registration order
        base_dir: Directory relative sources are resolved against
            (defaults to the current directory)
        validate: Validate the entries first

    Returns:
        Populated namespace

    Raises:
        ValidationError: If an entry is malformed
        InvalidInputError: If a physical source is not a directory
        MountConflictError: If an entry mounts through another mount point
    """
    if validate:
        validate_mount_table(mounts)

    base = Path(base_dir) if base_dir is not None else Path.cwd()
    namespace = Namespace()

    for entry in mounts:
        namespace.mount(entry[ConfigKey.MOUNT_PATH], build_mount(entry, base))

    logger.debug("Built namespace", mounts=len(mounts), base_dir=base)
    return namespace


def load_namespace(config: ConfigManager) -> Namespace:
    """
    Build a Namespace from the merged configuration.

    Relative sources resolve against the directory of the loaded config
    file, or the current directory when the table did not come from a file.

    Args:
        config: Configuration manager holding a 'mountfs' section

    Returns:
        Populated namespace
    """
    section = config.section()
    validate_config(section)

    source_file = config.source_file(ConfigSource.USER_CONFIG)
    base_dir = source_file.parent if source_file is not None else None

    return build_namespace(section.get(ConfigKey.MOUNTS, []), base_dir, validate=False)
