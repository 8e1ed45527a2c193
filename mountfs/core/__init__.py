"""MountFS Core - Path grammar and shared definitions.

Import specific names from submodules:
    from mountfs.core.path import VirtualPath, VirtualPathBuf
    from mountfs.core.constants import ErrorCode
    from mountfs.core.validators import validate_config
"""

from mountfs.core import constants, errors, path, validators

__all__ = [
    "constants",
    "errors",
    "path",
    "validators",
]
