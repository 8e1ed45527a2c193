"""MountFS - Composable virtual filesystem namespace.

Mounts independent read-only providers into one path space and resolves
lookups by trying overlapping mounts newest first.
"""

from mountfs.core.constants import MOUNTFS_VERSION
from mountfs.core.path import InvalidPathError, VirtualPath, VirtualPathBuf
from mountfs.namespace import (
    InvalidInputError,
    MemoryMount,
    Mount,
    MountConflictError,
    MountError,
    Namespace,
    NotFoundError,
    PhysicalMount,
    SynchronizedNamespace,
)

__version__ = MOUNTFS_VERSION

__all__ = [
    "VirtualPath",
    "VirtualPathBuf",
    "Mount",
    "Namespace",
    "SynchronizedNamespace",
    "PhysicalMount",
    "MemoryMount",
    "MountError",
    "NotFoundError",
    "InvalidInputError",
    "InvalidPathError",
    "MountConflictError",
]
