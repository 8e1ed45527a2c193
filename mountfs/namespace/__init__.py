"""
MountFS Namespace - Mount tree and providers.

Public API:
-----------

Capability:
    Mount: Abstract base class for everything that can be mounted

Tree:
    Namespace: Root container; mount() and open() entry points
    SynchronizedNamespace: Namespace behind a single lock
    VirtualDir, Node, NodeKind: Tree internals

Providers:
    PhysicalMount: Files under a real directory
    MemoryMount: Byte strings held in memory

Loading:
    build_namespace: Namespace from a list of mount entries
    load_namespace: Namespace from a ConfigManager

Errors:
    MountError, NotFoundError, InvalidInputError, MountConflictError

Usage Example:
--------------

    from mountfs.namespace import MemoryMount, Namespace

    ns = Namespace()
    ns.mount_physical("/", "/srv/defaults")
    ns.mount("/motd", MemoryMount({"/today.txt": "hello"}))

    with ns.open("/motd/today.txt") as f:
        print(f.read())
"""

from mountfs.namespace.base import (
    InvalidInputError,
    Mount,
    MountConflictError,
    MountError,
    NotFoundError,
)
from mountfs.namespace.loader import build_namespace, load_namespace
from mountfs.namespace.memory import MemoryMount
from mountfs.namespace.namespace import Namespace, SynchronizedNamespace
from mountfs.namespace.physical import PhysicalMount
from mountfs.namespace.tree import Node, NodeKind, VirtualDir

__all__ = [
    # Capability
    "Mount",
    # Tree
    "Namespace",
    "SynchronizedNamespace",
    "VirtualDir",
    "Node",
    "NodeKind",
    # Providers
    "PhysicalMount",
    "MemoryMount",
    # Loading
    "build_namespace",
    "load_namespace",
    # Errors
    "MountError",
    "NotFoundError",
    "InvalidInputError",
    "MountConflictError",
]
