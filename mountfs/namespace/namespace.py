"""
MountFS Namespace: Root Container.

A Namespace is the entry point for building and querying a mount tree:

    >>> ns = Namespace()
    >>> ns.mount_physical("/assets", "./static")
    >>> ns.mount("/", fallback_mount)
    >>> with ns.open("/assets/img/logo.png") as f:
    ...     data = f.read()

A Namespace is itself a Mount, so a whole namespace can be attached inside
another one and resolution needs no special case for it.

Namespace does no locking. Wrap it in SynchronizedNamespace when several
threads share it.
"""

import threading
from pathlib import Path
from typing import BinaryIO, Iterator, List, Optional, Tuple, Union

from mountfs.core.path import VirtualPath, VirtualPathBuf
from mountfs.infrastructure.logger import get_logger
from mountfs.namespace.base import Mount, PathLike
from mountfs.namespace.physical import PhysicalMount
from mountfs.namespace.tree import VirtualDir

logger = get_logger("mountfs.namespace")


class Namespace(Mount):
    """
    A tree of mounts addressed by virtual paths.

    Mounts are only ever added. Several mounts may share a path; the most
    recent one is tried first and earlier ones are tried when it fails.
    A mount at "/" sees every lookup that reaches it with the full,
    untrimmed path.
    """

    def __init__(self):
        self.root = VirtualDir()

    def mount(self, target: PathLike, mount: Mount) -> None:
        """
        Register mount at target.

        Args:
            target: Virtual attachment point; "/" or "" for the root
            mount: Provider to attach

        Raises:
            InvalidPathError: If target contains '..'
            MountConflictError: If target descends through an existing mount point
        """
        target = VirtualPath.coerce(target)
        target.validate()
        self.root.mount(target, mount)
        logger.info("Mounted provider", target=target.canonicalize(), provider=mount)

    def mount_physical(self, target: PathLike, folder: Union[str, Path]) -> None:
        """
        Register a directory on disk at target.

        Args:
            target: Virtual attachment point
            folder: Existing directory to expose

        Raises:
            InvalidInputError: If folder is not an existing directory
            InvalidPathError: If target contains '..'
        """
        self.mount(target, PhysicalMount(folder))

    def open(self, path: PathLike) -> BinaryIO:
        """
        Open the resource at path.

        Args:
            path: Virtual path to resolve

        Returns:
            Readable binary file object; the caller owns and closes it

        Raises:
            InvalidPathError: If path contains '..'
            NotFoundError: If no mount matched
            MountError, OSError: The failure of the last mount tried
        """
        path = VirtualPath.coerce(path)
        path.validate()
        with logger.add_context(lookup=path):
            return self.root.open(path)

    def mounts(self) -> List[Tuple[VirtualPathBuf, Mount]]:
        """Return every registered mount point as (path, mount)."""
        return list(self.root.walk())

    def __iter__(self) -> Iterator[Tuple[VirtualPathBuf, Mount]]:
        return self.root.walk()

    def __len__(self) -> int:
        return sum(1 for _ in self.root.walk())

    def __repr__(self) -> str:
        return f"Namespace(mounts={len(self)})"


class SynchronizedNamespace(Mount):
    """
    A Namespace guarded by a single lock.

    Registration is expected at start-up and lookups afterwards, so one
    coarse lock around the whole tree is enough.
    """

    def __init__(self, namespace: Optional[Namespace] = None):
        self.namespace = namespace if namespace is not None else Namespace()
        self._lock = threading.RLock()

    def mount(self, target: PathLike, mount: Mount) -> None:
        with self._lock:
            self.namespace.mount(target, mount)

    def mount_physical(self, target: PathLike, folder: Union[str, Path]) -> None:
        with self._lock:
            self.namespace.mount_physical(target, folder)

    def open(self, path: PathLike) -> BinaryIO:
        with self._lock:
            return self.namespace.open(path)

    def mounts(self) -> List[Tuple[VirtualPathBuf, Mount]]:
        with self._lock:
            return self.namespace.mounts()

    def __repr__(self) -> str:
        return f"SynchronizedNamespace({self.namespace!r})"
