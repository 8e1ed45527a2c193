"""
MountFS Namespace: Virtual Directory Tree.

The tree is made of VirtualDirs holding ordered Nodes. Each Node is either
a sub-directory or a mount point. Names may repeat within a directory: the
later node overlays the earlier one, and lookups fall back to earlier nodes
when a later one fails.

There are no parent links. Registration and lookup both walk down from the
root, consuming one path segment per level with VirtualPath.take_head().
"""

from dataclasses import dataclass
from enum import Enum
from typing import BinaryIO, Iterator, List, Optional, Tuple, Union

from mountfs.core.constants import SENTINEL_NAME
from mountfs.core.path import VirtualPath, VirtualPathBuf
from mountfs.infrastructure.logger import get_logger
from mountfs.namespace.base import (
    LOOKUP_FAILURES,
    Mount,
    MountConflictError,
    NotFoundError,
)

logger = get_logger("mountfs.namespace")


class NodeKind(Enum):
    """What a tree node holds."""

    DIRECTORY = "directory"
    MOUNT = "mount"


@dataclass(frozen=True)
class Node:
    """
    A named entry in a VirtualDir.

    Attributes:
        name: Segment this node answers to; "" claims the whole remaining path
        kind: DIRECTORY or MOUNT
        payload: The VirtualDir or the Mount, matching kind
    """

    name: str
    kind: NodeKind
    payload: Union["VirtualDir", Mount]

    @classmethod
    def create_dir(cls, name: str, directory: Optional["VirtualDir"] = None) -> "Node":
        return cls(name, NodeKind.DIRECTORY, directory if directory is not None else VirtualDir())

    @classmethod
    def create_mount(cls, name: str, mount: Mount) -> "Node":
        return cls(name, NodeKind.MOUNT, mount)

    @property
    def is_dir(self) -> bool:
        return self.kind is NodeKind.DIRECTORY

    @property
    def is_mount(self) -> bool:
        return self.kind is NodeKind.MOUNT

    @property
    def is_sentinel(self) -> bool:
        return self.name == SENTINEL_NAME

    def open(self, path: VirtualPath) -> BinaryIO:
        """Dispatch a lookup to the directory or mount this node holds."""
        return self.payload.open(path)


class VirtualDir:
    """
    Ordered collection of Nodes.

    Nodes are only ever appended. Insertion order is precedence order: the
    most recently appended node with a given name is consulted first.
    """

    def __init__(self):
        self.nodes: List[Node] = []

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self) -> Iterator[Node]:
        return iter(self.nodes)

    def __repr__(self) -> str:
        return f"VirtualDir({[node.name for node in self.nodes]!r})"

    def find_dir(self, name: str) -> Optional["VirtualDir"]:
        """Return the sub-directory registered under name, if any."""
        for node in self.nodes:
            if node.is_dir and node.name == name:
                return node.payload
        return None

    def candidates(self, head: str) -> List[Node]:
        """Nodes that may serve a lookup whose next segment is head, oldest first."""
        return [node for node in self.nodes if node.name == head or node.is_sentinel]

    def mount(self, target: VirtualPath, mount: Mount) -> None:
        """
        Attach mount at target, relative to this directory.

        Intermediate directories are created on demand. A target with no
        significant segments attaches a sentinel mount here.

        Args:
            target: Path relative to this directory; must already be validated
            mount: Provider to attach

        Raises:
            MountConflictError: If target descends through a segment that is
                only registered as a mount point
        """
        head, tail = target.take_head()

        if tail is None:
            self.nodes.append(Node.create_mount(head, mount))
            return

        directory = self.find_dir(head)
        if directory is not None:
            directory.mount(tail, mount)
            return

        if any(node.name == head for node in self.nodes):
            raise MountConflictError(
                f"Cannot mount through {head!r}: it is a mount point, not a directory"
            )

        # Attached only once populated
        directory = VirtualDir()
        directory.mount(tail, mount)
        self.nodes.append(Node.create_dir(head, directory))

    def open(self, path: VirtualPath) -> BinaryIO:
        """
        Resolve path against this directory.

        Candidates are the nodes named after the first segment plus every
        sentinel node. They are tried newest first; sentinel nodes get the
        path exactly as received here, named nodes get the remainder.

        Args:
            path: Path relative to this directory; must already be validated

        Returns:
            Resource returned by the first candidate that succeeds

        Raises:
            NotFoundError: If the path has fewer than two significant segments
                or no candidate exists
            MountError, OSError: The failure of the last candidate tried
        """
        head, tail = path.take_head()
        if tail is None:
            raise NotFoundError(f"No such resource: {path}")

        failure: Optional[Exception] = None
        for node in reversed(self.candidates(head)):
            forwarded = path if node.is_sentinel else tail
            try:
                return node.open(forwarded)
            except LOOKUP_FAILURES as e:
                logger.debug(
                    "Candidate failed, falling back",
                    segment=node.name or "<root>",
                    kind=node.kind.value,
                    path=forwarded,
                    error=type(e).__name__,
                )
                failure = e

        if failure is None:
            raise NotFoundError(f"No such resource: {path}")
        raise failure

    def walk(self, prefix: Optional[VirtualPathBuf] = None) -> Iterator[Tuple[VirtualPathBuf, Mount]]:
        """
        Yield every mount point below this directory as (path, mount).

        Args:
            prefix: Path of this directory within the namespace

        Yields:
            Attachment path and mount, depth first in registration order
        """
        if prefix is None:
            prefix = VirtualPathBuf()

        for node in self.nodes:
            path = prefix if node.is_sentinel else prefix.join(node.name)
            if node.is_dir:
                yield from node.payload.walk(path)
            else:
                yield path, node.payload
