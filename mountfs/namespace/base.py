"""
MountFS Namespace: Mount Capability and Errors.

A Mount is anything that can turn a virtual path into a readable resource.
The namespace tree dispatches to Mounts without knowing what backs them:
a directory on disk, an in-memory table, or another whole Namespace.
"""

from abc import ABC, abstractmethod
from typing import BinaryIO, Union

from mountfs.core.constants import ErrorCode
from mountfs.core.errors import MountFSError
from mountfs.core.path import InvalidPathError, VirtualPath

PathLike = Union[str, VirtualPath]


class MountError(MountFSError):
    """Base exception for failures raised by mounts."""


class NotFoundError(MountError):
    """No mount produced a resource for the requested path."""

    error_code = ErrorCode.NOT_FOUND


class InvalidInputError(MountError):
    """A provider was constructed with arguments it cannot use."""

    error_code = ErrorCode.INVALID_INPUT


class MountConflictError(InvalidPathError):
    """A mount was registered through a segment occupied by a non-directory node."""

    error_code = ErrorCode.CONFLICT


# Failures that make the namespace fall back to the next overlapping mount
LOOKUP_FAILURES = (MountError, OSError)


class Mount(ABC):
    """
    Abstract base class for everything that can be mounted.

    Implementations must provide open(). The path handed to open() is
    relative to the mount's attachment point and still carries its leading
    slash, e.g. a mount at "/assets" asked for "/assets/img/a.png" receives
    "/img/a.png". A mount registered at the root receives the full path.

    Failures are reported by raising: NotFoundError when nothing exists at
    the path, any other MountError or OSError for everything else.
    """

    @abstractmethod
    def open(self, path: VirtualPath) -> BinaryIO:
        """
        Open the resource at path for reading.

        Args:
            path: Path relative to this mount's attachment point

        Returns:
            Readable binary file object; the caller owns and closes it

        Raises:
            NotFoundError: If no resource exists at path
            MountError: For other provider failures
            OSError: For I/O failures of the backing store
        """

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return f"{type(self).__name__}()"
