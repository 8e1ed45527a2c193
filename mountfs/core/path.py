"""
MountFS Core: Virtual Path Grammar.

Paths inside a namespace are '/'-delimited text. Repeated slashes collapse to
a single boundary, "." segments are no-ops and ".." segments make the whole
path invalid. The empty path and "/" both denote the root.

This module provides:
- VirtualPath: an immutable view over path text
- VirtualPathBuf: an owned path held in canonical form

Example:
    >>> path = VirtualPath("//assets/./img//logo.png/")
    >>> list(path)
    ['assets', 'img', 'logo.png']
    >>> str(path.canonicalize())
    '/assets/img/logo.png'
    >>> path.take_head()
    ('assets', VirtualPath('/./img//logo.png/'))
"""

from pathlib import PurePosixPath
from typing import Iterable, Iterator, Optional, Tuple, Union

from mountfs.core.constants import (
    CURRENT_DIR,
    EXTENSION_SEPARATOR,
    PARENT_DIR,
    SEPARATOR,
    ErrorCode,
)
from mountfs.core.errors import MountFSError


class PathError(MountFSError):
    """Base exception for path errors."""

    error_code = ErrorCode.INVALID_PATH


class InvalidPathError(PathError):
    """Raised when a path contains a parent-directory ('..') segment."""


class VirtualPath:
    """Immutable view over the text of a virtual path.

    A VirtualPath never rewrites the text it wraps; significant segments are
    computed on demand. Use canonicalize() to obtain a normalized copy.
    """

    __slots__ = ("_text",)

    def __init__(self, text: str = ""):
        """Wrap path text.

        Args:
            text: Path text, absolute or not
        """
        if not isinstance(text, str):
            raise TypeError(f"Path text must be str, got {type(text).__name__}")
        self._text = text

    @classmethod
    def coerce(cls, path: Union[str, "VirtualPath"]) -> "VirtualPath":
        """Return path unchanged if it is already a VirtualPath, else wrap it."""
        if isinstance(path, VirtualPath):
            return path
        return cls(path)

    @property
    def text(self) -> str:
        """The wrapped path text, exactly as given."""
        return self._text

    def __str__(self) -> str:
        return self._text

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._text!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, VirtualPath):
            return self._text == other._text
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._text)

    def __iter__(self) -> Iterator[str]:
        return self.segments()

    def segments(self) -> Iterator[str]:
        """Iterate significant segments from left to right.

        Empty segments and "." segments are skipped. ".." is yielded as-is;
        rejecting it is the job of validate().

        Returns:
            Fresh iterator over the segments
        """
        return (
            segment
            for segment in self._text.split(SEPARATOR)
            if segment and segment != CURRENT_DIR
        )

    def is_root(self) -> bool:
        """Check whether the path has no significant segments."""
        return next(self.segments(), None) is None

    def file_name(self) -> Optional[str]:
        """Return the final significant segment, or None for the root."""
        last = None
        for last in self.segments():
            pass
        return last

    def extension(self) -> Optional[str]:
        """Return the extension of the final segment.

        The extension is the text after the last '.' of the final segment.

        Returns:
            Extension without the dot, "" when the final segment ends with '.',
            None when the final segment has no '.' or the path is the root

        Example:
            >>> VirtualPath("hello/world.txt").extension()
            'txt'
            >>> VirtualPath("hello/world.").extension()
            ''
            >>> VirtualPath("hello/world").extension() is None
            True
        """
        name = self.file_name()
        if name is None:
            return None
        _, dot, suffix = name.rpartition(EXTENSION_SEPARATOR)
        if not dot:
            return None
        return suffix

    def validate(self) -> None:
        """Reject paths that try to go up a level.

        Raises:
            InvalidPathError: If any segment is '..'
        """
        if PARENT_DIR in self._text.split(SEPARATOR):
            raise InvalidPathError(f"Parent directory segments are not allowed: {self._text!r}")

    def canonicalize(self) -> "VirtualPathBuf":
        """Rebuild the path from its significant segments.

        Returns:
            Canonical path: single leading slash, no trailing slash, "/" for root
        """
        return VirtualPathBuf.from_segments(self.segments())

    def take_head(self) -> Tuple[str, Optional["VirtualPath"]]:
        """Split off the first significant segment.

        Returns:
            (head, tail) where head is the first significant segment ("" if
            there is none) and tail is None when nothing significant follows,
            otherwise a view over the remaining text including its leading slash

        Example:
            >>> VirtualPath("/a/b/c").take_head()
            ('a', VirtualPath('/b/c'))
            >>> VirtualPath("a//").take_head()
            ('a', None)
        """
        remaining = self._text
        while True:
            stripped = remaining.lstrip(SEPARATOR)
            if not stripped:
                return "", None
            head, slash, rest = stripped.partition(SEPARATOR)
            remaining = slash + rest
            if head != CURRENT_DIR:
                break

        tail = VirtualPath(remaining)
        if tail.is_root():
            return head, None
        return head, tail

    def to_relative(self) -> PurePosixPath:
        """Convert to a relative path suitable for joining onto a real directory.

        Raises:
            InvalidPathError: If the path contains '..'
        """
        self.validate()
        return PurePosixPath(*self.segments())


class VirtualPathBuf(VirtualPath):
    """A virtual path held in canonical form."""

    __slots__ = ()

    def __init__(self, text: str = SEPARATOR):
        super().__init__(text)
        if text != SEPARATOR + SEPARATOR.join(self.segments()):
            raise ValueError(f"Not a canonical path: {text!r}")

    @classmethod
    def from_segments(cls, segments: Iterable[str]) -> "VirtualPathBuf":
        """Join segments with a single leading slash and no trailing slash.

        Args:
            segments: Path segments; empty and '.' segments are dropped

        Returns:
            Canonical path, "/" for an empty sequence
        """
        significant = [s for s in segments if s and s != CURRENT_DIR]
        for segment in significant:
            if SEPARATOR in segment:
                raise ValueError(f"Segment contains a separator: {segment!r}")
        return cls(SEPARATOR + SEPARATOR.join(significant))

    def as_path(self) -> VirtualPath:
        """Borrow this path as a plain view."""
        return VirtualPath(self._text)

    def join(self, segment: str) -> "VirtualPathBuf":
        """Return a new path with segment appended."""
        return VirtualPathBuf.from_segments([*self.segments(), segment])
