"""
MountFS Namespace: In-memory Mount.

MemoryMount serves fixed byte strings keyed by canonical path. It is handy
for generated content, defaults shadowed by real directories, and tests.
"""

import io
from typing import BinaryIO, Dict, Mapping, Optional, Union

from mountfs.core.path import VirtualPath, VirtualPathBuf
from mountfs.namespace.base import Mount, NotFoundError, PathLike


class MemoryMount(Mount):
    """Mount serving byte strings from a dictionary."""

    def __init__(self, files: Optional[Mapping[str, Union[str, bytes]]] = None):
        """
        Args:
            files: Initial contents, path -> text or bytes. Text is UTF-8 encoded.
        """
        self.files: Dict[VirtualPathBuf, bytes] = {}
        for name, content in (files or {}).items():
            self.add(name, content)

    def add(self, path: PathLike, content: Union[str, bytes]) -> None:
        """
        Store content under path, replacing what was there.

        Raises:
            InvalidPathError: If path contains '..'
        """
        path = VirtualPath.coerce(path)
        path.validate()
        if isinstance(content, str):
            content = content.encode("utf-8")
        self.files[path.canonicalize()] = bytes(content)

    def open(self, path: VirtualPath) -> BinaryIO:
        key = VirtualPath.coerce(path).canonicalize()
        try:
            return io.BytesIO(self.files[key])
        except KeyError:
            raise NotFoundError(f"No such file: {path}") from None

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, (str, VirtualPath)):
            return False
        return VirtualPath.coerce(path).canonicalize() in self.files

    def __len__(self) -> int:
        return len(self.files)

    def __repr__(self) -> str:
        return f"MemoryMount(files={len(self.files)})"
