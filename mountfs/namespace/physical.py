"""
MountFS Namespace: Disk-backed Mount.

PhysicalMount exposes the files under one real directory. A lookup for
"/img/logo.png" opens <folder>/img/logo.png in binary mode.
"""

import os
from pathlib import Path
from typing import BinaryIO, Union

from mountfs.core.path import VirtualPath
from mountfs.infrastructure.logger import get_logger
from mountfs.namespace.base import InvalidInputError, Mount, NotFoundError

logger = get_logger("mountfs.physical")


class PhysicalMount(Mount):
    """
    Mount backed by a directory on disk.

    Attributes:
        folder: Absolute path of the exposed directory
    """

    def __init__(self, folder: Union[str, Path]):
        """
        Bind the mount to an existing directory.

        Args:
            folder: Directory to expose

        Raises:
            InvalidInputError: If folder does not exist or is not a directory
        """
        path = Path(folder).expanduser()
        if not path.is_dir():
            raise InvalidInputError(f"Not an existing directory: {folder}")
        self.folder = path.resolve()

    def real_path(self, path: VirtualPath) -> Path:
        """
        Map a virtual path onto the exposed directory.

        Raises:
            InvalidPathError: If path contains '..'
        """
        return self.folder / path.to_relative()

    def open(self, path: VirtualPath) -> BinaryIO:
        """
        Open the file at path for reading.

        Args:
            path: Path relative to the mount point

        Returns:
            File object opened in binary read mode

        Raises:
            NotFoundError: If the file does not exist, is a directory, or the
                name cannot exist on disk (embedded NUL)
            InvalidPathError: If path contains '..'
            OSError: For any other I/O failure
        """
        real = self.real_path(VirtualPath.coerce(path))
        try:
            handle = open(real, "rb")
        except (FileNotFoundError, NotADirectoryError, IsADirectoryError, ValueError) as e:
            raise NotFoundError(f"No such file: {path}") from e

        logger.debug("Opened file", path=path, real_path=real)
        return handle

    def __repr__(self) -> str:
        return f"PhysicalMount({os.fspath(self.folder)!r})"
