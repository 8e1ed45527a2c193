"""Base exception shared by the path grammar and the namespace."""

from typing import Optional

from mountfs.core.constants import ErrorCode


class MountFSError(Exception):
    """Base exception for MountFS errors."""

    error_code: ErrorCode = ErrorCode.INTERNAL_ERROR

    def __init__(self, message: str, error_code: Optional[ErrorCode] = None):
        """Initialize MountFSError.

        Args:
            message: Error message
            error_code: Associated error code (defaults to the class code)
        """
        super().__init__(message)
        if error_code is not None:
            self.error_code = error_code
