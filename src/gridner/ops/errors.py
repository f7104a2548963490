"""Errors raised by reversible changes."""

from typing import Optional


class ChangeError(Exception):
    """Base class for change failures."""
    pass


class PreconditionViolation(ChangeError):
    """Raised when a change is reverted against a grid not in its post-apply shape."""

    def __init__(
        self,
        message: str,
        row_id: Optional[int] = None,
        row_count: Optional[int] = None,
    ):
        super().__init__(message)
        self.row_id = row_id
        self.row_count = row_count


class MalformedRecord(ChangeError, ValueError):
    """Raised when a persisted change record cannot be decoded."""
    pass


class DimensionMismatch(ChangeError):
    """Raised when extracted terms do not match the grid or the service list."""
    pass
