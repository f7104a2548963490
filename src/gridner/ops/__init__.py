"""Reversible grid changes."""

from .base import Change
from .change import NERChange
from .errors import (
    ChangeError,
    PreconditionViolation,
    MalformedRecord,
    DimensionMismatch,
)
from .models import ChangeRecord
from .registry import ChangeRegistry, default_registry

__all__ = [
    "Change",
    "NERChange",
    "ChangeRecord",
    "ChangeRegistry",
    "default_registry",
    # Errors
    "ChangeError",
    "PreconditionViolation",
    "MalformedRecord",
    "DimensionMismatch",
]
