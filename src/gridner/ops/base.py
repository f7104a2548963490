"""Base interface for reversible changes."""

from abc import ABC, abstractmethod
from typing import ClassVar

from ..grid import GridLike


class Change(ABC):
    """A reversible mutation of a grid that can be persisted to one line."""

    change_type: ClassVar[str]  # Stable tag used to find the loader on replay

    @abstractmethod
    def apply(self, grid: GridLike):
        """Apply the change. The caller holds the grid's lock."""
        pass

    @abstractmethod
    def revert(self, grid: GridLike):
        """Undo the change. The grid must be in the shape apply left it."""
        pass

    @abstractmethod
    def save(self) -> str:
        """Serialize the change to a single line."""
        pass

    @classmethod
    @abstractmethod
    def load(cls, line: str) -> "Change":
        """Reconstruct a change from a line produced by save()."""
        pass
