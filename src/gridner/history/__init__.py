"""Change history and persistence layer."""

from .manager import HistoryManager
from .models import HistoryEntry
from .store import ChangeLogStore

__all__ = ["HistoryManager", "HistoryEntry", "ChangeLogStore"]
