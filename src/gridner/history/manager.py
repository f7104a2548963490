"""Undo/redo history of reversible changes for a grid."""

import logging
import uuid
from typing import Optional

from ..grid import Grid
from ..ops import Change, ChangeRegistry, MalformedRecord, default_registry
from .models import HistoryEntry
from .store import ChangeLogStore

logger = logging.getLogger(__name__)


class HistoryManager:
    """
    Applies, undoes and redoes changes on a single grid.

    Each apply or revert runs under the grid's lock. When a store is
    configured, every entry is persisted after the grid was updated, so
    a fresh process can rebuild the history with ``restore`` and still
    undo the changes applied before the restart.
    """

    def __init__(
        self,
        grid: Grid,
        grid_id: str,
        registry: Optional[ChangeRegistry] = None,
        store: Optional[ChangeLogStore] = None,
    ):
        self.grid = grid
        self.grid_id = grid_id
        self.registry = registry or default_registry
        self.store = store
        self._past: list[tuple[HistoryEntry, Change]] = []
        self._future: list[tuple[HistoryEntry, Change]] = []  # Next redo last

    @property
    def can_undo(self) -> bool:
        return bool(self._past)

    @property
    def can_redo(self) -> bool:
        return bool(self._future)

    @property
    def entries(self) -> list[HistoryEntry]:
        """All entries in history order."""
        return [entry for entry, _ in self._past] + [
            entry for entry, _ in reversed(self._future)
        ]

    def lines(self) -> list[str]:
        """Serialize the history as one JSON line per entry."""
        return [entry.to_line() for entry in self.entries]

    async def perform(self, change: Change, description: str) -> HistoryEntry:
        """
        Apply a new change and record it.

        Any undone changes are discarded, as they can no longer be redone.
        """
        with self.grid.lock:
            change.apply(self.grid)

        discarded = [entry.id for entry, _ in self._future]
        self._future.clear()

        entry = HistoryEntry(
            id=str(uuid.uuid4()),
            grid_id=self.grid_id,
            seq=len(self._past),
            description=description,
            change_type=change.change_type,
            record=change.save(),
            applied=True,
        )
        self._past.append((entry, change))
        logger.info(f"Performed {entry.change_type} change #{entry.seq}: {description}")

        if self.store:
            await self.store.delete_entries(discarded)
            await self.store.save_entry(entry)
        return entry

    async def undo(self) -> Optional[HistoryEntry]:
        """Revert the most recent applied change."""
        if not self._past:
            return None

        entry, change = self._past[-1]
        with self.grid.lock:
            change.revert(self.grid)
        self._past.pop()

        entry = entry.model_copy(update={"record": change.save(), "applied": False})
        self._future.append((entry, change))
        logger.info(f"Undid change #{entry.seq}: {entry.description}")

        if self.store:
            await self.store.save_entry(entry)
        return entry

    async def redo(self) -> Optional[HistoryEntry]:
        """Re-apply the most recently undone change."""
        if not self._future:
            return None

        entry, change = self._future[-1]
        with self.grid.lock:
            change.apply(self.grid)
        self._future.pop()

        entry = entry.model_copy(update={"record": change.save(), "applied": True})
        self._past.append((entry, change))
        logger.info(f"Redid change #{entry.seq}: {entry.description}")

        if self.store:
            await self.store.save_entry(entry)
        return entry

    @classmethod
    async def restore(
        cls,
        grid: Grid,
        grid_id: str,
        store: ChangeLogStore,
        registry: Optional[ChangeRegistry] = None,
    ) -> "HistoryManager":
        """Rebuild a grid's history from the change log store."""
        entries = await store.get_entries(grid_id)
        manager = cls(grid, grid_id, registry=registry, store=store)
        manager._load_entries(entries)
        logger.info(f"Restored {len(entries)} history entries for grid {grid_id}")
        return manager

    @classmethod
    def from_lines(
        cls,
        grid: Grid,
        grid_id: str,
        lines: list[str],
        registry: Optional[ChangeRegistry] = None,
    ) -> "HistoryManager":
        """Rebuild a grid's history from change log lines, skipping other grids' entries."""
        entries = [HistoryEntry.from_line(line) for line in lines if line.strip()]
        entries = [entry for entry in entries if entry.grid_id == grid_id]
        manager = cls(grid, grid_id, registry=registry)
        manager._load_entries(entries)
        return manager

    def _load_entries(self, entries: list[HistoryEntry]):
        past = []
        future = []
        for entry in sorted(entries, key=lambda e: e.seq):
            change = self.registry.load(entry.change_type, entry.record)
            if entry.applied:
                if future:
                    raise MalformedRecord(
                        f"Applied entry #{entry.seq} follows an undone entry"
                    )
                past.append((entry, change))
            else:
                future.append((entry, change))
        self._past = past
        self._future = list(reversed(future))
