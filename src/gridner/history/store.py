"""SQLite-based change log store."""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

import aiosqlite

from ..config import settings
from .models import HistoryEntry

logger = logging.getLogger(__name__)


class ChangeLogStore:
    """Durable storage for history entries, used to recover after a restart."""

    def __init__(self, db_path: Optional[Union[str, Path]] = None):
        self.db_path = Path(db_path) if db_path else settings.database_path
        self._connection: Optional[aiosqlite.Connection] = None

    async def initialize(self):
        """Initialize the database and create tables."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._connection = await aiosqlite.connect(str(self.db_path))

        await self._connection.executescript(
            """
            CREATE TABLE IF NOT EXISTS change_log (
                id TEXT PRIMARY KEY,
                grid_id TEXT NOT NULL,
                seq INTEGER NOT NULL,
                description TEXT,
                change_type TEXT NOT NULL,
                record TEXT NOT NULL,
                applied INTEGER NOT NULL,
                created_at TEXT NOT NULL
            );

            CREATE INDEX IF NOT EXISTS idx_change_log_grid ON change_log(grid_id, seq);
            """
        )
        await self._connection.commit()
        logger.info(f"ChangeLogStore initialized at {self.db_path}")

    async def close(self):
        """Close the database connection."""
        if self._connection:
            await self._connection.close()
            self._connection = None

    async def save_entry(self, entry: HistoryEntry) -> HistoryEntry:
        """Store or update a history entry."""
        await self._connection.execute(
            """
            INSERT OR REPLACE INTO change_log
            (id, grid_id, seq, description, change_type, record, applied, created_at)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                entry.id,
                entry.grid_id,
                entry.seq,
                entry.description,
                entry.change_type,
                entry.record,
                1 if entry.applied else 0,
                entry.created_at.isoformat(),
            ),
        )
        await self._connection.commit()
        return entry

    async def get_entries(self, grid_id: str) -> list[HistoryEntry]:
        """Get all entries for a grid, oldest first."""
        async with self._connection.execute(
            "SELECT * FROM change_log WHERE grid_id = ? ORDER BY seq", (grid_id,)
        ) as cursor:
            rows = await cursor.fetchall()
        return [self._row_to_entry(row) for row in rows]

    async def delete_entries(self, entry_ids: list[str]) -> int:
        """Delete entries by ID and return how many were removed."""
        if not entry_ids:
            return 0
        placeholders = ", ".join("?" for _ in entry_ids)
        cursor = await self._connection.execute(
            f"DELETE FROM change_log WHERE id IN ({placeholders})", entry_ids
        )
        await self._connection.commit()
        return cursor.rowcount

    def _row_to_entry(self, row) -> HistoryEntry:
        return HistoryEntry(
            id=row[0],
            grid_id=row[1],
            seq=row[2],
            description=row[3] or "",
            change_type=row[4],
            record=row[5],
            applied=bool(row[6]),
            created_at=datetime.fromisoformat(row[7]),
        )
