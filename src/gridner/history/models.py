"""Data models for the change history."""

from datetime import datetime, timezone
from pydantic import BaseModel, Field, ValidationError

from ..ops.errors import MalformedRecord


def _utc_now() -> datetime:
    """Return current UTC time as timezone-aware datetime."""
    return datetime.now(timezone.utc)


class HistoryEntry(BaseModel):
    """A change recorded in a grid's history."""

    id: str
    grid_id: str
    seq: int  # Position in the grid's history, starting at 0
    description: str
    change_type: str  # Registry tag of the change
    record: str  # Line produced by the change's save()
    applied: bool = True
    created_at: datetime = Field(default_factory=_utc_now)

    def to_line(self) -> str:
        """Serialize the entry as a single JSON line."""
        return self.model_dump_json()

    @classmethod
    def from_line(cls, line: str) -> "HistoryEntry":
        try:
            return cls.model_validate_json(line)
        except ValidationError as e:
            raise MalformedRecord(f"Invalid history entry: {e}") from e
