"""Data models for grid rows, columns and cells."""

from typing import Any, Optional
from pydantic import BaseModel, Field


class Cell(BaseModel):
    """Represents the value held by a single cell."""

    value: Optional[Any] = None


class Column(BaseModel):
    """A named column and the cell slot that stores its data."""

    name: str
    cell_index: int  # Slot in each row's cell list, independent of display position


class Row(BaseModel):
    """A row of cells, indexed by cell slot."""

    cells: list[Optional[Cell]] = Field(default_factory=list)

    def get_cell(self, cell_index: int) -> Optional[Cell]:
        """Return the cell in a slot, or None if the slot is empty or unallocated."""
        if 0 <= cell_index < len(self.cells):
            return self.cells[cell_index]
        return None

    def get_value(self, cell_index: int) -> Any:
        cell = self.get_cell(cell_index)
        return cell.value if cell is not None else None

    def ensure_slots(self, min_count: int):
        """Pad the row with empty slots until it holds at least min_count."""
        while len(self.cells) < min_count:
            self.cells.append(None)

    @classmethod
    def blank(cls, width: int) -> "Row":
        return cls(cells=[None] * width)
