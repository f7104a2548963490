"""In-memory grid of rows and columns."""

import logging
import threading
from typing import Any, Optional, Sequence

from .models import Cell, Column, Row

logger = logging.getLogger(__name__)


class Grid:
    """
    In-memory tabular store.

    Columns map a display position to a cell slot. Slots are allocated
    from a counter and never reused, so a column's slot index generally
    differs from its position once columns have been added or removed.
    """

    def __init__(
        self,
        columns: Optional[list[Column]] = None,
        rows: Optional[list[Row]] = None,
    ):
        self.columns: list[Column] = columns or []
        self.rows: list[Row] = rows or []
        self.lock = threading.RLock()
        self._max_cell_index = max((c.cell_index for c in self.columns), default=-1)

    @classmethod
    def from_rows(cls, column_names: list[str], rows: list[list[Any]]) -> "Grid":
        """Build a grid from column names and plain row values."""
        columns = [Column(name=name, cell_index=i) for i, name in enumerate(column_names)]
        grid_rows = []
        for values in rows:
            cells = [Cell(value=v) if v is not None else None for v in values]
            cells.extend([None] * (len(column_names) - len(cells)))
            grid_rows.append(Row(cells=cells))
        return cls(columns=columns, rows=grid_rows)

    @property
    def cell_slot_count(self) -> int:
        """Number of cell slots allocated so far."""
        return self._max_cell_index + 1

    # Rows

    def row_count(self) -> int:
        return len(self.rows)

    def insert_row(self, position: int, cells: Optional[list[Optional[Cell]]] = None):
        """Insert a row; a blank row is created when no cells are given."""
        if position < 0 or position > len(self.rows):
            raise IndexError(
                f"Cannot insert row at {position}, grid has {len(self.rows)} rows"
            )
        if cells is None:
            row = Row.blank(self.cell_slot_count)
        else:
            row = Row(cells=list(cells))
        self.rows.insert(position, row)

    def remove_row(self, position: int) -> Row:
        self._check_row(position)
        return self.rows.pop(position)

    # Columns

    def column_count(self) -> int:
        return len(self.columns)

    def column_name(self, position: int) -> str:
        return self._column(position).name

    def column_cell_index(self, position: int) -> int:
        return self._column(position).cell_index

    def column_position(self, name: str) -> int:
        """Return the display position of the first column with a name."""
        for position, column in enumerate(self.columns):
            if column.name == name:
                return position
        raise KeyError(f"Column not found: {name}")

    def add_column(
        self, name: str, position: int, seed_values: Sequence[Optional[Any]]
    ) -> int:
        """
        Create a column at a display position.

        Args:
            name: Column name; names may repeat
            position: Display position, between 0 and column_count()
            seed_values: Initial value per row; missing entries seed empty cells

        Returns:
            The cell slot index allocated to the new column
        """
        if position < 0 or position > len(self.columns):
            raise IndexError(
                f"Cannot add column at {position}, grid has {len(self.columns)} columns"
            )

        self._max_cell_index += 1
        cell_index = self._max_cell_index
        self.columns.insert(position, Column(name=name, cell_index=cell_index))

        for r, row in enumerate(self.rows):
            row.ensure_slots(cell_index + 1)
            value = seed_values[r] if r < len(seed_values) else None
            row.cells[cell_index] = Cell(value=value) if value is not None else None

        logger.debug(f"Added column {name!r} at {position} (cell index {cell_index})")
        return cell_index

    def remove_column(self, position: int) -> Column:
        """Remove a column and empty its slot in every row."""
        column = self._column(position)
        del self.columns[position]
        for row in self.rows:
            if column.cell_index < len(row.cells):
                row.cells[column.cell_index] = None
        logger.debug(f"Removed column {column.name!r} from {position}")
        return column

    # Cells

    def get_cell(self, row: int, cell_index: int) -> Optional[Cell]:
        self._check_row(row)
        return self.rows[row].get_cell(cell_index)

    def get_value(self, row: int, cell_index: int) -> Any:
        self._check_row(row)
        return self.rows[row].get_value(cell_index)

    def set_cell(self, row: int, cell_index: int, value: Optional[Any]):
        self._check_row(row)
        target = self.rows[row]
        target.ensure_slots(cell_index + 1)
        target.cells[cell_index] = Cell(value=value) if value is not None else None

    def ensure_cell_slots(self, row: int, min_count: int):
        self._check_row(row)
        self.rows[row].ensure_slots(min_count)

    # Views

    def values(self) -> list[list[Any]]:
        """Return every row's values in column display order."""
        return [
            [row.get_value(column.cell_index) for column in self.columns]
            for row in self.rows
        ]

    def snapshot(self) -> tuple[list[str], list[list[Any]]]:
        """Return column names and row values, for comparing grid states."""
        return [column.name for column in self.columns], self.values()

    def _check_row(self, position: int):
        if position < 0 or position >= len(self.rows):
            raise IndexError(
                f"Row {position} out of range, grid has {len(self.rows)} rows"
            )

    def _column(self, position: int) -> Column:
        if position < 0 or position >= len(self.columns):
            raise IndexError(
                f"Column {position} out of range, grid has {len(self.columns)} columns"
            )
        return self.columns[position]
