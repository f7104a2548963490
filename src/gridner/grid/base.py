"""Capability interface that reversible changes depend on."""

from typing import Any, Optional, Protocol, Sequence

from .models import Cell, Column, Row


class GridLike(Protocol):
    """
    Structural operations a grid must offer to reversible changes.

    Changes never assume a storage representation; they only use these
    calls. Callers hold the grid's lock for the full duration of an
    apply or revert.
    """

    def row_count(self) -> int: ...

    def insert_row(self, position: int, cells: Optional[list[Optional[Cell]]] = None) -> None: ...

    def remove_row(self, position: int) -> Row: ...

    def add_column(
        self, name: str, position: int, seed_values: Sequence[Optional[Any]]
    ) -> int:
        """Create a column and return the cell slot index it was assigned."""
        ...

    def remove_column(self, position: int) -> Column: ...

    def column_count(self) -> int: ...

    def column_name(self, position: int) -> str: ...

    def column_cell_index(self, position: int) -> int: ...

    def get_cell(self, row: int, cell_index: int) -> Optional[Cell]: ...

    def set_cell(self, row: int, cell_index: int, value: Optional[Any]) -> None: ...

    def ensure_cell_slots(self, row: int, min_count: int) -> None: ...
