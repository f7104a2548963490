"""Reversible change that places named-entity recognition results in a grid."""

import logging
from typing import Optional

from pydantic import ValidationError

from ..grid import GridLike
from .base import Change
from .errors import DimensionMismatch, MalformedRecord, PreconditionViolation
from .models import ChangeRecord

logger = logging.getLogger(__name__)


class NERChange(Change):
    """
    Places extracted terms into new columns, one column per service.

    A source row whose services found several terms is fanned out over
    extra blank rows inserted directly beneath it. The positions of those
    rows are recorded in ``added_row_ids`` so that revert can remove
    exactly them, also after the change was saved and loaded again.
    """

    change_type = "ner"

    def __init__(
        self,
        column_index: int,
        service_names: list[str],
        extracted_terms: list[list[list[str]]],
        added_row_ids: Optional[list[int]] = None,
    ):
        """
        Create a new NER change.

        Args:
            column_index: Position at which the destination columns begin
            service_names: Names of the used services, one column each
            extracted_terms: Extracted terms per row and service
            added_row_ids: Previously recorded positions of inserted rows
        """
        self.column_index = column_index
        self.service_names = list(service_names)
        self.extracted_terms = [
            [list(terms) for terms in service_terms] for service_terms in extracted_terms
        ]
        self.added_row_ids: list[int] = list(added_row_ids or [])
        # Slots the grid assigned on the last apply; unknown for a loaded change
        self._cell_indexes: Optional[list[int]] = None
        self._reverted = False

    def apply(self, grid: GridLike):
        self._check_dimensions(grid)
        cell_indexes = self._create_columns(grid)
        self._cell_indexes = cell_indexes
        self._reverted = False
        self._insert_values(grid, cell_indexes)
        logger.info(
            f"Applied NER change: {len(self.service_names)} columns at "
            f"{self.column_index}, {len(self.added_row_ids)} rows added"
        )

    def revert(self, grid: GridLike):
        self._check_reversible(grid)
        removed = len(self.added_row_ids)
        self._delete_rows(grid)
        self._delete_columns(grid)
        self._cell_indexes = None
        self._reverted = True
        logger.info(
            f"Reverted NER change: {len(self.service_names)} columns and "
            f"{removed} rows removed"
        )

    # Serialization

    def to_record(self) -> ChangeRecord:
        return ChangeRecord(
            column=self.column_index,
            services=self.service_names,
            terms=self.extracted_terms,
            added_rows=self.added_row_ids,
        )

    def save(self) -> str:
        return self.to_record().model_dump_json(by_alias=True)

    @classmethod
    def from_record(cls, record: ChangeRecord) -> "NERChange":
        return cls(
            column_index=record.column,
            service_names=record.services,
            extracted_terms=record.terms,
            added_row_ids=record.added_rows,
        )

    @classmethod
    def load(cls, line: str) -> "NERChange":
        """
        Create an NER change from a saved line.

        Raises:
            MalformedRecord: If the line is not a valid change record
        """
        try:
            record = ChangeRecord.model_validate_json(line)
        except ValidationError as e:
            raise MalformedRecord(f"Invalid NER change record: {e}") from e
        return cls.from_record(record)

    def __eq__(self, other) -> bool:
        if not isinstance(other, NERChange):
            return NotImplemented
        return (
            self.column_index == other.column_index
            and self.service_names == other.service_names
            and self.extracted_terms == other.extracted_terms
            and self.added_row_ids == other.added_row_ids
        )

    def __repr__(self) -> str:
        return (
            f"NERChange(column_index={self.column_index}, "
            f"services={self.service_names!r}, rows={len(self.extracted_terms)}, "
            f"added_rows={len(self.added_row_ids)})"
        )

    # Apply

    def _check_dimensions(self, grid: GridLike):
        row_count = grid.row_count()
        if len(self.extracted_terms) != row_count:
            raise DimensionMismatch(
                f"Extracted terms cover {len(self.extracted_terms)} rows, "
                f"but the grid has {row_count} rows"
            )
        for row, service_terms in enumerate(self.extracted_terms):
            if len(service_terms) != len(self.service_names):
                raise DimensionMismatch(
                    f"Row {row} has terms for {len(service_terms)} services, "
                    f"expected {len(self.service_names)}"
                )

    def _create_columns(self, grid: GridLike) -> list[int]:
        """Create one empty column per service and return their cell indexes."""
        empty_cells = [None] * grid.row_count()
        cell_indexes = []
        for offset, name in enumerate(self.service_names):
            # The grid decides the slot; it need not match the position
            cell_indexes.append(grid.add_column(name, self.column_index + offset, empty_cells))
        return cell_indexes

    def _insert_values(self, grid: GridLike, cell_indexes: list[int]):
        """Place the extracted terms, inserting rows where they don't fit on one line."""
        self.added_row_ids.clear()
        if grid.row_count() == 0 or not cell_indexes:
            return

        min_row_size = max(cell_indexes) + 1
        for row in range(grid.row_count()):
            grid.ensure_cell_slots(row, min_row_size)

        row_number = 0
        for service_terms in self.extracted_terms:
            max_terms = max(len(terms) for terms in service_terms)
            # A row without terms still occupies its own line
            if max_terms == 0:
                row_number += 1
                continue

            for i in range(1, max_terms):
                term_row_id = row_number + i
                grid.insert_row(term_row_id)
                grid.ensure_cell_slots(term_row_id, min_row_size)
                self.added_row_ids.append(term_row_id)

            for c, terms in enumerate(service_terms):
                for r, term in enumerate(terms):
                    grid.set_cell(row_number + r, cell_indexes[c], term)

            row_number += max_terms

    # Revert

    def _check_reversible(self, grid: GridLike):
        if self._reverted:
            raise PreconditionViolation(
                "The change was already reverted and has not been applied since"
            )

        row_count = grid.row_count()
        for row_id in self.added_row_ids:
            if row_id < 0 or row_id >= row_count:
                raise PreconditionViolation(
                    f"Needed to remove row {row_id}, "
                    f"but only {row_count} rows were available.",
                    row_id=row_id,
                    row_count=row_count,
                )

        expected_rows = len(self.extracted_terms) + len(self.added_row_ids)
        if row_count != expected_rows:
            raise PreconditionViolation(
                f"Expected {expected_rows} rows after apply, found {row_count}",
                row_count=row_count,
            )

        # Names may repeat across changes, so the assigned slot is compared when known
        for offset, name in enumerate(self.service_names):
            position = self.column_index + offset
            if (
                position >= grid.column_count()
                or grid.column_name(position) != name
                or (
                    self._cell_indexes is not None
                    and grid.column_cell_index(position) != self._cell_indexes[offset]
                )
            ):
                raise PreconditionViolation(
                    f"Expected column {name!r} at position {position}; "
                    "the change is not applied to this grid"
                )

    def _delete_rows(self, grid: GridLike):
        # Highest first, so earlier removals don't shift the remaining targets
        for row_id in sorted(self.added_row_ids, reverse=True):
            grid.remove_row(row_id)
        self.added_row_ids.clear()

    def _delete_columns(self, grid: GridLike):
        # Each removal shifts the next destination column into the same position
        for _ in self.service_names:
            grid.remove_column(self.column_index)
