"""Builds NER changes by running a grid column through extraction services."""

import logging
import time

from ..grid import Grid
from ..ops import NERChange
from .manager import ServiceManager

logger = logging.getLogger(__name__)


class TermExtractor:
    """Collects extracted terms per row and service for a grid column."""

    def __init__(self, manager: ServiceManager):
        self.manager = manager

    def extract_terms(
        self, grid: Grid, column_name: str, service_names: list[str]
    ) -> list[list[list[str]]]:
        """
        Run every row's text through each service.

        Args:
            grid: The grid to read from
            column_name: Name of the column holding the text
            service_names: Services to use, in column order

        Returns:
            Extracted terms indexed by [row][service][term]
        """
        # Resolve everything up front so a typo fails before any request
        cell_index = grid.column_cell_index(grid.column_position(column_name))
        services = [self.manager.get(name) for name in service_names]

        start_time = time.time()
        extracted_terms = []
        for row in range(grid.row_count()):
            value = grid.get_value(row, cell_index)
            text = str(value) if value is not None else ""
            extracted_terms.append(
                [service.extract_named_entities(text) for service in services]
            )

        logger.info(
            f"Extracted terms for {len(extracted_terms)} rows of {column_name!r} "
            f"with {len(services)} services ({(time.time() - start_time) * 1000:.2f}ms)"
        )
        return extracted_terms

    def build_change(
        self, grid: Grid, column_name: str, service_names: list[str]
    ) -> NERChange:
        """Create a change placing the terms right of the source column."""
        extracted_terms = self.extract_terms(grid, column_name, service_names)
        return NERChange(
            column_index=grid.column_position(column_name) + 1,
            service_names=service_names,
            extracted_terms=extracted_terms,
        )
