"""Pytest configuration and shared fixtures."""

from pathlib import Path
from typing import AsyncGenerator

import pytest
import pytest_asyncio

from gridner.grid import Grid
from gridner.history import ChangeLogStore
from gridner.ops import NERChange


@pytest.fixture
def city_grid() -> Grid:
    """Two-row grid with an id column and a text column."""
    return Grid.from_rows(
        ["id", "text"],
        [
            ["1", "Paris and London"],
            ["2", "Berlin"],
        ],
    )


@pytest.fixture
def city_change() -> NERChange:
    """Change placing one service's terms right of the text column."""
    return NERChange(
        column_index=2,
        service_names=["NER1"],
        extracted_terms=[
            [["Paris", "London"]],
            [["Berlin"]],
        ],
    )


@pytest_asyncio.fixture
async def change_store(tmp_path: Path) -> AsyncGenerator[ChangeLogStore, None]:
    """Create a change log store in a temporary database."""
    store = ChangeLogStore(tmp_path / "test_changes.db")
    await store.initialize()
    yield store
    await store.close()
