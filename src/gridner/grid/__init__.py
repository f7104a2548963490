"""Grid capability interface and in-memory grid."""

from .base import GridLike
from .grid import Grid
from .models import Cell, Column, Row

__all__ = ["GridLike", "Grid", "Cell", "Column", "Row"]
