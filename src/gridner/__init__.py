"""gridner - Reversible named-entity recognition changes for tabular grids."""

__version__ = "0.1.0"
