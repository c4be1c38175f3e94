"""
Pydantic models for the formula catalog.
"""

from formulatron.models.catalog import (
    Variable,
    Formula,
    FormulaGroup,
    Catalog,
    FormulaFn,
)

__all__ = [
    "Variable",
    "Formula",
    "FormulaGroup",
    "Catalog",
    "FormulaFn",
]
