"""
Formulatron: an interactive astronomy formula calculator.

Each formula relates several variables. Editing any one of them re-derives
the others along the formula's recalculation chain, with values shown in
scientific notation and in a selectable display unit.

Usage:
    python -m formulatron list
    python -m formulatron show stellar-relations distance-modulus
    python -m formulatron solve orbital-mechanics newton-gravitation --set F=10
    python -m formulatron serve --port 8000
"""

__version__ = "0.1.0"
__author__ = "Formulatron Project"

from formulatron.config import EngineSettings
from formulatron.errors import UnitNotFound, IncompatibleUnits, FormulaNotFound
from formulatron.models.catalog import Catalog, Formula, FormulaGroup, Variable
from formulatron.catalog.loader import build_catalog
from formulatron.engine.recalc import recalculate
from formulatron.engine.reorder import reorder
from formulatron.session import Calculator

__all__ = [
    "EngineSettings",
    "UnitNotFound",
    "IncompatibleUnits",
    "FormulaNotFound",
    "Catalog",
    "Formula",
    "FormulaGroup",
    "Variable",
    "build_catalog",
    "recalculate",
    "reorder",
    "Calculator",
]
