"""
Formula catalog: declarative data and the loader that builds models from it.
"""

from formulatron.catalog.data import CATALOG_DATA
from formulatron.catalog.loader import build_catalog, build_formula, build_variable

__all__ = [
    "CATALOG_DATA",
    "build_catalog",
    "build_formula",
    "build_variable",
]
