"""
Pytest configuration and shared fixtures.
"""

import pytest

from formulatron.catalog.loader import build_catalog, build_formula
from formulatron.config import EngineSettings
from formulatron.models.catalog import Catalog, Formula
from formulatron.session import Calculator


@pytest.fixture
def catalog() -> Catalog:
    """A freshly built catalog."""
    return build_catalog()


@pytest.fixture
def calculator() -> Calculator:
    """A calculator session with its own catalog."""
    return Calculator()


@pytest.fixture
def newton(catalog) -> Formula:
    """Newton's law of gravitation, order [F, r, m1, m2]."""
    return catalog.get_form("orbital-mechanics", "newton-gravitation")


@pytest.fixture
def distance_modulus(catalog) -> Formula:
    """Distance modulus, order [d, M, m]."""
    return catalog.get_form("stellar-relations", "distance-modulus")


@pytest.fixture
def hubble(catalog) -> Formula:
    """Hubble's law, order [v, d]."""
    return catalog.get_form("large-scale-universe", "hubble")


@pytest.fixture
def chain() -> Formula:
    """
    Three-variable formula with B = 2A and C = A + B, order [A, B, C].
    """
    return build_formula(
        "chain",
        {
            "name": "test chain",
            "order": ["A", "B", "C"],
            "variables": {
                "A": {"name": "a", "symbol": "A", "value": 1, "formula": lambda v: v["B"] / 2},
                "B": {"name": "b", "symbol": "B", "value": 2, "formula": lambda v: 2 * v["A"]},
                "C": {"name": "c", "symbol": "C", "value": 3, "formula": lambda v: v["A"] + v["B"]},
            },
        },
        EngineSettings(),
    )
