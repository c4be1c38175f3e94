"""
Catalog loader.

Builds a fresh, mutable Catalog from the declarative formula data. Each
session calls this once, so sessions never share variable state.
"""

import logging
from typing import Any, Mapping, Optional

from formulatron.catalog.data import CATALOG_DATA
from formulatron.config import EngineSettings
from formulatron.engine.reorder import refresh_prefixes
from formulatron.engine.scientific import normalize
from formulatron.models.catalog import Catalog, Formula, FormulaGroup, Variable
from formulatron.physics.units import kind_of

logger = logging.getLogger(__name__)


def build_variable(variable_id: str, entry: Mapping[str, Any], settings: EngineSettings) -> Variable:
    """
    Create a Variable from its declarative entry.

    The declared unit becomes both the display unit and the default unit,
    so the initial unit ratio is 1.

    Raises:
        UnitNotFound: If the declared unit is not in the registry
    """
    unit = entry.get("unit") or None
    if unit is not None:
        kind_of(unit)
    value = float(entry["value"])
    mantissa, exponent = normalize(value, settings.significant_digits)
    return Variable(
        id=variable_id,
        name=entry["name"].strip(),
        symbol=entry["symbol"],
        value=value,
        mantissa=mantissa,
        exponent=exponent,
        unit=unit,
        default_unit=unit,
        unit_ratio=1.0,
        formula=entry["formula"],
    )


def build_formula(form_id: str, entry: Mapping[str, Any], settings: EngineSettings) -> Formula:
    variables = {
        variable_id: build_variable(variable_id, variable_entry, settings)
        for variable_id, variable_entry in entry["variables"].items()
    }
    formula = Formula(
        id=form_id,
        name=entry["name"],
        description=entry.get("description"),
        order=list(entry["order"]),
        variables=variables,
    )
    refresh_prefixes(formula, settings)
    return formula


def build_catalog(
    data: Optional[Mapping[str, Any]] = None,
    settings: Optional[EngineSettings] = None,
) -> Catalog:
    """
    Build the catalog from declarative data.

    Args:
        data: Group mapping in the CATALOG_DATA layout. Defaults to the
              built-in catalog.
        settings: Engine settings (precision, chain markers)

    Returns:
        A new Catalog owned by the caller

    Raises:
        UnitNotFound: If a variable declares an unknown unit
        ValueError: If a formula's order is not a permutation of its variables
    """
    data = CATALOG_DATA if data is None else data
    settings = settings or EngineSettings()

    groups = {}
    for group_id, group_entry in data.items():
        forms = {
            form_id: build_formula(form_id, form_entry, settings)
            for form_id, form_entry in group_entry["forms"].items()
        }
        groups[group_id] = FormulaGroup(id=group_id, name=group_entry["name"], forms=forms)

    catalog = Catalog(groups=groups)
    logger.debug(
        "Built catalog: %d groups, %d formulas",
        len(groups),
        sum(len(g.forms) for g in groups.values()),
    )
    return catalog
