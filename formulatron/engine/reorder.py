"""
Reorder policy: focus moves a variable to the end of the recalculation chain.

The variable about to be edited becomes the last link, and the variable
that was last moves one step toward the head. The head of the chain is the
one solved for first. No values change here; callers recalculate afterwards
if they need to.
"""

import logging
from typing import Optional

from formulatron.config import EngineSettings
from formulatron.models.catalog import Formula

logger = logging.getLogger(__name__)


def refresh_prefixes(formula: Formula, settings: Optional[EngineSettings] = None) -> None:
    """Mark the first and last variables of the chain; clear the rest."""
    settings = settings or EngineSettings()
    last = len(formula.order) - 1
    for position, variable_id in enumerate(formula.order):
        fraction = position / last
        if fraction == 1:
            prefix = settings.end_marker
        elif fraction == 0:
            prefix = settings.start_marker
        else:
            prefix = ""
        formula.variables[variable_id].prefix = prefix


def reorder(formula: Formula, variable_id: str, settings: Optional[EngineSettings] = None) -> Formula:
    """
    Move `variable_id` to the end of `formula.order`.

    Relative order of the other variables is preserved, so the previously
    last variable ends up directly before it.
    """
    formula.get_variable(variable_id)
    formula.order.remove(variable_id)
    formula.order.append(variable_id)
    refresh_prefixes(formula, settings)
    logger.debug("Reordered %s: %s", formula.id, formula.order)
    return formula
