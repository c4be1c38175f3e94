"""
Recalculation engine.

After one variable of a formula is edited, walk the formula's chain and
re-derive the other variables from their per-variable expressions. The
walk is a single left-to-right fold over a snapshot of values: every
variable sees the values derived before it in the same pass. The head of
the chain is derived from the values as they stand before the pass.

Failure is a state, not an exception. A non-finite input stops propagation
before the walk starts; a formula that leaves its domain stores NaN on its
own variable and stops the walk there. Either way the user keeps editing,
and the next finite entry in the chain head recomputes everything after it.
"""

import logging
import math
from typing import Mapping, Optional, Union

from formulatron.config import EngineSettings
from formulatron.engine.scientific import denormalize, normalize, parse_field
from formulatron.models.catalog import Formula, Variable
from formulatron.physics.units import unit_ratio

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("mantissa", "exponent")


def evaluate(variable: Variable, snapshot: Mapping[str, float]) -> float:
    """
    Evaluate a variable's expression on the current snapshot.

    Division by zero, math domain errors, overflow and complex results
    (a negative base to a fractional power) all read as NaN.
    """
    try:
        return float(variable.formula(snapshot))
    except (ArithmeticError, ValueError, TypeError) as e:
        logger.debug("Formula for %s out of domain: %s", variable.id, e)
        return math.nan


def apply_field(variable: Variable, field: str, raw: Union[str, float, int, None]) -> None:
    """Store a typed mantissa or exponent, keeping the raw text for display."""
    if field not in EDITABLE_FIELDS:
        raise ValueError(f"Field must be one of {EDITABLE_FIELDS}, got {field!r}")
    setattr(variable, field, parse_field(raw))
    variable.pending[field] = "" if raw is None else str(raw)


def apply_unit(variable: Variable, new_unit: str) -> None:
    """
    Switch a variable's display unit.

    Mantissa and exponent stay as displayed; only the ratio used to read
    them changes. The ratio is computed before anything is assigned, so an
    unknown unit leaves the variable untouched.

    Raises:
        UnitNotFound: If `new_unit` is not registered
        IncompatibleUnits: If `new_unit` measures a different kind
        ValueError: If the variable is dimensionless
    """
    if variable.default_unit is None:
        raise ValueError(f"Variable {variable.id!r} has no unit")
    ratio = unit_ratio(new_unit, variable.default_unit)
    variable.unit = new_unit
    variable.unit_ratio = ratio
    logger.debug("Unit of %s -> %s (ratio %g)", variable.id, new_unit, ratio)


def recalculate(
    formula: Formula,
    edited_id: str,
    self_recompute: bool,
    field: Optional[str] = None,
    raw: Union[str, float, int, None] = None,
    new_unit: Optional[str] = None,
    settings: Optional[EngineSettings] = None,
) -> Formula:
    """
    Apply one edit to a formula and re-derive the rest of its chain.

    Args:
        formula: Formula to update in place
        edited_id: Variable the edit applies to
        self_recompute: Also re-derive the edited variable from the others.
                        False while a field is being typed into, True on
                        commit and unit change.
        field: "mantissa" or "exponent" when a field was typed into
        raw: Raw input for `field`
        new_unit: New display unit, for a unit change
        settings: Engine settings (precision)

    Returns:
        The same formula, mutated
    """
    settings = settings or EngineSettings()
    edited = formula.get_variable(edited_id)

    # 1. Raw field or unit
    if field is not None:
        apply_field(edited, field, raw)
    if new_unit is not None:
        apply_unit(edited, new_unit)

    # 2. Edited value from its display fields
    edited.value = denormalize(edited.mantissa, edited.exponent) * edited.unit_ratio
    if self_recompute and math.isfinite(edited.value):
        edited.pending.clear()

    # 3. Snapshot
    values = formula.snapshot()

    # 4. Guard against transient non-finite input. An edited head must be
    # finite. Otherwise order[0] is exempt, as is a non-finite value the
    # engine derived (no typed text left); the walk re-derives both.
    if edited_id == formula.order[0] and not math.isfinite(edited.value):
        logger.debug("Halted %s: non-finite head %s", formula.id, edited_id)
        return formula
    invalid = [
        vid for vid in formula.order[1:]
        if not math.isfinite(values[vid]) and formula.variables[vid].pending
    ]
    if invalid:
        logger.debug("Halted %s: non-finite %s", formula.id, invalid)
        return formula

    # 5. Walk the chain. The edited variable is re-derived only on a
    # completed edit, and never when it heads the chain.
    for position, variable_id in enumerate(formula.order):
        if variable_id == edited_id and (not self_recompute or position == 0):
            continue
        variable = formula.variables[variable_id]
        new_value = evaluate(variable, values)
        values[variable_id] = new_value
        variable.value = new_value
        variable.mantissa, variable.exponent = normalize(
            new_value / variable.unit_ratio, settings.significant_digits
        )
        variable.pending.clear()
        if not math.isfinite(new_value):
            logger.debug("Halted %s at %s: non-finite result", formula.id, variable_id)
            break

    return formula
