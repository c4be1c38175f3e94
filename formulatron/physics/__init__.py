"""
Units and physical constants.

The unit registry is backed by pint; the constants are pint quantities with
float magnitudes exported for use inside catalog formulas.
"""

from formulatron.physics.units import (
    ureg,
    Q_,
    UNIT_KINDS,
    kind_of,
    factor_of,
    units_of_kind,
    base_unit_of,
    unit_ratio,
)
from formulatron.physics.constants import (
    G,
    STEFAN,
    WIEN,
    HUBBLE,
    EDDINGTON,
)

__all__ = [
    # Units
    "ureg",
    "Q_",
    "UNIT_KINDS",
    "kind_of",
    "factor_of",
    "units_of_kind",
    "base_unit_of",
    "unit_ratio",
    # Constants
    "G",
    "STEFAN",
    "WIEN",
    "HUBBLE",
    "EDDINGTON",
]
