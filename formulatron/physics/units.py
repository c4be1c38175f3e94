"""
Unit registry for calculator variables.

Each display unit belongs to exactly one quantity kind and converts to the
kind's base unit by a scalar factor. Factors are not hand-typed: every unit
is declared as a pint expression and converted to the kind's base unit at
import time, so a mis-dimensioned entry fails loudly with pint's
DimensionalityError instead of producing a silently wrong ratio.
"""

import pint

from formulatron.errors import UnitNotFound, IncompatibleUnits

# Create a shared unit registry for the entire application
ureg = pint.UnitRegistry()

# Shorthand for creating quantities
Q_ = ureg.Quantity


# kind -> (base unit, {display name: pint expression})
# Display names are the labels offered in unit dropdowns; insertion order
# is the order they are offered in.
UNIT_KINDS: dict[str, tuple[str, dict[str, str]]] = {
    "length": ("meter", {
        "angstroms": "angstrom",
        "nanometers": "nanometer",
        "centimeters": "centimeter",
        "meters": "meter",
        "kilometers": "kilometer",
        "R⊙": "6.957e8 * meter",
        "AUs": "astronomical_unit",
        "light-years": "light_year",
        "parsecs": "parsec",
        "kiloparsecs": "kiloparsec",
        "megaparsecs": "megaparsec",
    }),
    "angle": ("degree", {
        "milliarcseconds": "milliarcsecond",
        "arcseconds": "arcsecond",
        "arcminutes": "arcminute",
        "degrees": "degree",
        "radians": "radian",
    }),
    "time": ("second", {
        "seconds": "second",
        "minutes": "minute",
        "hours": "hour",
        "days": "day",
        "years": "julian_year",
    }),
    "power": ("watt", {
        "watts": "watt",
        "megawatts": "megawatt",
        "gigawatts": "gigawatt",
        "terawatts": "terawatt",
        "L⊙": "3.828e26 * watt",
    }),
    "force": ("newton", {
        "dynes": "dyne",
        "newtons": "newton",
    }),
    "temperature": ("kelvin", {
        "kelvins": "kelvin",
        "rankines": "rankine",
        "T⊙": "5778 * kelvin",
    }),
    "speed": ("meter / second", {
        "meters/second": "meter / second",
        "kilometers/second": "kilometer / second",
    }),
    "frequency": ("hertz", {
        "hertz": "hertz",
        "kilometers/second/megaparsec": "kilometer / second / megaparsec",
    }),
    "angular_speed": ("degree / second", {
        "degrees/second": "degree / second",
        "arcseconds/year": "arcsecond / julian_year",
    }),
    "mass": ("kilogram", {
        "grams": "gram",
        "kilograms": "kilogram",
        "M⊙": "1.9891e30 * kilogram",
    }),
}


def _build_tables() -> tuple[dict[str, str], dict[str, float]]:
    """Resolve every declared unit to (kind, factor to kind base unit)."""
    kinds: dict[str, str] = {}
    factors: dict[str, float] = {}
    for kind, (base, units) in UNIT_KINDS.items():
        for name, expression in units.items():
            if name in kinds:
                raise ValueError(
                    f"Unit {name!r} declared under both {kinds[name]!r} and {kind!r}"
                )
            factor = float(Q_(expression).to(base).magnitude)
            if not factor > 0:
                raise ValueError(f"Unit {name!r} has non-positive factor {factor}")
            kinds[name] = kind
            factors[name] = factor
    return kinds, factors


_KIND_OF, _FACTOR_OF = _build_tables()


def kind_of(unit: str) -> str:
    """Get the quantity kind a unit belongs to."""
    try:
        return _KIND_OF[unit]
    except (KeyError, TypeError):
        raise UnitNotFound(unit) from None


def factor_of(unit: str) -> float:
    """Get the factor converting one `unit` into its kind's base unit."""
    try:
        return _FACTOR_OF[unit]
    except (KeyError, TypeError):
        raise UnitNotFound(unit) from None


def units_of_kind(kind: str) -> list[str]:
    """List the units of a quantity kind, in dropdown order."""
    if kind not in UNIT_KINDS:
        raise UnitNotFound(kind)
    return list(UNIT_KINDS[kind][1])


def base_unit_of(kind: str) -> str:
    """Get the pint base unit expression for a quantity kind."""
    if kind not in UNIT_KINDS:
        raise UnitNotFound(kind)
    return UNIT_KINDS[kind][0]


def unit_ratio(unit: str, default_unit: str) -> float:
    """
    Scale between a display unit and the unit a formula assumes.

    A value displayed as `x` in `unit` equals `x * unit_ratio(unit, default_unit)`
    in `default_unit`.

    Raises:
        UnitNotFound: If either unit is not registered
        IncompatibleUnits: If the units measure different kinds
    """
    kind = kind_of(unit)
    default_kind = kind_of(default_unit)
    if kind != default_kind:
        raise IncompatibleUnits(unit, default_unit, kind, default_kind)
    return factor_of(unit) / factor_of(default_unit)
