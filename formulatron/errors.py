"""
Exceptions raised by the unit registry, catalog and session layers.

Non-finite input and out-of-domain formula results are not exceptions:
the recalculation engine halts propagation and leaves the affected
fields non-finite until the user edits them again.
"""


class UnitNotFound(LookupError):
    """A unit (or quantity kind) is not declared in the unit registry."""

    def __init__(self, unit):
        self.unit = unit
        super().__init__(f"Unknown unit: {unit!r}")


class IncompatibleUnits(ValueError):
    """Two units belong to different quantity kinds."""

    def __init__(self, unit: str, other: str, kind: str, other_kind: str):
        self.unit = unit
        self.other = other
        super().__init__(
            f"Cannot convert {unit!r} ({kind}) to {other!r} ({other_kind})"
        )


class FormulaNotFound(LookupError):
    """A group, formula or variable id does not exist in the catalog."""
