"""
Catalog models: formula groups, formulas and their variables.

Instances are built once per session by the catalog loader and then mutated
in place by the recalculation engine and the reorder policy.
"""

from typing import Callable, Mapping, Optional

from pydantic import BaseModel, Field, model_validator

from formulatron.errors import FormulaNotFound


FormulaFn = Callable[[Mapping[str, float]], float]


class Variable(BaseModel):
    """
    One variable of a formula.

    `value` is kept in `default_unit` terms, which is what every formula in
    the catalog expects. `mantissa` and `exponent` are the display view of
    `value / unit_ratio`, i.e. the same quantity expressed in `unit`.
    """
    id: str = Field(..., description="Key of the variable within its formula")
    name: str = Field(..., description="Human-readable name")
    symbol: str = Field(..., description="Display symbol")
    value: float = Field(..., description="Value in default-unit terms")
    mantissa: float = Field(default=0.0, description="Display mantissa in the selected unit")
    exponent: float = Field(default=0, description="Display power-of-ten exponent")
    unit: Optional[str] = Field(default=None, description="Currently selected display unit")
    default_unit: Optional[str] = Field(default=None, description="Unit the formula's constants assume")
    unit_ratio: float = Field(default=1.0, gt=0, description="factor(unit) / factor(default_unit)")
    prefix: str = Field(default="", description="Chain position marker (derived)")
    pending: dict[str, str] = Field(
        default_factory=dict,
        description="Raw text typed into mantissa/exponent, shown until re-derived",
    )
    formula: FormulaFn = Field(..., exclude=True, repr=False)


class Formula(BaseModel):
    """
    A physical relation between several variables.

    `order` is the recalculation chain. Variables are re-derived in this
    sequence; order[0] is derived first, order[-1] last.
    """
    id: str
    name: str
    description: Optional[str] = None
    order: list[str]
    variables: dict[str, Variable]

    @model_validator(mode="after")
    def check_order(self) -> "Formula":
        """Ensure the chain is a permutation of the declared variables."""
        if len(self.variables) < 2:
            raise ValueError(f"Formula {self.id!r} needs at least two variables")
        for key, variable in self.variables.items():
            if variable.id != key:
                raise ValueError(f"Variable key {key!r} does not match its id {variable.id!r}")
        if len(set(self.order)) != len(self.order) or set(self.order) != set(self.variables):
            raise ValueError(
                f"Formula {self.id!r} order {self.order} is not a permutation "
                f"of its variables {list(self.variables)}"
            )
        return self

    def get_variable(self, variable_id: str) -> Variable:
        try:
            return self.variables[variable_id]
        except KeyError:
            raise FormulaNotFound(f"Unknown variable {variable_id!r} in formula {self.id!r}") from None

    def snapshot(self) -> dict[str, float]:
        """Current value of every variable, coerced to plain floats."""
        return {vid: float(v.value) for vid, v in self.variables.items()}


class FormulaGroup(BaseModel):
    """A named section of the catalog."""
    id: str
    name: str
    forms: dict[str, Formula]


class Catalog(BaseModel):
    """All formula groups, keyed by group id."""
    groups: dict[str, FormulaGroup]

    def get_group(self, group_id: str) -> FormulaGroup:
        try:
            return self.groups[group_id]
        except KeyError:
            raise FormulaNotFound(f"Unknown group {group_id!r}") from None

    def get_form(self, group_id: str, form_id: str) -> Formula:
        group = self.get_group(group_id)
        try:
            return group.forms[form_id]
        except KeyError:
            raise FormulaNotFound(f"Unknown formula {form_id!r} in group {group_id!r}") from None

    def iter_forms(self):
        """Yield (group_id, form_id, formula) in catalog order."""
        for group_id, group in self.groups.items():
            for form_id, form in group.forms.items():
                yield group_id, form_id, form
