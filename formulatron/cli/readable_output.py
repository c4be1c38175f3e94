"""
Helpers to turn formulas and catalog listings into compact, human-readable
console tables.
"""

from __future__ import annotations

import math
from typing import Any

from formulatron.models.catalog import Catalog, Formula, Variable


def _fmt_number(value: Any, zero_default: str = "n/a") -> str:
    """Safely format a float, falling back for missing or non-finite values."""
    try:
        fval = float(value)
    except (TypeError, ValueError):
        return zero_default
    if not math.isfinite(fval):
        return zero_default
    if fval == int(fval) and abs(fval) < 1e15:
        return f"{int(fval)}"
    return f"{fval:g}"


def format_scientific(variable: Variable) -> str:
    """Render a variable's display fields, preferring text still being typed."""
    typed_mantissa = variable.pending.get("mantissa")
    typed_exponent = variable.pending.get("exponent")
    if typed_mantissa is None and not math.isfinite(variable.mantissa):
        return "n/a"
    mantissa = typed_mantissa if typed_mantissa is not None else _fmt_number(variable.mantissa)
    exponent = typed_exponent if typed_exponent is not None else _fmt_number(variable.exponent)
    return f"{mantissa} × 10^{exponent}"


def format_formula(formula: Formula) -> list[str]:
    """Lines describing one formula: header, description, one row per variable."""
    lines = [f"{formula.name} [{formula.id}]"]
    if formula.description:
        lines.append(f"  {formula.description}")
    name_width = max(len(v.name) for v in formula.variables.values())
    for variable in formula.variables.values():
        unit = f" {variable.unit}" if variable.unit else ""
        lines.append(
            f"  {variable.prefix or '  ':<2} {variable.symbol:<3} "
            f"{variable.name:<{name_width}} = {format_scientific(variable)}{unit}"
        )
    lines.append(f"  order: {' -> '.join(formula.order)}")
    return lines


def print_formula(formula: Formula) -> None:
    for line in format_formula(formula):
        print(line)


def print_catalog(catalog: Catalog) -> None:
    """Print every group and the formulas it contains."""
    for group_id, group in catalog.groups.items():
        print(f"{group.name} [{group_id}]")
        for form_id, form in group.forms.items():
            symbols = ", ".join(v.symbol for v in form.variables.values())
            print(f"  {form_id:<22} {form.name} ({symbols})")
