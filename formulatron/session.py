"""
Calculator session: the event contract a presentation layer drives.

A Calculator owns its own catalog. Each user interaction maps to exactly
one call:

- typing into a mantissa/exponent field -> on_input
- leaving a field (blur/change)         -> on_commit
- focusing a field                      -> on_focus
- picking a unit                        -> on_unit_change
"""

import logging
from typing import Mapping, Optional, Union

from formulatron.catalog.loader import build_catalog
from formulatron.config import EngineSettings
from formulatron.engine.recalc import recalculate
from formulatron.engine.reorder import reorder
from formulatron.models.catalog import Catalog, Formula, FormulaGroup, Variable
from formulatron.physics.units import kind_of, units_of_kind

logger = logging.getLogger(__name__)


class Calculator:
    """
    One user's calculator state.

    Not thread-safe: a session is driven by a single caller, one event at a
    time. Create one Calculator per session; never share a catalog.
    """

    def __init__(
        self,
        catalog: Optional[Catalog] = None,
        settings: Optional[EngineSettings] = None,
    ):
        self.settings = settings or EngineSettings()
        self.catalog = catalog if catalog is not None else build_catalog(settings=self.settings)

    def groups(self) -> list[FormulaGroup]:
        return list(self.catalog.groups.values())

    def form(self, group_id: str, form_id: str) -> Formula:
        return self.catalog.get_form(group_id, form_id)

    def variable(self, group_id: str, form_id: str, variable_id: str) -> Variable:
        return self.form(group_id, form_id).get_variable(variable_id)

    def on_input(
        self,
        group_id: str,
        form_id: str,
        variable_id: str,
        field: str,
        raw_value: Union[str, float, int, None],
    ) -> Formula:
        """A keystroke in a mantissa or exponent field."""
        return recalculate(
            self.form(group_id, form_id),
            variable_id,
            self_recompute=False,
            field=field,
            raw=raw_value,
            settings=self.settings,
        )

    def on_commit(self, group_id: str, form_id: str, variable_id: str) -> Formula:
        """A field lost focus or its value was committed."""
        return recalculate(
            self.form(group_id, form_id),
            variable_id,
            self_recompute=True,
            settings=self.settings,
        )

    def on_focus(self, group_id: str, form_id: str, variable_id: str) -> Formula:
        """A field gained focus: its variable becomes the end of the chain."""
        return reorder(self.form(group_id, form_id), variable_id, self.settings)

    def on_unit_change(
        self,
        group_id: str,
        form_id: str,
        variable_id: str,
        new_unit: str,
    ) -> Formula:
        """
        A new display unit was picked.

        Raises:
            UnitNotFound: If `new_unit` is not registered
            IncompatibleUnits: If `new_unit` measures a different kind
        """
        return recalculate(
            self.form(group_id, form_id),
            variable_id,
            self_recompute=True,
            new_unit=new_unit,
            settings=self.settings,
        )

    def unit_choices(self, group_id: str, form_id: str, variable_id: str) -> list[str]:
        """
        Units offered for a variable: every unit of its kind.

        Dimensionless variables have no choices. A variable whose unit is
        not registered raises UnitNotFound rather than falling back.
        """
        variable = self.variable(group_id, form_id, variable_id)
        if variable.unit is None:
            return []
        return units_of_kind(kind_of(variable.unit))

    def solve(
        self,
        group_id: str,
        form_id: str,
        assignments: Mapping[str, float],
        units: Optional[Mapping[str, str]] = None,
    ) -> Formula:
        """
        Replay the events for typing each assigned value in turn.

        For every assignment: optional unit change, focus, enter the number
        as mantissa with exponent 0, then commit. Values are in the
        variable's display unit.
        """
        units = units or {}
        form = self.form(group_id, form_id)
        for variable_id, unit in units.items():
            if variable_id not in assignments:
                self.on_unit_change(group_id, form_id, variable_id, unit)
        for variable_id, number in assignments.items():
            form.get_variable(variable_id)
            if variable_id in units:
                self.on_unit_change(group_id, form_id, variable_id, units[variable_id])
            self.on_focus(group_id, form_id, variable_id)
            self.on_input(group_id, form_id, variable_id, "exponent", 0)
            self.on_input(group_id, form_id, variable_id, "mantissa", number)
            self.on_commit(group_id, form_id, variable_id)
            logger.debug("Set %s/%s %s = %s", group_id, form_id, variable_id, number)
        return form
