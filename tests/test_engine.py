"""
Tests for the recalculation engine and the reorder policy.
"""

import math

import pytest

from formulatron.engine.recalc import recalculate, evaluate
from formulatron.engine.reorder import reorder
from formulatron.errors import FormulaNotFound, UnitNotFound, IncompatibleUnits
from formulatron.physics.constants import G_SI as G


def _type(formula, variable_id, field, raw):
    return recalculate(formula, variable_id, self_recompute=False, field=field, raw=raw)


def _commit(formula, variable_id):
    return recalculate(formula, variable_id, self_recompute=True)


def _values(formula):
    return {vid: v.value for vid, v in formula.variables.items()}


def _display(formula):
    return {
        vid: (v.mantissa, v.exponent, dict(v.pending))
        for vid, v in formula.variables.items()
    }


def _assert_display_matches_value(formula):
    for variable in formula.variables.values():
        if math.isfinite(variable.value):
            shown = variable.mantissa * 10.0 ** variable.exponent * variable.unit_ratio
            assert shown == pytest.approx(variable.value, rel=1e-4)


class TestChain:
    """Tests for walking the chain."""

    def test_edit_head_propagates(self, chain):
        _type(chain, "A", "mantissa", "7")
        assert chain.get_variable("A").value == 7.0
        assert chain.get_variable("B").value == 14.0
        assert chain.get_variable("C").value == 21.0

    def test_commit_keeps_head_edit(self, chain):
        _type(chain, "A", "mantissa", "7")
        _commit(chain, "A")
        assert _values(chain) == {"A": 7.0, "B": 14.0, "C": 21.0}

    def test_focused_edit_converges_on_commit(self, chain):
        reorder(chain, "A")
        assert chain.order == ["B", "C", "A"]
        _type(chain, "A", "mantissa", "7")
        assert chain.get_variable("B").value == 14.0
        assert chain.get_variable("C").value == 21.0
        _commit(chain, "A")
        assert _values(chain) == {"A": 7.0, "B": 14.0, "C": 21.0}

    def test_later_links_see_earlier_results(self, chain):
        """C is derived from the B computed in the same pass, not the old B."""
        _type(chain, "A", "mantissa", "5")
        assert chain.get_variable("C").value == 15.0

    def test_typing_does_not_overwrite_edited_field(self, newton):
        reorder(newton, "F")
        _type(newton, "F", "mantissa", "5.0")
        F = newton.get_variable("F")
        assert F.pending == {"mantissa": "5.0"}
        assert F.mantissa == 5.0
        assert F.value == pytest.approx(50.0)

    def test_commit_clears_pending(self, newton):
        reorder(newton, "F")
        _type(newton, "F", "mantissa", "5.0")
        _commit(newton, "F")
        assert newton.get_variable("F").pending == {}
        _assert_display_matches_value(newton)


class TestScenarios:
    """End-to-end editing scenarios on catalog formulas."""

    def test_distance_modulus(self, distance_modulus):
        assert distance_modulus.order[-1] == "m"
        _type(distance_modulus, "m", "mantissa", "1")
        _type(distance_modulus, "m", "exponent", "1")
        _commit(distance_modulus, "m")
        d = distance_modulus.get_variable("d")
        assert d.value == pytest.approx(1e4)
        assert (d.mantissa, d.exponent) == (1.0, 4)
        assert distance_modulus.get_variable("M").value == pytest.approx(-5.0)
        assert distance_modulus.get_variable("m").value == pytest.approx(10.0)

    def test_distance_modulus_same_value(self, distance_modulus):
        _type(distance_modulus, "m", "mantissa", "5")
        _type(distance_modulus, "m", "exponent", "0")
        _commit(distance_modulus, "m")
        assert distance_modulus.get_variable("d").value == pytest.approx(1000.0)
        assert distance_modulus.get_variable("M").value == pytest.approx(-5.0)
        assert distance_modulus.get_variable("m").value == pytest.approx(5.0)

    def test_newton_edit_head(self, newton):
        _type(newton, "F", "mantissa", "7.4")
        _commit(newton, "F")
        values = _values(newton)
        assert values["F"] == pytest.approx(74.0)
        assert values["r"] == pytest.approx(math.sqrt(G * 2e15 / 74.0))
        assert values["m1"] == pytest.approx(1.0)
        assert values["m2"] == pytest.approx(2e15)
        assert G * values["m1"] * values["m2"] / values["r"] ** 2 == pytest.approx(74.0)
        _assert_display_matches_value(newton)

    def test_hubble_two_variables(self, hubble):
        _type(hubble, "d", "mantissa", "2")
        assert hubble.get_variable("v").value == pytest.approx(140.0)
        _commit(hubble, "d")
        assert hubble.get_variable("d").value == pytest.approx(2.0)
        assert hubble.get_variable("v").value == pytest.approx(140.0)


class TestFailureIsState:
    """Non-finite input and out-of-domain results halt without raising."""

    def test_partial_input_halts_before_walk(self, newton):
        before = _display(newton)
        _type(newton, "m1", "mantissa", "-")
        m1 = newton.get_variable("m1")
        assert math.isnan(m1.value)
        assert m1.pending == {"mantissa": "-"}
        after = _display(newton)
        for vid in ("F", "r", "m2"):
            assert after[vid] == before[vid]

    def test_halt_is_idempotent(self, newton):
        before = _display(newton)
        _type(newton, "m1", "mantissa", "-")
        _type(newton, "m1", "exponent", "-")
        _commit(newton, "m1")
        after = _display(newton)
        assert {k: v for k, v in after.items() if k != "m1"} == \
            {k: v for k, v in before.items() if k != "m1"}
        assert newton.get_variable("m1").pending == {"mantissa": "-", "exponent": "-"}

    def test_partial_head_input_halts(self, newton):
        before = _display(newton)
        _type(newton, "F", "mantissa", "-")
        after = _display(newton)
        for vid in ("r", "m1", "m2"):
            assert after[vid] == before[vid]
        assert newton.get_variable("F").pending == {"mantissa": "-"}

    def test_head_recovers_after_partial_input(self, newton):
        _type(newton, "F", "mantissa", "-")
        _type(newton, "F", "mantissa", "5")
        _commit(newton, "F")
        values = _values(newton)
        assert values["F"] == pytest.approx(50.0)
        assert values["r"] == pytest.approx(math.sqrt(G * 2e15 / 50.0))
        assert values["m1"] == pytest.approx(1.0)
        assert values["m2"] == pytest.approx(2e15)
        assert newton.get_variable("F").pending == {}

    def test_domain_error_stores_nan(self, newton):
        _type(newton, "F", "mantissa", "0")
        r = newton.get_variable("r")
        assert math.isnan(r.value)
        assert math.isnan(r.mantissa)
        assert r.pending == {}
        assert newton.get_variable("m1").value == 1.0

    def test_head_recovers_after_domain_error(self, newton):
        _type(newton, "F", "mantissa", "0")
        assert math.isnan(newton.get_variable("r").value)
        _type(newton, "F", "mantissa", "5")
        _commit(newton, "F")
        r = newton.get_variable("r")
        assert r.value == pytest.approx(math.sqrt(G * 2e15 / 50.0))
        assert newton.get_variable("F").value == pytest.approx(50.0)

    def test_derived_nan_does_not_block_other_edits(self, newton):
        _type(newton, "F", "mantissa", "0")
        _type(newton, "m2", "mantissa", "3")
        F = newton.get_variable("F")
        assert math.isnan(F.value)
        assert F.pending == {}
        _type(newton, "F", "mantissa", "5")
        assert math.isfinite(newton.get_variable("r").value)

    def test_out_of_range_relation(self, catalog):
        form = catalog.get_form("stellar-relations", "mass-luminosity")
        reorder(form, "M")
        _type(form, "M", "mantissa", "2")
        assert math.isfinite(form.get_variable("L").value)
        _type(form, "M", "exponent", "3")
        assert form.get_variable("M").value == pytest.approx(2000.0)
        assert math.isnan(form.get_variable("L").value)

    def test_recovers_after_valid_input(self, newton):
        reorder(newton, "F")
        _type(newton, "F", "mantissa", "0")
        assert math.isnan(newton.get_variable("r").value)
        _type(newton, "F", "mantissa", "5")
        r = newton.get_variable("r")
        assert r.value == pytest.approx(math.sqrt(G * 2e15 / 50.0))
        assert r.pending == {}

    def test_evaluate_maps_errors_to_nan(self, newton):
        r = newton.get_variable("r")
        assert math.isnan(evaluate(r, {"F": 0.0, "m1": 1.0, "m2": 1.0}))
        assert math.isnan(evaluate(r, {"F": -1.0, "m1": 1.0, "m2": 1.0}))


class TestReorder:
    """Tests for moving a variable to the end of the chain."""

    def test_moves_to_end(self, newton):
        reorder(newton, "r")
        assert newton.order == ["F", "m1", "m2", "r"]
        prefixes = {vid: v.prefix for vid, v in newton.variables.items()}
        assert prefixes == {"F": "⭐", "m1": "", "m2": "", "r": "➡️"}

    def test_last_is_noop(self, newton):
        reorder(newton, "m2")
        assert newton.order == ["F", "r", "m1", "m2"]

    def test_values_unchanged(self, newton):
        before = _values(newton)
        reorder(newton, "F")
        assert _values(newton) == before
        assert newton.order == ["r", "m1", "m2", "F"]

    def test_unknown_variable(self, newton):
        with pytest.raises(FormulaNotFound):
            reorder(newton, "q")
        assert newton.order == ["F", "r", "m1", "m2"]


class TestUnitChange:
    """Tests for switching a variable's display unit."""

    def test_display_is_reinterpreted(self, hubble):
        recalculate(hubble, "d", self_recompute=True, new_unit="kiloparsecs")
        d = hubble.get_variable("d")
        assert d.unit == "kiloparsecs"
        assert d.default_unit == "megaparsecs"
        assert d.unit_ratio == pytest.approx(1e-3)
        assert (d.mantissa, d.exponent) == (1.0, 0)
        assert d.value == pytest.approx(1e-3)
        assert hubble.get_variable("v").value == pytest.approx(0.07)

    def test_equivalent_entry_gives_same_result(self, hubble):
        recalculate(hubble, "d", self_recompute=True, new_unit="kiloparsecs")
        _type(hubble, "d", "exponent", "3")
        _commit(hubble, "d")
        d = hubble.get_variable("d")
        assert d.value == pytest.approx(1.0)
        assert (d.mantissa, d.exponent) == (1.0, 3)
        assert hubble.get_variable("v").value == pytest.approx(70.0)
        _assert_display_matches_value(hubble)

    def test_derived_variable_in_other_unit(self, hubble):
        recalculate(hubble, "v", self_recompute=True, new_unit="meters/second")
        v = hubble.get_variable("v")
        assert v.unit_ratio == pytest.approx(1e-3)
        _type(hubble, "d", "mantissa", "2")
        _type(hubble, "d", "exponent", "0")
        assert v.value == pytest.approx(140.0)
        assert (v.mantissa, v.exponent) == (1.4, 5)

    def test_unknown_unit_leaves_variable(self, hubble):
        with pytest.raises(UnitNotFound):
            recalculate(hubble, "d", self_recompute=True, new_unit="furlongs")
        d = hubble.get_variable("d")
        assert d.unit == "megaparsecs"
        assert d.unit_ratio == 1.0

    def test_incompatible_unit(self, hubble):
        with pytest.raises(IncompatibleUnits):
            recalculate(hubble, "d", self_recompute=True, new_unit="seconds")
        assert hubble.get_variable("d").unit == "megaparsecs"

    def test_dimensionless_variable(self, distance_modulus):
        with pytest.raises(ValueError):
            recalculate(distance_modulus, "M", self_recompute=True, new_unit="parsecs")


class TestBadEvents:
    """Tests for malformed events."""

    def test_unknown_field(self, newton):
        with pytest.raises(ValueError):
            recalculate(newton, "F", self_recompute=False, field="value", raw="3")

    def test_unknown_variable(self, newton):
        with pytest.raises(FormulaNotFound):
            recalculate(newton, "q", self_recompute=True)
