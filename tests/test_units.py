"""
Tests for the unit registry.
"""

import pytest

from formulatron.errors import UnitNotFound, IncompatibleUnits
from formulatron.physics.units import (
    UNIT_KINDS,
    kind_of,
    factor_of,
    units_of_kind,
    base_unit_of,
    unit_ratio,
)


class TestLookup:
    """Tests for kind and factor lookup."""

    def test_kind_of(self):
        assert kind_of("parsecs") == "length"
        assert kind_of("arcseconds/year") == "angular_speed"
        assert kind_of("M⊙") == "mass"

    def test_base_units_have_factor_one(self):
        assert factor_of("meters") == pytest.approx(1.0)
        assert factor_of("kilograms") == pytest.approx(1.0)
        assert factor_of("meters/second") == pytest.approx(1.0)

    @pytest.mark.parametrize("unit, factor", [
        ("kilometers", 1e3),
        ("parsecs", 3.0857e16),
        ("megaparsecs", 3.0857e22),
        ("arcseconds", 1 / 3600),
        ("radians", 57.29578),
        ("hours", 3600),
        ("years", 31557600),
        ("L⊙", 3.828e26),
        ("kilometers/second/megaparsec", 3.2408e-20),
        ("arcseconds/year", 1 / 3600 / 31557600),
        ("rankines", 5 / 9),
    ])
    def test_factors(self, unit, factor):
        assert factor_of(unit) == pytest.approx(factor, rel=1e-3)

    def test_unknown_unit_raises(self):
        with pytest.raises(UnitNotFound):
            kind_of("furlongs")
        with pytest.raises(UnitNotFound):
            factor_of("furlongs")
        with pytest.raises(UnitNotFound):
            kind_of(None)

    def test_unit_not_found_is_lookup_error(self):
        with pytest.raises(LookupError, match="furlongs"):
            factor_of("furlongs")


class TestRegistryInvariants:
    """Tests for properties every declared unit must have."""

    def test_every_unit_in_exactly_one_kind(self):
        names = [name for _, units in UNIT_KINDS.values() for name in units]
        assert len(names) == len(set(names))
        for kind, (_, units) in UNIT_KINDS.items():
            for name in units:
                assert kind_of(name) == kind

    def test_all_factors_positive(self):
        for _, units in UNIT_KINDS.values():
            for name in units:
                assert factor_of(name) > 0


class TestUnitsOfKind:
    """Tests for unit choices."""

    def test_declared_order(self):
        assert units_of_kind("angle") == [
            "milliarcseconds", "arcseconds", "arcminutes", "degrees", "radians",
        ]

    def test_unknown_kind(self):
        with pytest.raises(UnitNotFound):
            units_of_kind("luminosity-per-fortnight")
        with pytest.raises(UnitNotFound):
            base_unit_of("nope")

    def test_base_unit(self):
        assert base_unit_of("length") == "meter"


class TestUnitRatio:
    """Tests for the display/default unit ratio."""

    def test_same_unit(self):
        assert unit_ratio("parsecs", "parsecs") == pytest.approx(1.0)

    def test_ratio_direction(self):
        """1 kilometer displayed is 1000 in meter terms."""
        assert unit_ratio("kilometers", "meters") == pytest.approx(1000.0)
        assert unit_ratio("kiloparsecs", "megaparsecs") == pytest.approx(1e-3)

    def test_incompatible_kinds(self):
        with pytest.raises(IncompatibleUnits):
            unit_ratio("grams", "meters")

    def test_incompatible_is_value_error(self):
        with pytest.raises(ValueError):
            unit_ratio("days", "parsecs")
