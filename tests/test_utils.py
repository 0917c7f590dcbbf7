"""Tests for utility modules."""

import numpy as np
import pytest

from hydrohead.utils.constants import FT_WATER_PER_PSI, G_FT_S2, GPM_PER_CFS, WHP_CONSTANT
from hydrohead.utils.interpolation import blend, bracket, linear_interp_1d
from hydrohead.utils.units import convert, display, temperature_to_f
from hydrohead.utils.validation import (
    ValidationResult,
    clamp,
    validate_finite,
    validate_non_negative,
    validate_positive,
)


class TestConstants:
    def test_gravity(self):
        assert G_FT_S2 == pytest.approx(32.174)

    def test_gpm_per_cfs(self):
        assert GPM_PER_CFS == pytest.approx(448.831)

    def test_head_per_psi(self):
        assert FT_WATER_PER_PSI == pytest.approx(2.31)

    def test_whp(self):
        assert WHP_CONSTANT == pytest.approx(3960.0)


class TestInterpolation:
    x = np.array([0.0, 10.0, 20.0])
    y = np.array([1.0, 3.0, 4.0])

    def test_exact_knot(self):
        assert linear_interp_1d(self.x, self.y, 10.0) == 3.0

    def test_midpoint(self):
        assert linear_interp_1d(self.x, self.y, 15.0) == pytest.approx(3.5)

    def test_clamped(self):
        """Queries outside the knots return the end values."""
        assert linear_interp_1d(self.x, self.y, -5.0) == 1.0
        assert linear_interp_1d(self.x, self.y, 99.0) == 4.0

    def test_array_query(self):
        out = linear_interp_1d(self.x, self.y, np.array([5.0, 20.0]))
        np.testing.assert_allclose(out, [2.0, 4.0])

    def test_bracket(self):
        """An exact key brackets itself; out-of-range keys clamp to the ends."""
        keys = np.array([0.0, 20.0, 30.0, 40.0])
        assert bracket(keys, 25.0) == (20.0, 30.0)
        assert bracket(keys, 30.0) == (30.0, 30.0)
        assert bracket(keys, -1.0) == (0.0, 0.0)
        assert bracket(keys, 70.0) == (40.0, 40.0)

    def test_blend(self):
        assert blend(1.0, 3.0, 15.0, 10.0, 20.0) == pytest.approx(2.0)
        assert blend(1.0, 3.0, 10.0, 10.0, 10.0) == 1.0


class TestUnits:
    def test_temperature(self):
        assert temperature_to_f(100.0, "degC") == pytest.approx(212.0)
        assert temperature_to_f(70.0, "degF") == pytest.approx(70.0)

    def test_convert_pressure(self):
        assert convert(1.0, "psi", "kPa") == pytest.approx(6.894757, rel=1e-5)

    def test_convert_flow(self):
        assert convert(100.0, "gallon / minute", "liter / second") == pytest.approx(6.309, rel=1e-3)

    def test_convert_power(self):
        assert convert(1.0, "hp", "kW") == pytest.approx(0.7457, rel=1e-3)

    def test_display_us(self):
        assert display(12.0, "head") == (12.0, "ft")
        assert display(50.0, "flow", "us") == (50.0, "GPM")

    def test_display_si(self):
        """Values are converted, not just relabelled."""
        value, label = display(12.0, "head", "SI")
        assert label == "m"
        assert value == pytest.approx(3.6576)


class TestValidation:
    def test_empty_result_valid(self):
        result = ValidationResult()
        assert result.is_valid
        assert not result.has_warnings

    def test_severities(self):
        result = ValidationResult()
        result.info("a", "note", code="n")
        result.warning("b", "careful", code="w")
        assert result.is_valid
        assert result.has_warnings
        result.error("c", "broken", code="e")
        assert not result.is_valid
        assert [m.code for m in result.errors] == ["e"]
        assert result.codes() == ["n", "w", "e"]

    def test_merge(self):
        a, b = ValidationResult(), ValidationResult()
        a.info("x", "one")
        b.warning("y", "two")
        a.merge(b)
        assert len(a.messages) == 2

    def test_to_dict(self):
        result = ValidationResult()
        result.warning("v", "fast", code="velocity_high", section_id="s1", value=9.0, limit=8.0)
        data = result.messages[0].to_dict()
        assert data["severity"] == "warning"
        assert data["section_id"] == "s1"

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), "3", True, None])
    def test_validate_finite_rejects(self, value):
        """Strings and booleans are not numbers here, even when they convert."""
        result = ValidationResult()
        assert not validate_finite("x", value, result)
        assert result.codes() == ["not_finite"]

    def test_validate_finite_accepts(self):
        result = ValidationResult()
        assert validate_finite("x", 3, result)
        assert validate_finite("y", -2.5, result)
        assert result.is_valid

    def test_positive_and_non_negative(self):
        result = ValidationResult()
        validate_positive("a", 0.0, result)
        validate_non_negative("b", 0.0, result)
        validate_non_negative("c", -1.0, result)
        assert result.codes() == ["not_positive", "negative"]

    def test_clamp(self):
        assert clamp(75.0, 0.0, 60.0) == 60.0
        assert clamp(-1.0, 0.0, 60.0) == 0.0
        assert clamp(30.0, 0.0, 60.0) == 30.0
