"""Tests for the fitting resistance catalog."""

import pytest

from hydrohead.core.fittings import (
    CATEGORIES,
    FittingCatalogError,
    FittingData,
    FittingMethod,
    FlowCoefficient,
    LengthRatio,
    ManualDrop,
    UnknownFittingError,
    _parse_resistance,
    cv_head_loss_ft,
    equivalent_length_ft,
    get_fitting,
    has_fitting,
    list_fittings,
)


class TestCatalog:
    """Test catalog loading and look-ups."""

    def test_catalog_size(self):
        assert len(list_fittings()) == 65

    def test_categories(self):
        for category in CATEGORIES:
            items = list_fittings(category)
            assert items
            assert all(f.category == category for f in items)
        assert sum(len(list_fittings(c)) for c in CATEGORIES) == len(list_fittings())

    def test_elbow_is_length_ratio(self):
        elbow = get_fitting("elbow_90_standard")
        assert isinstance(elbow, FittingData)
        assert elbow.resistance == LengthRatio(30.0)
        assert elbow.method is FittingMethod.L_OVER_D
        assert elbow.category == "fitting"
        assert "°" in elbow.display_name

    def test_strainer_has_cv_table(self):
        strainer = get_fitting("strainer_y_type")
        assert strainer.method is FittingMethod.CV
        assert isinstance(strainer.resistance, FlowCoefficient)
        assert strainer.resistance.cv_for_size("1") == 16
        assert strainer.resistance.cv_for_size("2") == 65

    def test_control_valve_requires_cv(self):
        """Control valves carry no catalog Cv; it comes from the valve schedule."""
        valve = get_fitting("control_valve_2way")
        assert valve.resistance == FlowCoefficient()
        assert valve.resistance.cv_for_size("2") is None

    def test_coil_is_manual_drop(self):
        coil = get_fitting("coil_ahu")
        assert coil.resistance == ManualDrop()
        assert coil.method is FittingMethod.MANUAL_DP

    def test_unknown_fitting(self):
        with pytest.raises(UnknownFittingError):
            get_fitting("flux_capacitor")
        with pytest.raises(KeyError):
            get_fitting("flux_capacitor")

    def test_has_fitting(self):
        assert has_fitting("boiler")
        assert not has_fitting("Boiler")


class TestCatalogParsing:
    """Test decoding of catalog records."""

    def test_length_ratio(self):
        assert _parse_resistance("elbow", {"method": "l_over_d", "l_over_d": 30}) == LengthRatio(30.0)

    def test_missing_ratio(self):
        with pytest.raises(FittingCatalogError, match="elbow"):
            _parse_resistance("elbow", {"method": "l_over_d"})

    def test_unknown_method(self):
        with pytest.raises(FittingCatalogError, match="widget"):
            _parse_resistance("widget", {"method": "k_factor"})

    def test_missing_method(self):
        with pytest.raises(FittingCatalogError):
            _parse_resistance("widget", {})

    def test_cv_table_values_are_floats(self):
        res = _parse_resistance("valve", {"method": "cv", "cv_by_size": {"1": 9}})
        assert res == FlowCoefficient(cv_by_size={"1": 9.0})

    def test_manual_drop(self):
        assert _parse_resistance("coil", {"method": "manual_dp"}) == ManualDrop()


class TestFlowCoefficient:
    """Test exact-match Cv look-up."""

    def test_exact_match_only(self):
        """1-1/2 is not interpolated between the 1 and 2 in. entries."""
        res = FlowCoefficient(cv_by_size={"1": 16.0, "2": 65.0})
        assert res.cv_for_size("1-1/2") is None
        assert res.cv_for_size("2") == 65.0

    def test_table_miss_falls_back_to_default(self):
        """A size missing from the table uses the single default Cv."""
        res = FlowCoefficient(default_cv=40.0, cv_by_size={"2": 65.0})
        assert res.cv_for_size("3") == 40.0
        assert res.cv_for_size("2") == 65.0

    def test_default_only(self):
        """Without a size table every size gets the default Cv."""
        assert FlowCoefficient(default_cv=12.5).cv_for_size("anything") == 12.5


class TestLossFormulas:
    """Test the L/D and Cv loss formulas."""

    def test_equivalent_length(self):
        """L/D of 30 on a 1.049 in. bore."""
        assert equivalent_length_ft(30, 1.049) == pytest.approx(2.6225)

    def test_cv_loss_one_psi(self):
        """Q = Cv gives 1 psi, i.e. 2.31 ft of water."""
        assert cv_head_loss_ft(100, 100, 1.0) == pytest.approx(2.31)

    def test_cv_loss_quadratic_in_flow(self):
        """Doubling flow quadruples the loss."""
        assert cv_head_loss_ft(200, 100) == pytest.approx(4 * cv_head_loss_ft(100, 100))

    def test_cv_loss_scales_with_sg(self):
        assert cv_head_loss_ft(50, 25, 1.05) == pytest.approx(1.05 * cv_head_loss_ft(50, 25, 1.0))

    def test_non_positive_cv(self):
        """A zero Cv gives no loss instead of dividing by zero."""
        assert cv_head_loss_ft(100, 0) == 0.0
        assert cv_head_loss_ft(100, -5) == 0.0
