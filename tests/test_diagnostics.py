"""Tests for the design-check rules."""

import pytest

from hydrohead.core.config import DesignLimits
from hydrohead.core.diagnostics import check_operating_point
from hydrohead.core.pump_head import calculate
from hydrohead.core.system import Fitting, FluidType, LoopType, Section, System
from hydrohead.utils.validation import Severity


def _system(**kwargs):
    sys_ = System(**kwargs)
    sys_.add_section(Section(flow_gpm=10.0, pipe_material="copper_type_l", pipe_size="1", length_ft=100.0, name="Run"))
    return sys_


class TestOperatingPointChecks:
    """Test system-level input checks."""

    def test_clean_water_system(self):
        assert check_operating_point(_system(), 0.0, 0.15, (32.0, 220.0), DesignLimits()).messages == []

    def test_static_head_on_closed_loop_is_info(self):
        """Static head entered for a closed loop is noted, not applied."""
        result = check_operating_point(_system(static_head_ft=30.0), 0.0, 0.15, (32.0, 220.0), DesignLimits())
        assert result.codes() == ["static_head_closed_loop"]
        assert result.messages[0].severity is Severity.INFO

    def test_static_head_on_open_loop_is_fine(self):
        sys_ = _system(loop_type=LoopType.OPEN, static_head_ft=30.0)
        assert check_operating_point(sys_, 0.0, 0.15, (32.0, 220.0), DesignLimits()).messages == []

    def test_temperature_outside_table(self):
        result = calculate(_system(fluid_temp_f=250.0))
        assert "temperature_clamped" in result.warnings.codes()

    def test_glycol_concentration_clamped(self):
        """75 % is clamped to 60 %, which is still above the 50 % threshold."""
        result = calculate(_system(fluid_type=FluidType.PROPYLENE_GLYCOL, glycol_concentration=75.0))
        codes = result.warnings.codes()
        assert "concentration_clamped" in codes
        assert "glycol_concentration_high" in codes

    def test_water_concentration_not_checked(self):
        """Water ignores the concentration, so nothing is clamped."""
        result = calculate(_system(glycol_concentration=75.0))
        assert "concentration_clamped" not in result.warnings.codes()

    def test_glycol_concentration_high(self):
        result = calculate(_system(fluid_type=FluidType.ETHYLENE_GLYCOL, glycol_concentration=55.0))
        codes = result.warnings.codes()
        assert "glycol_concentration_high" in codes
        assert "concentration_clamped" not in codes

    def test_glycol_at_threshold_is_fine(self):
        result = calculate(_system(fluid_type=FluidType.ETHYLENE_GLYCOL, glycol_concentration=50.0))
        assert "glycol_concentration_high" not in result.warnings.codes()

    def test_glycol_low_temperature(self):
        result = calculate(
            _system(fluid_type=FluidType.PROPYLENE_GLYCOL, glycol_concentration=30.0, fluid_temp_f=35.0)
        )
        assert "glycol_low_temperature" in result.warnings.codes()
        assert "temperature_clamped" not in result.warnings.codes()

    def test_safety_factor_clamped(self):
        result = calculate(_system(safety_factor=-0.1))
        assert "safety_factor_clamped" in result.warnings.codes()
        assert result.safety_factor == 0.0

    def test_custom_limits(self):
        limits = DesignLimits(glycol_concentration_warning=25.0)
        result = calculate(
            _system(fluid_type=FluidType.PROPYLENE_GLYCOL, glycol_concentration=30.0), limits=limits
        )
        assert "glycol_concentration_high" in result.warnings.codes()


class TestTotalsChecks:
    """Test friction-rate band and fitting summaries."""

    def test_friction_rate_high(self):
        """4 GPM through 1/2 in. copper is well above 4 ft/100 ft."""
        sys_ = System()
        sys_.add_section(Section(flow_gpm=4.0, pipe_material="copper_type_l", pipe_size="1/2", length_ft=100.0))
        result = calculate(sys_)
        assert "friction_rate_high" in result.warnings.codes()
        assert result.friction_rate_ft_per_100ft > 4.0

    def test_friction_rate_low(self):
        """10 GPM through 2 in. copper is slow and nearly friction-free."""
        sys_ = System()
        sys_.add_section(Section(flow_gpm=10.0, pipe_material="copper_type_l", pipe_size="2", length_ft=100.0))
        result = calculate(sys_)
        codes = result.warnings.codes()
        assert "friction_rate_low" in codes
        assert "velocity_low" in codes

    def test_friction_rate_band_configurable(self):
        sys_ = System()
        sys_.add_section(Section(flow_gpm=4.0, pipe_material="copper_type_l", pipe_size="1/2", length_ft=100.0))
        result = calculate(sys_, limits=DesignLimits(friction_rate_max_ft_per_100ft=100.0))
        assert "friction_rate_high" not in result.warnings.codes()

    def test_no_friction_rate_without_flow(self):
        sys_ = System()
        sys_.add_section(Section(flow_gpm=0.0, length_ft=100.0))
        codes = calculate(sys_).warnings.codes()
        assert "friction_rate_low" not in codes
        assert "friction_rate_high" not in codes

    def test_no_friction_rate_without_length(self):
        sys_ = System()
        sys_.add_section(Section(flow_gpm=10.0, length_ft=0.0))
        codes = calculate(sys_).warnings.codes()
        assert not any(code.startswith("friction_rate") for code in codes)

    def test_default_cv_summary(self):
        sys_ = _system()
        sys_.sections[0].add_fitting(Fitting("strainer_y_type"))
        sys_.sections[0].add_fitting(Fitting("balance_valve"))
        result = calculate(sys_)
        assert result.warnings.codes().count("cv_default") == 2
        summary = [m for m in result.warnings.messages if m.code == "default_cv_summary"]
        assert len(summary) == 1
        assert summary[0].value == 2

    def test_missing_input_summary(self):
        sys_ = _system()
        sys_.sections[0].add_fitting(Fitting("control_valve_2way"))
        sys_.sections[0].add_fitting(Fitting("heat_exchanger_plate"))
        result = calculate(sys_)
        codes = result.warnings.codes()
        assert "cv_missing" in codes
        assert "dp_missing" in codes
        assert "missing_input_summary" in codes

    def test_zero_dp_override_still_flagged(self):
        """A coil entered with a 0 ft drop is reported as missing its drop."""
        sys_ = _system()
        sys_.sections[0].add_fitting(Fitting("coil_ahu", dp_override_ft=0.0))
        result = calculate(sys_)
        assert "dp_missing" in result.warnings.codes()
        assert result.sections[0].fittings_loss_ft == 0.0

    def test_section_messages_prefixed_and_tagged(self):
        sys_ = _system()
        sys_.sections[0].add_fitting(Fitting("boiler"))
        result = calculate(sys_)
        msg = next(m for m in result.warnings.messages if m.code == "dp_missing")
        assert msg.message.startswith("Run:")
        assert msg.section_id == sys_.sections[0].id

    def test_warnings_do_not_invalidate(self):
        sys_ = _system(fluid_temp_f=250.0)
        sys_.sections[0].add_fitting(Fitting("boiler"))
        result = calculate(sys_)
        assert result.warnings.is_valid
        assert result.warnings.has_warnings


@pytest.mark.parametrize("loop, limit", [(LoopType.CLOSED, 8.0), (LoopType.OPEN, 6.0)])
def test_velocity_limit_by_loop_type(loop, limit):
    assert DesignLimits().max_velocity_for(loop) == limit
