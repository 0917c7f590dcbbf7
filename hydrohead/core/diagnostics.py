"""Design checks for hydronic sections and systems.

Every finding is a ``ValidationMessage`` with a stable ``code``:

Section checks
    velocity_erosion, velocity_high, velocity_low,
    cv_default, cv_missing, dp_missing
System checks
    static_head_closed_loop, friction_rate_high, friction_rate_low,
    default_cv_summary, missing_input_summary,
    glycol_concentration_high, glycol_low_temperature,
    concentration_clamped, safety_factor_clamped, temperature_clamped
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from hydrohead.core.config import DesignLimits
from hydrohead.core.system import LoopType, System
from hydrohead.utils.validation import ValidationResult

if TYPE_CHECKING:
    from hydrohead.core.hydraulics import SectionCalculation


def check_section(
    calc: SectionCalculation,
    loop_type: LoopType,
    limits: DesignLimits,
) -> ValidationResult:
    """Velocity and fitting-input checks for one solved section.

    Messages are prefixed with the section name.  No velocity check is
    made for sections without flow.
    """
    result = ValidationResult()
    name = calc.section_name
    sid = calc.section_id
    v = calc.velocity_fps

    if calc.flow_gpm > 0:
        max_v = limits.max_velocity_for(loop_type)
        if v > limits.erosion_velocity_fps:
            result.warning(
                "velocity_fps",
                f"{name}: velocity {v:.1f} ft/s exceeds {limits.erosion_velocity_fps:.0f} ft/s, pipe erosion risk",
                code="velocity_erosion", section_id=sid, value=v, limit=limits.erosion_velocity_fps,
            )
        elif v > max_v:
            result.warning(
                "velocity_fps",
                f"{name}: high velocity {v:.1f} ft/s (recommend < {max_v:.0f} ft/s for {loop_type.value} loops)",
                code="velocity_high", section_id=sid, value=v, limit=max_v,
            )
        elif v < limits.min_velocity_fps:
            result.info(
                "velocity_fps",
                f"{name}: low velocity {v:.1f} ft/s, air and sediment may not be carried",
                code="velocity_low", section_id=sid, value=v, limit=limits.min_velocity_fps,
            )

    for line in calc.fitting_losses:
        if line.cv_is_default:
            result.warning(
                "cv",
                f"{name}: {line.fitting_type} uses catalog default Cv {line.cv_used:g}, verify against schedule",
                code="cv_default", section_id=sid, value=line.cv_used,
            )
        if line.missing_input:
            if line.method == "cv":
                result.warning(
                    "cv",
                    f"{name}: {line.fitting_type} has no Cv, loss counted as 0",
                    code="cv_missing", section_id=sid,
                )
            else:
                result.warning(
                    "dp_override_ft",
                    f"{name}: {line.fitting_type} requires a pressure drop, loss counted as 0",
                    code="dp_missing", section_id=sid,
                )
    return result


def check_operating_point(
    system: System,
    concentration: float,
    safety_factor: float,
    temp_range: tuple[float, float],
    limits: DesignLimits,
) -> ValidationResult:
    """System-level input checks made before solving.

    Args:
        system: System as entered.
        concentration: Glycol concentration actually used [%].
        safety_factor: Safety factor actually used.
        temp_range: Tabulated temperature range [°F] for the fluid.
        limits: Design limits.
    """
    result = ValidationResult()
    fluid = system.fluid_type

    if system.loop_type is LoopType.CLOSED and system.static_head_ft != 0:
        result.info(
            "static_head_ft",
            f"Static head of {system.static_head_ft:g} ft is ignored for a closed loop",
            code="static_head_closed_loop", value=system.static_head_ft,
        )

    if fluid.is_glycol:
        if concentration != system.glycol_concentration:
            result.warning(
                "glycol_concentration",
                f"Glycol concentration {system.glycol_concentration:g}% clamped to {concentration:g}%",
                code="concentration_clamped", value=system.glycol_concentration, limit=concentration,
            )
        if concentration > limits.glycol_concentration_warning:
            result.warning(
                "glycol_concentration",
                f"Glycol concentration {concentration:g}% is above {limits.glycol_concentration_warning:g}%, "
                "heat transfer and pumping penalties are high",
                code="glycol_concentration_high", value=concentration,
                limit=limits.glycol_concentration_warning,
            )
        if system.fluid_temp_f < limits.glycol_low_temp_f:
            result.warning(
                "fluid_temp_f",
                f"Glycol at {system.fluid_temp_f:g}°F: verify freeze protection and viscosity",
                code="glycol_low_temperature", value=system.fluid_temp_f, limit=limits.glycol_low_temp_f,
            )

    if safety_factor != system.safety_factor:
        result.warning(
            "safety_factor",
            f"Safety factor {system.safety_factor:g} clamped to {safety_factor:g}",
            code="safety_factor_clamped", value=system.safety_factor, limit=safety_factor,
        )

    t_lo, t_hi = temp_range
    if not t_lo <= system.fluid_temp_f <= t_hi:
        result.warning(
            "fluid_temp_f",
            f"Fluid temperature {system.fluid_temp_f:g}°F is outside the property table "
            f"({t_lo:g}–{t_hi:g}°F), nearest tabulated values used",
            code="temperature_clamped", value=system.fluid_temp_f, limit=(t_lo, t_hi),
        )
    return result


def check_totals(
    sections: Sequence[SectionCalculation],
    limits: DesignLimits,
) -> ValidationResult:
    """Friction-rate band and fitting-input summaries across all sections."""
    result = ValidationResult()

    total_length = sum(s.length_ft for s in sections)
    total_friction = sum(s.pipe_friction_loss_ft for s in sections)
    has_flow = any(s.flow_gpm > 0 for s in sections)
    if total_length > 0 and has_flow:
        rate = total_friction / total_length * 100.0
        lo = limits.friction_rate_min_ft_per_100ft
        hi = limits.friction_rate_max_ft_per_100ft
        if rate > hi:
            result.warning(
                "friction_rate",
                f"Average friction rate {rate:.2f} ft/100 ft is above the {lo:g}–{hi:g} ft/100 ft design band",
                code="friction_rate_high", value=rate, limit=(lo, hi),
            )
        elif rate < lo:
            result.info(
                "friction_rate",
                f"Average friction rate {rate:.2f} ft/100 ft is below the {lo:g}–{hi:g} ft/100 ft design band",
                code="friction_rate_low", value=rate, limit=(lo, hi),
            )

    lines = [line for s in sections for line in s.fitting_losses]
    n_default = sum(1 for line in lines if line.cv_is_default)
    n_missing = sum(1 for line in lines if line.missing_input)
    if n_default:
        result.warning(
            "cv",
            f"{n_default} fitting(s) use catalog default Cv values, verify against equipment schedules",
            code="default_cv_summary", value=n_default,
        )
    if n_missing:
        result.warning(
            "fittings",
            f"{n_missing} fitting(s) are missing required Cv or pressure-drop input",
            code="missing_input_summary", value=n_missing,
        )
    return result
