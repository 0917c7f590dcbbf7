"""System pump-head calculation for hydrohead.

``calculate`` is the engine entry point: it validates the inputs, resolves
fluid properties once, solves every section in sort order and aggregates
the section results into a ``SystemResult`` with the pump duty point
(maximum section flow, total pump head) and design-check messages.

Head budget::

    calculated head = pipe friction + fittings + static head (open loops)
    pump head       = calculated head × (1 + safety factor)
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import asdict, dataclass, field
from typing import Any

from hydrohead.core import diagnostics
from hydrohead.core.config import DesignLimits
from hydrohead.core.fittings import has_fitting
from hydrohead.core.fluids import (
    MAX_CONCENTRATION,
    MIN_CONCENTRATION,
    FluidProperties,
    fluid_properties,
    temperature_range,
)
from hydrohead.core.hydraulics import SWAMEE_JAIN, SectionCalculation, solve_section
from hydrohead.core.pipes import PipeDataError, pipe_dimensions
from hydrohead.core.system import LoopType, Section, System, sort_sections
from hydrohead.utils.constants import DEFAULT_PUMP_EFFICIENCY, FT_WATER_PER_PSI, WHP_CONSTANT
from hydrohead.utils.validation import (
    ValidationResult,
    clamp,
    validate_finite,
    validate_non_negative,
    validate_positive,
)

logger = logging.getLogger(__name__)

MIN_SAFETY_FACTOR = 0.0
MAX_SAFETY_FACTOR = 0.5


class HydronicInputError(ValueError):
    """Raised when a system description fails input validation."""

    def __init__(self, validation: ValidationResult):
        self.validation = validation
        details = "; ".join(m.message for m in validation.errors)
        super().__init__(f"Invalid hydronic system input: {details}")


# --- Head / power helpers ---


def head_to_psi(head_ft: float, specific_gravity: float = 1.0) -> float:
    """Convert head [ft of fluid] to pressure [psi]."""
    return head_ft * specific_gravity / FT_WATER_PER_PSI


def psi_to_head(pressure_psi: float, specific_gravity: float = 1.0) -> float:
    """Convert pressure [psi] to head [ft of fluid]."""
    if specific_gravity <= 0:
        return 0.0
    return pressure_psi * FT_WATER_PER_PSI / specific_gravity


def pump_bhp(
    flow_gpm: float,
    head_ft: float,
    specific_gravity: float = 1.0,
    efficiency: float = DEFAULT_PUMP_EFFICIENCY,
) -> float:
    """Pump brake horsepower BHP = Q·H·SG / (3960·η).

    Args:
        flow_gpm: Pump flow [GPM].
        head_ft: Pump head [ft].
        specific_gravity: Fluid specific gravity.
        efficiency: Pump efficiency (0–1].

    Returns:
        Brake horsepower [hp].
    """
    if efficiency <= 0:
        raise ValueError(f"Pump efficiency must be positive, got {efficiency}")
    return flow_gpm * head_ft * specific_gravity / (WHP_CONSTANT * efficiency)


calculate_pump_bhp = pump_bhp


# --- Result ---


@dataclass
class SystemResult:
    """Aggregated pump-head result for a hydronic system."""

    system_id: str
    system_name: str
    fluid: FluidProperties
    sections: list[SectionCalculation] = field(default_factory=list)
    total_pipe_friction_ft: float = 0.0
    total_fittings_loss_ft: float = 0.0
    subtotal_friction_ft: float = 0.0
    static_head_ft: float = 0.0
    calculated_head_ft: float = 0.0
    safety_factor: float = 0.0
    safety_factor_ft: float = 0.0
    total_pump_head_ft: float = 0.0
    total_system_volume_gal: float = 0.0
    total_length_ft: float = 0.0
    max_flow_gpm: float = 0.0
    warnings: ValidationResult = field(default_factory=ValidationResult)

    @property
    def safety_factor_percent(self) -> float:
        return self.safety_factor * 100.0

    @property
    def total_pump_head_psi(self) -> float:
        return head_to_psi(self.total_pump_head_ft, self.fluid.specific_gravity)

    @property
    def estimated_bhp(self) -> float:
        """Brake horsepower at the duty point with the default pump efficiency."""
        return pump_bhp(self.max_flow_gpm, self.total_pump_head_ft, self.fluid.specific_gravity)

    @property
    def friction_rate_ft_per_100ft(self) -> float:
        if self.total_length_ft <= 0:
            return 0.0
        return self.total_pipe_friction_ft / self.total_length_ft * 100.0

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["sections"] = [s.to_dict() for s in self.sections]
        data["warnings"] = [m.to_dict() for m in self.warnings.messages]
        data["safety_factor_percent"] = self.safety_factor_percent
        data["total_pump_head_psi"] = self.total_pump_head_psi
        data["estimated_bhp"] = self.estimated_bhp
        data["friction_rate_ft_per_100ft"] = self.friction_rate_ft_per_100ft
        return data


# --- Validation ---


def validate_system(system: System, sections: Sequence[Section] | None = None) -> ValidationResult:
    """Check a system description for inputs the engine cannot compute with.

    Non-finite numbers, negative lengths or quantities, non-positive Cv
    overrides, negative pressure-drop overrides and unknown materials,
    sizes or fitting types are errors.  Out-of-range concentration and
    safety factor are not: they are clamped by ``calculate``.
    """
    result = ValidationResult()
    sections = system.sections if sections is None else sections

    for name in ("glycol_concentration", "fluid_temp_f", "static_head_ft", "safety_factor"):
        validate_finite(name, getattr(system, name), result)

    for section in sections:
        sid = section.id
        label = section.name
        validate_finite(f"{label}.flow_gpm", section.flow_gpm, result, section_id=sid)
        if validate_finite(f"{label}.length_ft", section.length_ft, result, section_id=sid):
            validate_non_negative(f"{label}.length_ft", section.length_ft, result, section_id=sid)
        try:
            pipe_dimensions(section.pipe_material, section.pipe_size)
        except PipeDataError as exc:
            result.error(f"{label}.pipe", exc.args[0], code="unknown_pipe", section_id=sid)

        for fitting in section.fittings:
            prefix = f"{label}.{fitting.fitting_type}"
            if not has_fitting(fitting.fitting_type):
                result.error(
                    prefix, f"Unknown fitting type '{fitting.fitting_type}'",
                    code="unknown_fitting", section_id=sid,
                )
            if validate_finite(f"{prefix}.quantity", fitting.quantity, result, section_id=sid):
                validate_non_negative(f"{prefix}.quantity", fitting.quantity, result, section_id=sid)
            if fitting.cv_override is not None and validate_finite(
                f"{prefix}.cv_override", fitting.cv_override, result, section_id=sid
            ):
                validate_positive(f"{prefix}.cv_override", fitting.cv_override, result, section_id=sid)
            if fitting.dp_override_ft is not None and validate_finite(
                f"{prefix}.dp_override_ft", fitting.dp_override_ft, result, section_id=sid
            ):
                validate_non_negative(f"{prefix}.dp_override_ft", fitting.dp_override_ft, result, section_id=sid)
    return result


# --- Aggregation ---


def aggregate(
    system: System,
    section_results: Sequence[SectionCalculation],
    fluid: FluidProperties,
) -> SystemResult:
    """Fold solved sections into the system head budget.

    Static head is applied for open loops only; the safety factor is
    clamped to 0–0.5.  No design checks are made here.
    """
    section_results = list(section_results)
    pipe = sum(s.pipe_friction_loss_ft for s in section_results)
    fittings = sum(s.fittings_loss_ft for s in section_results)
    static = system.static_head_ft if system.loop_type is LoopType.OPEN else 0.0
    calculated = pipe + fittings + static
    sf = clamp(system.safety_factor, MIN_SAFETY_FACTOR, MAX_SAFETY_FACTOR)
    margin = calculated * sf

    return SystemResult(
        system_id=system.id,
        system_name=system.name,
        fluid=fluid,
        sections=section_results,
        total_pipe_friction_ft=pipe,
        total_fittings_loss_ft=fittings,
        subtotal_friction_ft=pipe + fittings,
        static_head_ft=static,
        calculated_head_ft=calculated,
        safety_factor=sf,
        safety_factor_ft=margin,
        total_pump_head_ft=calculated + margin,
        total_system_volume_gal=sum(s.volume_gal for s in section_results),
        total_length_ft=sum(s.length_ft for s in section_results),
        max_flow_gpm=max((s.flow_gpm for s in section_results), default=0.0),
    )


def calculate(
    system: System,
    sections: Sequence[Section] | None = None,
    limits: DesignLimits | None = None,
    friction_method: str = SWAMEE_JAIN,
) -> SystemResult:
    """Compute pump head, system volume and design checks for a system.

    Args:
        system: System descriptor.
        sections: Sections to solve; defaults to ``system.sections``.
        limits: Design limits for the checks (defaults to ``DesignLimits()``).
        friction_method: ``"swamee_jain"`` or ``"colebrook"``.

    Returns:
        SystemResult.  The inputs are not modified.

    Raises:
        HydronicInputError: If the inputs fail ``validate_system``.
    """
    limits = limits or DesignLimits()
    sections = list(system.sections if sections is None else sections)

    validation = validate_system(system, sections)
    if not validation.is_valid:
        raise HydronicInputError(validation)

    concentration = clamp(system.glycol_concentration, MIN_CONCENTRATION, MAX_CONCENTRATION)
    fluid = fluid_properties(system.fluid_type, concentration, system.fluid_temp_f)
    warnings = diagnostics.check_operating_point(
        system,
        concentration,
        clamp(system.safety_factor, MIN_SAFETY_FACTOR, MAX_SAFETY_FACTOR),
        temperature_range(system.fluid_type, concentration),
        limits,
    )

    ordered = sort_sections(sections)
    results = [
        solve_section(
            section,
            fluid,
            pipe_dimensions(section.pipe_material, section.pipe_size),
            system.loop_type,
            limits,
            friction_method,
        )
        for section in ordered
    ]
    for calc in results:
        warnings.merge(calc.warnings)
    warnings.merge(diagnostics.check_totals(results, limits))

    result = aggregate(system, results, fluid)
    result.warnings = warnings
    logger.debug(
        "System '%s': %d sections, pump head %.2f ft at %.1f GPM",
        system.name, len(results), result.total_pump_head_ft, result.max_flow_gpm,
    )
    return result
