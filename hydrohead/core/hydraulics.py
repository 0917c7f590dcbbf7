"""Pipe-section hydraulics for hydrohead.

Velocity, Reynolds number, Darcy friction factor and Darcy–Weisbach head
loss for a single pipe section, plus the fittings, valves and devices it
carries.  Sections are solved independently; the system aggregator sums
them.
"""

from __future__ import annotations

import logging
import math
from dataclasses import asdict, dataclass, field
from typing import Any

from scipy.optimize import brentq

from hydrohead.core import diagnostics
from hydrohead.core.config import DesignLimits
from hydrohead.core.fittings import (
    FlowCoefficient,
    LengthRatio,
    ManualDrop,
    cv_head_loss_ft,
    equivalent_length_ft,
    get_fitting,
)
from hydrohead.core.fluids import FluidProperties
from hydrohead.core.pipes import PipeDimensions
from hydrohead.core.system import Fitting, LoopType, Section
from hydrohead.utils.constants import CP_TO_LB_FT_S, G_FT_S2, GPM_PER_CFS, RE_LAMINAR, RE_TURBULENT
from hydrohead.utils.interpolation import blend
from hydrohead.utils.validation import ValidationResult

logger = logging.getLogger(__name__)

SWAMEE_JAIN = "swamee_jain"
COLEBROOK = "colebrook"
FRICTION_METHODS = (SWAMEE_JAIN, COLEBROOK)


# --- Basic flow quantities ---


def velocity_fps(flow_gpm: float, area_ft2: float) -> float:
    """Mean velocity [ft/s] from flow [GPM] and flow area [ft²]."""
    if flow_gpm <= 0 or area_ft2 <= 0:
        return 0.0
    return flow_gpm / (GPM_PER_CFS * area_ft2)


def reynolds_number(
    velocity: float,
    diameter_ft: float,
    density_lb_ft3: float,
    viscosity_cp: float,
) -> float:
    """Reynolds number Re = ρVD/μ, with μ given in centipoise."""
    mu = viscosity_cp * CP_TO_LB_FT_S  # lb/(ft·s)
    if velocity <= 0 or diameter_ft <= 0 or mu <= 0:
        return 0.0
    return density_lb_ft3 * velocity * diameter_ft / mu


# --- Friction factor ---


def swamee_jain(re: float, relative_roughness: float) -> float:
    """Explicit Swamee–Jain approximation of the Colebrook equation."""
    log_arg = relative_roughness / 3.7 + 5.74 / re**0.9
    return 0.25 / math.log10(log_arg) ** 2


def colebrook(re: float, relative_roughness: float) -> float:
    """Colebrook–White friction factor, solved for 1/√f with Brent's method."""

    def residual(x: float) -> float:
        return x + 2.0 * math.log10(relative_roughness / 3.7 + 2.51 * x / re)

    x = brentq(residual, 1.0, 100.0, xtol=1e-12)
    return 1.0 / x**2


def friction_factor(re: float, relative_roughness: float, method: str = SWAMEE_JAIN) -> float:
    """Darcy friction factor for any flow regime.

    - Re < 2300: laminar, f = 64/Re
    - 2300 ≤ Re < 4000: linear blend from the laminar value at 2300 to the
      turbulent value at 4000
    - Re ≥ 4000: Swamee–Jain (default) or Colebrook–White

    Args:
        re: Reynolds number.
        relative_roughness: ε/D.
        method: ``"swamee_jain"`` or ``"colebrook"``.

    Returns:
        Darcy friction factor (0 for Re ≤ 0).
    """
    if method == SWAMEE_JAIN:
        turbulent = swamee_jain
    elif method == COLEBROOK:
        turbulent = colebrook
    else:
        raise ValueError(f"Unknown friction method '{method}'. Available: {list(FRICTION_METHODS)}")

    if re <= 0:
        return 0.0
    if re < RE_LAMINAR:
        return 64.0 / re
    if re < RE_TURBULENT:
        f_lam = 64.0 / RE_LAMINAR
        f_turb = turbulent(RE_TURBULENT, relative_roughness)
        return blend(f_lam, f_turb, re, RE_LAMINAR, RE_TURBULENT)
    return turbulent(re, relative_roughness)


def head_loss_ft(f: float, length_ft: float, diameter_ft: float, velocity: float) -> float:
    """Darcy–Weisbach head loss hf = f (L/D) V²/2g [ft]."""
    v2 = velocity**2
    if diameter_ft <= 0 or v2 == 0:
        return 0.0
    return f * (length_ft / diameter_ft) * v2 / (2.0 * G_FT_S2)


# --- Fittings ---


@dataclass
class FittingLoss:
    """Head loss of one fitting line (unit loss × quantity)."""

    fitting_id: str
    fitting_type: str
    method: str
    quantity: int
    unit_loss_ft: float = 0.0
    loss_ft: float = 0.0
    cv_used: float | None = None
    equivalent_length_ft: float | None = None
    cv_is_default: bool = False
    missing_input: bool = False


def fitting_head_loss(
    fitting: Fitting,
    pipe: PipeDimensions,
    flow_gpm: float,
    velocity: float,
    f: float,
    specific_gravity: float,
) -> FittingLoss:
    """Resolve the head loss of one fitting line.

    A positive ``dp_override_ft`` wins for any resistance method; zero
    counts as not entered.  Otherwise flow-coefficient items use
    ``cv_override``, then the catalog Cv for the pipe size (flagged as
    default); with neither, and for manual-drop items without a positive
    value, the loss is zero and the line is flagged as missing input.
    With no flow every loss is zero but the flags are still resolved.
    """
    data = get_fitting(fitting.fitting_type)
    line = FittingLoss(
        fitting_id=fitting.id,
        fitting_type=data.id,
        method=data.method.value,
        quantity=fitting.quantity,
    )
    resistance = data.resistance
    unit_loss = 0.0

    if fitting.dp_override_ft is not None and fitting.dp_override_ft > 0:
        unit_loss = fitting.dp_override_ft
    elif isinstance(resistance, LengthRatio):
        line.equivalent_length_ft = equivalent_length_ft(resistance.ratio, pipe.inner_diameter_in)
        unit_loss = head_loss_ft(f, line.equivalent_length_ft, pipe.inner_diameter_ft, velocity)
    elif isinstance(resistance, FlowCoefficient):
        if fitting.cv_override is not None:
            line.cv_used = fitting.cv_override
            line.cv_is_default = fitting.is_default_cv
        else:
            line.cv_used = resistance.cv_for_size(pipe.nominal_size)
            line.cv_is_default = line.cv_used is not None
        if line.cv_used is None:
            line.missing_input = True
        else:
            unit_loss = cv_head_loss_ft(flow_gpm, line.cv_used, specific_gravity)
    elif isinstance(resistance, ManualDrop):
        line.missing_input = True

    if flow_gpm <= 0:
        unit_loss = 0.0
    line.unit_loss_ft = unit_loss
    line.loss_ft = unit_loss * fitting.quantity
    return line


# --- Section solver ---


@dataclass
class SectionCalculation:
    """Hydraulic result for one pipe section."""

    section_id: str
    section_name: str
    flow_gpm: float
    pipe_material: str
    pipe_size: str
    length_ft: float
    inner_diameter_in: float
    velocity_fps: float = 0.0
    reynolds_number: float = 0.0
    friction_factor: float = 0.0
    pipe_friction_loss_ft: float = 0.0
    fittings_loss_ft: float = 0.0
    total_section_loss_ft: float = 0.0
    volume_gal: float = 0.0
    fitting_losses: list[FittingLoss] = field(default_factory=list)
    warnings: ValidationResult = field(default_factory=ValidationResult)

    @property
    def flow_regime(self) -> str:
        if self.reynolds_number <= 0:
            return "none"
        if self.reynolds_number < RE_LAMINAR:
            return "laminar"
        if self.reynolds_number < RE_TURBULENT:
            return "transition"
        return "turbulent"

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["flow_regime"] = self.flow_regime
        data["warnings"] = [m.to_dict() for m in self.warnings.messages]
        return data


def solve_section(
    section: Section,
    fluid: FluidProperties,
    pipe: PipeDimensions,
    loop_type: LoopType = LoopType.CLOSED,
    limits: DesignLimits | None = None,
    method: str = SWAMEE_JAIN,
) -> SectionCalculation:
    """Solve the hydraulics of one pipe section.

    Args:
        section: Section input (flow, length, fittings).
        fluid: Fluid properties at the system operating point.
        pipe: Dimensions of the section's pipe.
        loop_type: Loop type, selects the velocity limit.
        limits: Design limits for the checks (defaults to ``DesignLimits()``).
        method: Turbulent friction correlation.

    Returns:
        SectionCalculation with losses, volume and design-check messages.
    """
    limits = limits or DesignLimits()
    flow = section.flow_gpm
    diameter_ft = pipe.inner_diameter_ft

    v = velocity_fps(flow, pipe.area_ft2)
    re = reynolds_number(v, diameter_ft, fluid.density_lb_ft3, fluid.viscosity_cp)
    f = friction_factor(re, pipe.relative_roughness, method)
    pipe_loss = head_loss_ft(f, section.length_ft, diameter_ft, v)

    losses = [
        fitting_head_loss(fitting, pipe, flow, v, f, fluid.specific_gravity)
        for fitting in section.fittings
    ]
    fittings_loss = sum(line.loss_ft for line in losses)

    calc = SectionCalculation(
        section_id=section.id,
        section_name=section.name,
        flow_gpm=flow,
        pipe_material=pipe.material,
        pipe_size=pipe.nominal_size,
        length_ft=section.length_ft,
        inner_diameter_in=pipe.inner_diameter_in,
        velocity_fps=v,
        reynolds_number=re,
        friction_factor=f,
        pipe_friction_loss_ft=pipe_loss,
        fittings_loss_ft=fittings_loss,
        total_section_loss_ft=pipe_loss + fittings_loss,
        volume_gal=section.length_ft * pipe.volume_gal_per_ft,
        fitting_losses=losses,
    )
    calc.warnings = diagnostics.check_section(calc, loop_type, limits)

    logger.debug(
        "Section '%s': V=%.2f ft/s, Re=%.0f, f=%.5f, pipe=%.3f ft, fittings=%.3f ft",
        section.name, v, re, f, pipe_loss, fittings_loss,
    )
    return calc
