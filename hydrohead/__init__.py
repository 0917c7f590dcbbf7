"""hydrohead: hydronic pressure-drop and pump-head calculations."""

__app_name__ = "hydrohead"
__version__ = "0.1.0"

from hydrohead.core.config import DesignLimits  # noqa: E402
from hydrohead.core.pump_head import (  # noqa: E402
    HydronicInputError,
    SystemResult,
    calculate,
    calculate_pump_bhp,
    head_to_psi,
    psi_to_head,
    pump_bhp,
)
from hydrohead.core.system import Fitting, FluidType, LoopType, Section, System, new_fitting  # noqa: E402

__all__ = [
    "DesignLimits",
    "Fitting",
    "FluidType",
    "HydronicInputError",
    "LoopType",
    "Section",
    "System",
    "SystemResult",
    "calculate",
    "calculate_pump_bhp",
    "head_to_psi",
    "new_fitting",
    "psi_to_head",
    "pump_bhp",
]
