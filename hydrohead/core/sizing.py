"""Flow and pipe sizing helpers.

Design flow from a heating or cooling load and a temperature difference,
and the smallest catalog pipe size that keeps velocity under a target.
"""

from __future__ import annotations

import logging

from hydrohead.core.hydraulics import velocity_fps
from hydrohead.core.pipes import available_sizes, pipe_dimensions
from hydrohead.utils.constants import BTU_PER_TON_HR, WATER_HEAT_FACTOR

logger = logging.getLogger(__name__)


def tonnage_to_gpm(tons: float, delta_t_f: float = 10.0) -> float:
    """Chilled-water flow [GPM] for a cooling load [tons] at a ΔT [°F].

    GPM = tons × 12000 / (500 × ΔT)
    """
    if delta_t_f <= 0:
        raise ValueError(f"Temperature difference must be positive, got {delta_t_f}")
    return tons * BTU_PER_TON_HR / (WATER_HEAT_FACTOR * delta_t_f)


def mbh_to_gpm(mbh: float, delta_t_f: float = 20.0) -> float:
    """Heating-water flow [GPM] for a load [MBH] at a ΔT [°F]."""
    if delta_t_f <= 0:
        raise ValueError(f"Temperature difference must be positive, got {delta_t_f}")
    return mbh * 1000.0 / (WATER_HEAT_FACTOR * delta_t_f)


def suggest_pipe_size(flow_gpm: float, material: str, target_velocity_fps: float = 6.0) -> str:
    """Smallest nominal size of *material* whose velocity is at or below the target.

    Falls back to the largest catalog size when none qualifies.

    Raises:
        PipeDataError: If the material is unknown.
    """
    sizes = available_sizes(material)
    for size in sizes:
        pipe = pipe_dimensions(material, size)
        if velocity_fps(flow_gpm, pipe.area_ft2) <= target_velocity_fps:
            return size
    logger.debug("No %s size keeps %.1f GPM under %.1f ft/s", material, flow_gpm, target_velocity_fps)
    return sizes[-1]
