"""Utility modules for hydrohead."""

from hydrohead.utils.constants import DEFAULT_PUMP_EFFICIENCY, FT_WATER_PER_PSI, G_FT_S2
from hydrohead.utils.units import convert

__all__ = ["DEFAULT_PUMP_EFFICIENCY", "FT_WATER_PER_PSI", "G_FT_S2", "convert"]
