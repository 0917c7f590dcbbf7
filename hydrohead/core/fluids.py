"""Heat-transfer fluid properties for hydrohead.

Tabulated density, viscosity, specific gravity and specific heat for water
and aqueous propylene / ethylene glycol, loaded from the bundled JSON
database and linearly interpolated by temperature and concentration.
Values outside the tables are clamped to the nearest row.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, fields
from functools import lru_cache
from pathlib import Path
from typing import Any

import numpy as np

from hydrohead.core.system import FluidType
from hydrohead.utils.interpolation import blend, bracket, linear_interp_1d
from hydrohead.utils.validation import clamp

logger = logging.getLogger(__name__)

_DATA_DIR = Path(__file__).resolve().parent.parent / "data"
_FLUIDS_DB_PATH = _DATA_DIR / "fluids.json"

MIN_CONCENTRATION = 0.0  # %
MAX_CONCENTRATION = 60.0  # %


class FluidPropertyError(Exception):
    """Raised when fluid properties cannot be resolved."""


@dataclass(frozen=True)
class FluidProperties:
    """Fluid property bundle at one operating point."""

    density_lb_ft3: float
    viscosity_cp: float  # centipoise
    specific_gravity: float
    specific_heat_btu_lb_f: float

    def to_dict(self) -> dict[str, float]:
        return asdict(self)


_PROPERTY_NAMES = tuple(f.name for f in fields(FluidProperties))


@lru_cache(maxsize=1)
def _load_fluids_db() -> dict[str, Any]:
    if not _FLUIDS_DB_PATH.exists():
        logger.warning("Fluid property database not found at %s", _FLUIDS_DB_PATH)
        return {}
    with open(_FLUIDS_DB_PATH) as f:
        return json.load(f)


class PropertyTable:
    """Temperature-indexed property table for one fluid at one concentration.

    Args:
        record: Column-oriented table with a ``temperature_f`` key and one
                key per property.
    """

    def __init__(self, record: dict[str, list[float]]):
        self.temperature_f = np.asarray(record["temperature_f"], dtype=float)
        self._columns = {name: np.asarray(record[name], dtype=float) for name in _PROPERTY_NAMES}

    @property
    def t_min(self) -> float:
        return float(self.temperature_f[0])

    @property
    def t_max(self) -> float:
        return float(self.temperature_f[-1])

    def at(self, temp_f: float) -> FluidProperties:
        """Properties at *temp_f* [°F], clamped to the table range."""
        return FluidProperties(
            **{
                name: linear_interp_1d(self.temperature_f, column, temp_f)
                for name, column in self._columns.items()
            }
        )


def _coerce_fluid(fluid_type: FluidType | str) -> FluidType:
    try:
        return FluidType(fluid_type)
    except ValueError as exc:
        raise FluidPropertyError(
            f"Unknown fluid type '{fluid_type}'. "
            f"Available: {[f.value for f in FluidType]}"
        ) from exc


@lru_cache(maxsize=None)
def _tables(fluid: FluidType) -> dict[float, PropertyTable]:
    """Concentration -> temperature table.  Water is the 0 % member of each glycol family."""
    db = _load_fluids_db()
    if fluid.value not in db or FluidType.WATER.value not in db:
        raise FluidPropertyError(f"No property tables for '{fluid.value}'")

    water = PropertyTable(db[FluidType.WATER.value]["tables"]["0"])
    tables = {0.0: water}
    if fluid.is_glycol:
        for conc, record in db[fluid.value]["tables"].items():
            tables[float(conc)] = PropertyTable(record)
    logger.debug("Loaded %d property tables for %s", len(tables), fluid.value)
    return dict(sorted(tables.items()))


def fluid_properties(
    fluid_type: FluidType | str,
    concentration_percent: float,
    temp_f: float,
) -> FluidProperties:
    """Resolve fluid properties at an operating point.

    Glycol mixtures are resolved in two stages: temperature interpolation
    inside the two bracketing concentration tables, then linear
    interpolation between those by concentration.  Water ignores the
    concentration.

    Args:
        fluid_type: Fluid (``FluidType`` or its string value).
        concentration_percent: Glycol concentration [%], clamped to 0–60.
        temp_f: Fluid temperature [°F], clamped to the table range.

    Returns:
        FluidProperties at the requested point.

    Raises:
        FluidPropertyError: If the fluid type is unknown.
    """
    fluid = _coerce_fluid(fluid_type)
    tables = _tables(fluid)

    if not fluid.is_glycol:
        return tables[0.0].at(temp_f)

    conc = clamp(concentration_percent, MIN_CONCENTRATION, MAX_CONCENTRATION)
    lo, hi = bracket(np.fromiter(tables.keys(), dtype=float), conc)
    props_lo = tables[lo].at(temp_f)
    if lo == hi:
        return props_lo

    props_hi = tables[hi].at(temp_f)
    return FluidProperties(
        **{
            name: blend(getattr(props_lo, name), getattr(props_hi, name), conc, lo, hi)
            for name in _PROPERTY_NAMES
        }
    )


def temperature_range(fluid_type: FluidType | str, concentration_percent: float = 0.0) -> tuple[float, float]:
    """Tabulated temperature range [°F] used for a fluid at a concentration."""
    fluid = _coerce_fluid(fluid_type)
    tables = _tables(fluid)
    if not fluid.is_glycol:
        return tables[0.0].t_min, tables[0.0].t_max
    conc = clamp(concentration_percent, MIN_CONCENTRATION, MAX_CONCENTRATION)
    lo, hi = bracket(np.fromiter(tables.keys(), dtype=float), conc)
    return max(tables[lo].t_min, tables[hi].t_min), min(tables[lo].t_max, tables[hi].t_max)


def available_concentrations(fluid_type: FluidType | str) -> list[float]:
    """Tabulated concentrations [%] for a fluid (``[0.0]`` for water)."""
    return list(_tables(_coerce_fluid(fluid_type)).keys())


def fluid_display_name(fluid_type: FluidType | str) -> str:
    fluid = _coerce_fluid(fluid_type)
    return _load_fluids_db().get(fluid.value, {}).get("display_name", fluid.value)


# --- Convenience scalar lookups ---


def density(fluid_type: FluidType | str, concentration_percent: float, temp_f: float) -> float:
    """Density [lb/ft³]."""
    return fluid_properties(fluid_type, concentration_percent, temp_f).density_lb_ft3


def viscosity(fluid_type: FluidType | str, concentration_percent: float, temp_f: float) -> float:
    """Dynamic viscosity [cP]."""
    return fluid_properties(fluid_type, concentration_percent, temp_f).viscosity_cp


def specific_gravity(fluid_type: FluidType | str, concentration_percent: float, temp_f: float) -> float:
    return fluid_properties(fluid_type, concentration_percent, temp_f).specific_gravity


def specific_heat(fluid_type: FluidType | str, concentration_percent: float, temp_f: float) -> float:
    """Specific heat [Btu/(lb·°F)]."""
    return fluid_properties(fluid_type, concentration_percent, temp_f).specific_heat_btu_lb_f
