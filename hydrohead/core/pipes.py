"""Pipe geometry catalog for hydrohead.

Loads nominal-size dimension tables for the supported pipe materials
(copper, steel, PVC, PEX, HDPE, PP-R) from the bundled JSON database.
Lookups are exact on (material, nominal size).
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any

from hydrohead.utils.constants import IN2_PER_FT2, IN_PER_FT

logger = logging.getLogger(__name__)

_DATA_DIR = Path(__file__).resolve().parent.parent / "data"
_PIPES_DB_PATH = _DATA_DIR / "pipes.json"


class PipeDataError(KeyError):
    """Raised for an unknown pipe material or nominal size."""


@dataclass(frozen=True)
class PipeDimensions:
    """Dimensions of one nominal pipe size."""

    material: str
    nominal_size: str
    outer_diameter_in: float
    inner_diameter_in: float
    wall_thickness_in: float
    area_in2: float  # flow area
    volume_gal_per_ft: float
    roughness_ft: float  # absolute roughness

    @property
    def area_ft2(self) -> float:
        return self.area_in2 / IN2_PER_FT2

    @property
    def inner_diameter_ft(self) -> float:
        return self.inner_diameter_in / IN_PER_FT

    @property
    def relative_roughness(self) -> float:
        """ε/D, dimensionless."""
        return self.roughness_ft / self.inner_diameter_ft


@lru_cache(maxsize=1)
def _load_pipes_db() -> dict[str, Any]:
    if not _PIPES_DB_PATH.exists():
        logger.warning("Pipe database not found at %s", _PIPES_DB_PATH)
        return {}
    with open(_PIPES_DB_PATH) as f:
        return json.load(f)


def list_materials() -> list[str]:
    """Return all pipe material identifiers in the database."""
    return list(_load_pipes_db().keys())


def get_material_info(material: str) -> dict[str, Any]:
    """Return the full material record.

    Raises:
        PipeDataError: If the material is not in the database.
    """
    db = _load_pipes_db()
    if material not in db:
        raise PipeDataError(f"Pipe material '{material}' not found. Available: {list(db.keys())}")
    return db[material]


def available_sizes(material: str) -> list[str]:
    """Nominal sizes listed for *material*, smallest first."""
    return [row["nominal_size"] for row in get_material_info(material)["dimensions"]]


def pipe_dimensions(material: str, nominal_size: str) -> PipeDimensions:
    """Look up the dimensions of one nominal pipe size.

    Args:
        material: Material identifier, e.g. ``"steel_sch40"``.
        nominal_size: Nominal size string, e.g. ``"1-1/4"``.

    Returns:
        PipeDimensions for the size.

    Raises:
        PipeDataError: If the material or the size is unknown.
    """
    info = get_material_info(material)
    for row in info["dimensions"]:
        if row["nominal_size"] == nominal_size:
            return PipeDimensions(
                material=material,
                nominal_size=nominal_size,
                outer_diameter_in=row["outer_diameter_in"],
                inner_diameter_in=row["inner_diameter_in"],
                wall_thickness_in=row["wall_thickness_in"],
                area_in2=row["area_in2"],
                volume_gal_per_ft=row["volume_gal_per_ft"],
                roughness_ft=info["roughness_ft"],
            )
    raise PipeDataError(
        f"Size '{nominal_size}' not available for '{material}'. "
        f"Available: {available_sizes(material)}"
    )
