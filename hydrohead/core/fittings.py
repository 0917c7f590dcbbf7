"""Fitting, valve and device resistance catalog for hydrohead.

Every catalog entry carries exactly one resistance model:

- ``LengthRatio``      equivalent length as a multiple of pipe diameters (L/D)
- ``FlowCoefficient``  Cv, either a single default or a table by pipe size
- ``ManualDrop``       fixed head loss supplied by the user
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Any, Union

from hydrohead.utils.constants import FT_WATER_PER_PSI, IN_PER_FT

logger = logging.getLogger(__name__)

_DATA_DIR = Path(__file__).resolve().parent.parent / "data"
_FITTINGS_DB_PATH = _DATA_DIR / "fittings.json"

CATEGORIES = ("fitting", "valve", "device")


class UnknownFittingError(KeyError):
    """Raised when a fitting id is not in the catalog."""


class FittingCatalogError(ValueError):
    """Raised when a catalog entry is malformed."""


class FittingMethod(Enum):
    """How a fitting's head loss is computed."""

    L_OVER_D = "l_over_d"
    CV = "cv"
    MANUAL_DP = "manual_dp"


@dataclass(frozen=True)
class LengthRatio:
    """Equivalent-length resistance, L/D."""

    ratio: float


@dataclass(frozen=True)
class FlowCoefficient:
    """Flow-coefficient resistance.

    Either a single ``default_cv``, a sparse ``cv_by_size`` table keyed by
    nominal pipe size, or neither (the Cv must come from a valve schedule).
    """

    default_cv: float | None = None
    cv_by_size: dict[str, float] | None = None

    def cv_for_size(self, pipe_size: str) -> float | None:
        """Catalog Cv for *pipe_size* (exact match), else ``default_cv``."""
        if self.cv_by_size and pipe_size in self.cv_by_size:
            return self.cv_by_size[pipe_size]
        return self.default_cv


@dataclass(frozen=True)
class ManualDrop:
    """Fixed head loss entered by the user (coils, heat exchangers, ...)."""


Resistance = Union[LengthRatio, FlowCoefficient, ManualDrop]


@dataclass(frozen=True)
class FittingData:
    """Catalog entry for one fitting, valve or device."""

    id: str
    display_name: str
    category: str
    resistance: Resistance
    notes: str = ""

    @property
    def method(self) -> FittingMethod:
        if isinstance(self.resistance, LengthRatio):
            return FittingMethod.L_OVER_D
        if isinstance(self.resistance, FlowCoefficient):
            return FittingMethod.CV
        return FittingMethod.MANUAL_DP


def _parse_resistance(fitting_id: str, record: dict[str, Any]) -> Resistance:
    try:
        method = FittingMethod(record.get("method"))
    except ValueError as exc:
        raise FittingCatalogError(f"Fitting '{fitting_id}' has unknown method {record.get('method')!r}") from exc
    if method is FittingMethod.L_OVER_D:
        if "l_over_d" not in record:
            raise FittingCatalogError(f"Fitting '{fitting_id}' is missing its l_over_d ratio")
        return LengthRatio(float(record["l_over_d"]))
    if method is FittingMethod.CV:
        cv_by_size = record.get("cv_by_size")
        default_cv = record.get("default_cv")
        return FlowCoefficient(
            default_cv=float(default_cv) if default_cv is not None else None,
            cv_by_size={k: float(v) for k, v in cv_by_size.items()} if cv_by_size else None,
        )
    return ManualDrop()


@lru_cache(maxsize=1)
def _load_fittings_db() -> dict[str, FittingData]:
    if not _FITTINGS_DB_PATH.exists():
        logger.warning("Fittings database not found at %s", _FITTINGS_DB_PATH)
        return {}
    with open(_FITTINGS_DB_PATH) as f:
        raw = json.load(f)

    catalog = {
        fitting_id: FittingData(
            id=fitting_id,
            display_name=record["name"],
            category=record["category"],
            resistance=_parse_resistance(fitting_id, record),
            notes=record.get("notes", ""),
        )
        for fitting_id, record in raw.items()
    }
    logger.info("Loaded %d fittings from %s", len(catalog), _FITTINGS_DB_PATH.name)
    return catalog


def get_fitting(fitting_id: str) -> FittingData:
    """Return the catalog entry for *fitting_id*.

    Raises:
        UnknownFittingError: If the id is not in the catalog.
    """
    db = _load_fittings_db()
    try:
        return db[fitting_id]
    except KeyError as exc:
        raise UnknownFittingError(f"Fitting '{fitting_id}' not found in catalog") from exc


def has_fitting(fitting_id: str) -> bool:
    return fitting_id in _load_fittings_db()


def list_fittings(category: str | None = None) -> list[FittingData]:
    """All catalog entries in catalog order, optionally filtered by category."""
    entries = _load_fittings_db().values()
    if category is None:
        return list(entries)
    return [f for f in entries if f.category == category]


def equivalent_length_ft(l_over_d: float, inner_diameter_in: float) -> float:
    """Equivalent pipe length [ft] for an L/D ratio and an inside diameter [in]."""
    return l_over_d * inner_diameter_in / IN_PER_FT


def cv_head_loss_ft(flow_gpm: float, cv: float, specific_gravity: float = 1.0) -> float:
    """Head loss [ft] across a flow-coefficient device.

    ΔP [psi] = (Q / Cv)² × SG, converted to feet of head at 2.31 ft/psi.
    A non-positive Cv gives no loss.
    """
    if cv <= 0:
        return 0.0
    dp_psi = (flow_gpm / cv) ** 2 * specific_gravity
    return dp_psi * FT_WATER_PER_PSI
