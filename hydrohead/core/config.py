"""Design limits and system file I/O for hydrohead.

``DesignLimits`` holds the thresholds used by the design checks.  The JSON
helpers read and write the System / Section / Fitting input shape and
calculation results.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any

from hydrohead.core.system import Fitting, FluidType, LoopType, Section, System

logger = logging.getLogger(__name__)


class SystemFileError(ValueError):
    """Raised when a system description cannot be decoded."""


# --- Design limits ---


@dataclass
class DesignLimits:
    """Thresholds for velocity, friction-rate and glycol design checks."""

    max_velocity_closed_fps: float = 8.0
    max_velocity_open_fps: float = 6.0
    erosion_velocity_fps: float = 10.0
    min_velocity_fps: float = 2.0
    friction_rate_min_ft_per_100ft: float = 1.0
    friction_rate_max_ft_per_100ft: float = 4.0
    glycol_concentration_warning: float = 50.0  # %
    glycol_low_temp_f: float = 40.0  # °F

    def max_velocity_for(self, loop_type: LoopType) -> float:
        """Recommended maximum velocity [ft/s] for a loop type."""
        if loop_type is LoopType.OPEN:
            return self.max_velocity_open_fps
        return self.max_velocity_closed_fps

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DesignLimits:
        return cls(**_known_fields(cls, data, "limits"))


# --- JSON serialization ---


def _known_fields(cls: type, data: dict[str, Any], where: str) -> dict[str, Any]:
    names = {f.name for f in fields(cls)}
    unknown = sorted(set(data) - names)
    if unknown:
        logger.debug("Ignoring unknown %s keys: %s", where, ", ".join(unknown))
    return {k: v for k, v in data.items() if k in names}


def fitting_from_dict(data: dict[str, Any]) -> Fitting:
    kwargs = _known_fields(Fitting, data, "fitting")
    if "fitting_type" not in kwargs:
        raise SystemFileError("Fitting entry is missing 'fitting_type'")
    return Fitting(**kwargs)


def section_from_dict(data: dict[str, Any]) -> Section:
    kwargs = _known_fields(Section, data, "section")
    fittings = [fitting_from_dict(f) for f in kwargs.pop("fittings", [])]
    section = Section(**kwargs)
    for fitting in fittings:
        section.add_fitting(fitting)
    return section


def system_from_dict(data: dict[str, Any]) -> System:
    """Build a ``System`` (with its sections and fittings) from plain data.

    Section ``sort_order`` values are taken as given; sections without one
    keep their position in the list.

    Raises:
        SystemFileError: If an enum value or a required key is invalid.
    """
    kwargs = _known_fields(System, data, "system")
    sections_data = kwargs.pop("sections", [])
    try:
        if "loop_type" in kwargs:
            kwargs["loop_type"] = LoopType(kwargs["loop_type"])
        if "fluid_type" in kwargs:
            kwargs["fluid_type"] = FluidType(kwargs["fluid_type"])
    except ValueError as exc:
        raise SystemFileError(str(exc)) from exc

    system = System(**kwargs)
    for i, section_data in enumerate(sections_data):
        section = section_from_dict({"sort_order": i, **section_data})
        section.system_id = system.id
        for fitting in section.fittings:
            fitting.section_id = section.id
        system.sections.append(section)
    return system


def system_to_dict(system: System) -> dict[str, Any]:
    """Plain-data form of a system, the inverse of ``system_from_dict``."""
    data = asdict(system)
    data["loop_type"] = system.loop_type.value
    data["fluid_type"] = system.fluid_type.value
    return data


def load_system_json(path: str | Path) -> System:
    """Load a system description from a JSON file."""
    path = Path(path)
    with open(path) as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as exc:
            raise SystemFileError(f"{path}: {exc}") from exc
    if not isinstance(data, dict):
        raise SystemFileError(f"{path}: expected a JSON object at the top level")
    system = system_from_dict(data)
    logger.info("Loaded system '%s' (%d sections) from %s", system.name, len(system.sections), path)
    return system


def save_system_json(system: System, path: str | Path) -> None:
    """Save a system description to a JSON file."""
    path = Path(path)
    with open(path, "w") as f:
        json.dump(system_to_dict(system), f, indent=2)
    logger.info("Saved system to %s", path)


def save_result_json(result: Any, path: str | Path) -> None:
    """Save a calculation result (anything with ``to_dict()``) to a JSON file."""
    path = Path(path)
    with open(path, "w") as f:
        json.dump(result.to_dict(), f, indent=2)
    logger.info("Saved result to %s", path)
