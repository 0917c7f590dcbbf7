"""Hydronic system data model.

A ``System`` owns an ordered list of ``Section``s; each section owns its
``Fitting``s.  These are plain input records: the calculation engine reads
them and never writes back.
"""

from __future__ import annotations

import uuid
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum

from hydrohead.core.fittings import FlowCoefficient, get_fitting


class LoopType(Enum):
    """Piping loop arrangement."""

    CLOSED = "closed"
    OPEN = "open"


class FluidType(Enum):
    """Heat-transfer fluid."""

    WATER = "water"
    PROPYLENE_GLYCOL = "propylene_glycol"
    ETHYLENE_GLYCOL = "ethylene_glycol"

    @property
    def is_glycol(self) -> bool:
        return self is not FluidType.WATER


def _new_id() -> str:
    return uuid.uuid4().hex


@dataclass
class Fitting:
    """A fitting, valve or device installed in a pipe section.

    ``cv_override`` and ``dp_override_ft`` are the user-supplied values for
    flow-coefficient and fixed-drop items.  ``is_default_cv`` is True when
    ``cv_override`` was filled in from the catalog rather than entered.
    """

    fitting_type: str
    quantity: int = 1
    cv_override: float | None = None
    dp_override_ft: float | None = None
    is_default_cv: bool = False
    id: str = field(default_factory=_new_id)
    section_id: str = ""


@dataclass
class Section:
    """A run of one pipe size and material carrying a single flow rate.

    ``sort_order`` is None until the section is placed; ``System.add_section``
    then puts it after the existing sections.
    """

    flow_gpm: float = 10.0
    pipe_material: str = "copper_type_l"
    pipe_size: str = "1"
    length_ft: float = 10.0
    name: str = "Section"
    sort_order: int | None = None
    fittings: list[Fitting] = field(default_factory=list)
    id: str = field(default_factory=_new_id)
    system_id: str = ""

    def add_fitting(self, fitting: Fitting) -> Fitting:
        """Attach *fitting* to this section and return it."""
        fitting.section_id = self.id
        self.fittings.append(fitting)
        return fitting


@dataclass
class System:
    """Hydronic system descriptor.

    ``static_head_ft`` is stored as entered regardless of loop type; only
    open loops apply it to the pump head.
    """

    name: str = "Untitled System"
    loop_type: LoopType = LoopType.CLOSED
    fluid_type: FluidType = FluidType.WATER
    glycol_concentration: float = 0.0  # % by volume
    fluid_temp_f: float = 180.0  # °F
    static_head_ft: float = 0.0  # ft
    safety_factor: float = 0.15  # fraction of calculated head
    notes: str = ""
    sections: list[Section] = field(default_factory=list)
    id: str = field(default_factory=_new_id)

    def add_section(self, section: Section) -> Section:
        """Attach *section* to this system and return it.

        A section added without an explicit sort order is placed last.
        """
        section.system_id = self.id
        if section.sort_order is None:
            placed = [s.sort_order for s in self.sections if s.sort_order is not None]
            section.sort_order = max(placed, default=-1) + 1
        for fitting in section.fittings:
            fitting.section_id = section.id
        self.sections.append(section)
        return section

    def remove_section(self, section_id: str) -> Section | None:
        """Detach a section (and with it, its fittings)."""
        for i, section in enumerate(self.sections):
            if section.id == section_id:
                return self.sections.pop(i)
        return None

    def ordered_sections(self) -> list[Section]:
        """Sections in traversal order (stable for equal sort orders)."""
        return sort_sections(self.sections)


def sort_sections(sections: Iterable[Section]) -> list[Section]:
    """Sort sections by ``sort_order``; unplaced sections go last, ties keep input order."""
    return sorted(sections, key=lambda s: (s.sort_order is None, s.sort_order or 0))


def new_fitting(section: Section, fitting_type: str, quantity: int = 1) -> Fitting:
    """Create a fitting for *section*, pre-filling the catalog Cv where one exists.

    Flow-coefficient items whose catalog lists a Cv for the section's pipe
    size get that value as ``cv_override`` and are marked ``is_default_cv``
    so they show up as unverified until the user enters a scheduled value.
    The fitting is attached to the section.

    Raises:
        UnknownFittingError: If *fitting_type* is not in the catalog.
    """
    data = get_fitting(fitting_type)
    fitting = Fitting(fitting_type=data.id, quantity=quantity)
    if isinstance(data.resistance, FlowCoefficient):
        cv = data.resistance.cv_for_size(section.pipe_size)
        if cv is not None:
            fitting.cv_override = cv
            fitting.is_default_cv = True
    return section.add_fitting(fitting)
