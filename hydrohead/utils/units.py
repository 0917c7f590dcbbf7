"""Unit conversion utilities for hydrohead.

The calculation engine works in US customary units.  These helpers, built
on pint, convert inputs and results for display in other unit systems.
"""

from __future__ import annotations

from functools import lru_cache

import pint

# Module-level unit registry (singleton)
_ureg = pint.UnitRegistry()


Q_ = _ureg.Quantity

# Display unit sets: quantity kind -> (US unit, SI unit)
DISPLAY_UNITS: dict[str, tuple[str, str]] = {
    "head": ("ft", "m"),
    "pressure": ("psi", "kPa"),
    "flow": ("gallon / minute", "liter / second"),
    "velocity": ("ft / s", "m / s"),
    "length": ("ft", "m"),
    "volume": ("gallon", "liter"),
    "power": ("hp", "kW"),
}

UNIT_LABELS: dict[str, str] = {
    "ft": "ft",
    "m": "m",
    "psi": "psi",
    "kPa": "kPa",
    "gallon / minute": "GPM",
    "liter / second": "L/s",
    "ft / s": "ft/s",
    "m / s": "m/s",
    "gallon": "gal",
    "liter": "L",
    "hp": "hp",
    "kW": "kW",
}


def temperature_to_f(value: float, unit: str) -> float:
    """Convert a temperature to degrees Fahrenheit.

    Args:
        value: Numeric temperature value.
        unit: Source unit string (e.g. "degC", "degF", "K").

    Returns:
        Temperature in °F.
    """
    return Q_(value, unit).to("degF").magnitude


@lru_cache(maxsize=256)
def convert(value: float, from_unit: str, to_unit: str) -> float:
    """General-purpose unit conversion.

    Args:
        value: Numeric value in *from_unit*.
        from_unit: Source unit string.
        to_unit: Target unit string.

    Returns:
        Converted numeric value.
    """
    return Q_(value, from_unit).to(to_unit).magnitude


def display(value: float, kind: str, system: str = "us") -> tuple[float, str]:
    """Convert a US-customary engine value for display.

    Args:
        value: Value in the engine's US unit for *kind*.
        kind: Quantity kind, a key of ``DISPLAY_UNITS``.
        system: ``"us"`` (no conversion) or ``"si"``.

    Returns:
        Tuple of (converted value, unit label).
    """
    us_unit, si_unit = DISPLAY_UNITS[kind]
    if system.lower() == "si":
        return convert(value, us_unit, si_unit), UNIT_LABELS[si_unit]
    return value, UNIT_LABELS[us_unit]
