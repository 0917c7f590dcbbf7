"""Interpolation helpers for hydrohead."""

from __future__ import annotations

import numpy as np


def linear_interp_1d(
    x: np.ndarray,
    y: np.ndarray,
    x_new: float | np.ndarray,
) -> float | np.ndarray:
    """One-dimensional linear interpolation clamped to the end values.

    Query points outside ``[x[0], x[-1]]`` return the nearest end value;
    there is no extrapolation.  A query that equals a knot returns the
    tabulated value unchanged.

    Args:
        x: Known x-coordinates (must be monotonically increasing).
        y: Known y-values.
        x_new: Query point(s).

    Returns:
        Interpolated value(s).
    """
    result = np.interp(x_new, x, y)
    return float(result) if np.isscalar(x_new) else result


def bracket(keys: np.ndarray, value: float) -> tuple[float, float]:
    """Return the two keys that bracket *value* after clamping to the key range.

    Both entries are equal when *value* sits on (or beyond) a key.
    """
    keys = np.asarray(keys, dtype=float)
    if value <= keys[0]:
        return float(keys[0]), float(keys[0])
    if value >= keys[-1]:
        return float(keys[-1]), float(keys[-1])
    hi = int(np.searchsorted(keys, value, side="left"))
    if keys[hi] == value:
        return float(keys[hi]), float(keys[hi])
    return float(keys[hi - 1]), float(keys[hi])


def blend(y_lo: float, y_hi: float, x: float, x_lo: float, x_hi: float) -> float:
    """Linear blend between two values; returns *y_lo* when the interval is empty."""
    if x_hi == x_lo:
        return y_lo
    return y_lo + (x - x_lo) * (y_hi - y_lo) / (x_hi - x_lo)
