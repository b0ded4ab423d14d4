"""
Scalar tone transforms shared by every effect.

The "strength", "amount" and "recontrast" knobs all go through contrast(),
a linear stretch around mid-gray followed by a clamp to the byte range.

Functions:
    clamp_byte: Clamp values to 0-255
    contrast: Linear contrast stretch around 128
    to_bytes: Clamp and quantize float values to uint8
    sanitize: Turn an arbitrary user value into a finite, bounded float
"""

import math
from typing import Any, Optional

import numpy as np

from RL_Libs.constants import BYTE_MAX, BYTE_MIN, MID_GRAY


def _like_input(result: np.ndarray, original: Any) -> Any:
    if np.ndim(original) == 0:
        return float(result)
    return result


def clamp_byte(value: Any) -> Any:
    """min(255, max(0, value)); NaN clamps to 0."""
    values = np.nan_to_num(np.asarray(value, dtype=np.float64), nan=BYTE_MIN)
    return _like_input(np.clip(values, BYTE_MIN, BYTE_MAX), value)


def contrast(value: Any, factor: Any) -> Any:
    """
    clamp_byte((value - 128) * factor + 128).

    Mid-gray is a fixed point for every factor, including infinite or NaN
    factors, because a zero offset is never multiplied.
    """
    values = np.asarray(value, dtype=np.float64)
    offset = values - MID_GRAY
    with np.errstate(invalid="ignore", over="ignore"):
        stretched = np.where(offset == 0, MID_GRAY, offset * float(factor) + MID_GRAY)
    return _like_input(np.asarray(clamp_byte(stretched)), value)


def to_bytes(values: Any) -> np.ndarray:
    """Clamp to 0-255 and round half to even into a uint8 array."""
    return np.rint(np.asarray(clamp_byte(values))).astype(np.uint8)


def sanitize(
    value: Any,
    default: float,
    low: Optional[float] = None,
    high: Optional[float] = None,
) -> float:
    """
    Coerce a user supplied knob value into a finite float within [low, high].

    Non-numeric and NaN values fall back to default; infinities clamp to the
    nearest bound (or fall back to default when that side is unbounded).
    """
    try:
        number = float(value)
    except (TypeError, ValueError):
        return float(default)

    if math.isnan(number):
        return float(default)
    if math.isinf(number):
        bound = high if number > 0 else low
        return float(default if bound is None else bound)

    if low is not None:
        number = max(low, number)
    if high is not None:
        number = min(high, number)
    return number
