"""
rounding.py

Decimal rounding used for every exposed reading.
"""

import math


def round_half_away(value: float, precision: int = 2) -> float:
    """
    Round value to `precision` decimal places, with ties rounded away from
    zero (unlike the builtin round(), which rounds ties to even).

    NaN and infinities are returned unchanged, as are values too large to
    scale.
    """
    scale = 10 ** precision
    scaled = abs(value) * scale
    if not math.isfinite(scaled):
        return value
    return math.copysign(math.floor(scaled + 0.5), value) / scale
