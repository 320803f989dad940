"""Integer helpers whose rounding must not depend on Python's banker's rounding."""
from __future__ import annotations

import math


def round_half_up(x: float) -> int:
    """Round to the nearest integer, halves toward positive infinity (87.5 -> 88, -2.5 -> -2)."""
    return int(math.floor(x + 0.5))


def trunc_div(a: int, b: int) -> int:
    """Integer division truncated toward zero (-59 / 2 -> -29)."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b > 0) else -q


__all__ = ["round_half_up", "trunc_div"]
