"""Scalar helpers shared by the vector, matrix and camera code."""

from __future__ import annotations

import math

PI = 3.1415926535
TWO_PI = PI * 2.0
PI_OVER_2 = PI / 2.0
INFINITY = math.inf
NEG_INFINITY = -math.inf

__all__ = [
    "PI",
    "TWO_PI",
    "PI_OVER_2",
    "INFINITY",
    "NEG_INFINITY",
    "to_radians",
    "to_degrees",
    "near_zero",
    "clamp",
    "lerp",
    "cot",
]


def to_radians(degrees: float) -> float:
    """Convert an angle in degrees to radians."""
    return degrees * PI / 180.0


def to_degrees(radians: float) -> float:
    """Convert an angle in radians to degrees."""
    return radians * 180.0 / PI


def near_zero(val: float, epsilon: float = 0.001) -> bool:
    """Return True when ``val`` lies within ``epsilon`` of zero."""
    return abs(val) <= epsilon


def clamp(value, lower, upper):
    """Limit ``value`` to the closed range [lower, upper]."""
    return min(upper, max(lower, value))


def lerp(a: float, b: float, f: float) -> float:
    """Linear interpolation from ``a`` to ``b`` by ``f``."""
    return a + f * (b - a)


def cot(angle: float) -> float:
    """Cotangent of ``angle`` (radians)."""
    return 1.0 / math.tan(angle)