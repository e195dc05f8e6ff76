"""Tangent direction by central finite differences.

``tangent_at(path, t)`` samples the path slightly before and after ``t``
and returns the direction of the chord between the two samples.  This works
the same way for every command kind, so no per-curve derivative formulas
are needed.

Endpoints (t <= 0 or t >= 1), times that are not finite real numbers and
undefined samples all yield the zero angle.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from pathtrace.engine.length import CURVE_SUBDIVISIONS
from pathtrace.engine.sampler import in_time_domain, point_at
from pathtrace.path.commands import Path

TANGENT_DELTA = 0.001


@dataclass(frozen=True, slots=True)
class Angle:
    """Planar angle stored in radians.

    Positive angles turn from +x towards +y.  In a y-down frame that is
    clockwise on screen.
    """

    radians: float = 0.0

    @classmethod
    def zero(cls) -> Angle:
        return cls(0.0)

    @classmethod
    def from_degrees(cls, degrees: float) -> Angle:
        return cls(math.radians(degrees))

    @property
    def degrees(self) -> float:
        return math.degrees(self.radians)

    def __add__(self, other: Angle) -> Angle:
        return Angle(self.radians + other.radians)

    def __sub__(self, other: Angle) -> Angle:
        return Angle(self.radians - other.radians)

    def __neg__(self) -> Angle:
        return Angle(-self.radians)


def tangent_at(
    path: Path,
    t: float,
    delta: float = TANGENT_DELTA,
    subdivisions: int = CURVE_SUBDIVISIONS,
) -> Angle:
    """Estimate the direction of travel at normalized time ``t``.

    Parameters
    ----------
    path : Path
        Immutable path
    t : float
        Normalized time; only 0 < t < 1 gives a non-zero result
    delta : float
        Half-width of the finite-difference window, default 0.001
    subdivisions : int
        Chords per quadratic/cubic curve, default 100

    Returns
    -------
    Angle
        atan2(dy, dx) of next - prev.  Exactly ±90° when both samples share
        an x coordinate, and zero when they coincide.
    """
    if not in_time_domain(t):
        return Angle.zero()
    t = float(t)
    if t <= 0.0 or t >= 1.0:
        return Angle.zero()

    prev = point_at(path, max(0.0, t - delta), subdivisions)
    nxt = point_at(path, min(1.0, t + delta), subdivisions)
    if prev is None or nxt is None:
        return Angle.zero()

    if prev.x == nxt.x:
        if nxt.y > prev.y:
            return Angle.from_degrees(90.0)
        if nxt.y < prev.y:
            return Angle.from_degrees(-90.0)
        return Angle.zero()

    return Angle(math.atan2(nxt.y - prev.y, nxt.x - prev.x))
