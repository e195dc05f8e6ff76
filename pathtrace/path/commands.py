"""Path commands -- the vocabulary a collaborator uses to describe a curve.

Every drawing command is an immutable, slotted dataclass.  A ``Path`` is a
frozen tuple of commands, so it is hashable and safe to share between
threads; the engine memoizes flattened geometry keyed by it.

Commands
--------
``MoveTo`` starts a subpath, ``LineTo`` / ``QuadCurveTo`` / ``CubicCurveTo``
extend it from the current point, ``CloseSubpath`` draws back to the
subpath start.  Coordinates must be finite.

Construction
------------
``PathBuilder`` is the mutable, collaborator-side helper.  It also knows
how to append circular arcs, which it emits as cubic Béziers so the engine
only ever sees the five command kinds above.
"""

from __future__ import annotations

import math
from abc import ABC
from dataclasses import dataclass, field
from typing import Iterator, Sequence, Union

from pathtrace.utils.geometry import arc_to_cubics

# ---------------------------------------------------------------------------
# Points
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Point:
    """2D point.

    Parameters
    ----------
    x, y : float
        Coordinates; must be finite.
    """

    x: float
    y: float

    def __post_init__(self) -> None:
        if not (math.isfinite(self.x) and math.isfinite(self.y)):
            raise ValueError(f"Point coordinates must be finite, got ({self.x}, {self.y})")

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)

    def distance_to(self, other: Point) -> float:
        return math.hypot(other.x - self.x, other.y - self.y)


PointLike = Union[Point, Sequence[float]]


def as_point(value: PointLike) -> Point:
    """Coerce a ``Point`` or an ``(x, y)`` pair into a ``Point``."""
    if isinstance(value, Point):
        return value
    if len(value) != 2:
        raise ValueError(f"Expected an (x, y) pair, got {value!r}")
    return Point(float(value[0]), float(value[1]))


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class PathCommand(ABC):
    """Base class for all drawing commands."""

    pass


@dataclass(frozen=True, slots=True)
class MoveTo(PathCommand):
    """Start a new subpath at ``point``."""

    point: Point


@dataclass(frozen=True, slots=True)
class LineTo(PathCommand):
    """Straight segment from the current point to ``point``."""

    point: Point


@dataclass(frozen=True, slots=True)
class QuadCurveTo(PathCommand):
    """Quadratic Bézier from the current point to ``point``.

    Parameters
    ----------
    point : Point
        End point.
    control : Point
        The single control point.
    """

    point: Point
    control: Point


@dataclass(frozen=True, slots=True)
class CubicCurveTo(PathCommand):
    """Cubic Bézier from the current point to ``point``.

    Parameters
    ----------
    point : Point
        End point.
    control1, control2 : Point
        Control points nearest the start and the end respectively.
    """

    point: Point
    control1: Point
    control2: Point


@dataclass(frozen=True, slots=True)
class CloseSubpath(PathCommand):
    """Straight segment back to the start of the most recent subpath."""

    pass


# ---------------------------------------------------------------------------
# Path value
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Path:
    """Immutable, ordered sequence of drawing commands.

    Parameters
    ----------
    commands : tuple[PathCommand, ...]
        Commands in emission order.  Any iterable is accepted and frozen
        into a tuple.
    """

    commands: tuple[PathCommand, ...] = field(default=())

    def __post_init__(self) -> None:
        commands = tuple(self.commands)
        for i, cmd in enumerate(commands):
            if not isinstance(cmd, PathCommand):
                raise TypeError(
                    f"Path command {i} must be a PathCommand, got {type(cmd).__name__}"
                )
        object.__setattr__(self, "commands", commands)

    def __iter__(self) -> Iterator[PathCommand]:
        return iter(self.commands)

    def __len__(self) -> int:
        return len(self.commands)

    @property
    def is_empty(self) -> bool:
        return not self.commands


# ---------------------------------------------------------------------------
# Builder
# ---------------------------------------------------------------------------


class PathBuilder:
    """Accumulates commands and produces an immutable ``Path``.

    Methods return ``self`` so calls can be chained::

        path = (
            PathBuilder()
            .move_to((50, 100))
            .curve_to((350, 100), (150, 200), (250, 0))
            .build()
        )
    """

    def __init__(self) -> None:
        self._commands: list[PathCommand] = []
        self._has_current_point = False

    def move_to(self, point: PointLike) -> PathBuilder:
        self._commands.append(MoveTo(as_point(point)))
        self._has_current_point = True
        return self

    def line_to(self, point: PointLike) -> PathBuilder:
        self._commands.append(LineTo(as_point(point)))
        return self

    def quad_curve_to(self, point: PointLike, control: PointLike) -> PathBuilder:
        self._commands.append(QuadCurveTo(as_point(point), as_point(control)))
        return self

    def curve_to(
        self, point: PointLike, control1: PointLike, control2: PointLike
    ) -> PathBuilder:
        self._commands.append(
            CubicCurveTo(as_point(point), as_point(control1), as_point(control2))
        )
        return self

    def close_subpath(self) -> PathBuilder:
        self._commands.append(CloseSubpath())
        return self

    def add_lines(self, points: Sequence[PointLike]) -> PathBuilder:
        """Move to the first point and draw lines through the rest."""
        if not points:
            return self
        self.move_to(points[0])
        for pt in points[1:]:
            self.line_to(pt)
        return self

    def add_rect(self, x: float, y: float, width: float, height: float) -> PathBuilder:
        """Closed rectangle subpath starting at its (x, y) corner."""
        return (
            self.add_lines([(x, y), (x + width, y), (x + width, y + height), (x, y + height)])
            .close_subpath()
        )

    def add_arc(
        self,
        center: PointLike,
        radius: float,
        start_angle: float,
        end_angle: float,
        clockwise: bool = False,
    ) -> PathBuilder:
        """Append a circular arc as cubic Béziers.

        Parameters
        ----------
        center : PointLike
            Arc centre.
        radius : float
            Arc radius.
        start_angle, end_angle : float
            Endpoint angles in degrees from +x towards +y.
        clockwise : bool
            False sweeps with increasing angle, True with decreasing angle.

        Notes
        -----
        On an empty builder the arc opens with a ``MoveTo`` at its first
        endpoint; otherwise a ``LineTo`` joins the current point to it.
        """
        c = as_point(center)
        a0 = math.radians(start_angle)
        a1 = math.radians(end_angle)
        first = (c.x + radius * math.cos(a0), c.y + radius * math.sin(a0))

        if self._has_current_point:
            self.line_to(first)
        else:
            self.move_to(first)

        for _, c1, c2, p1 in arc_to_cubics(c.as_tuple(), radius, a0, a1, clockwise):
            self.curve_to(p1, c1, c2)
        return self

    def build(self) -> Path:
        return Path(tuple(self._commands))
