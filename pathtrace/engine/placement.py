"""Positioning and orienting content items along a path.

This is the per-item computation a scrolling presentation layer performs
every frame, kept free of any UI types:

    time     = along / path_length
    rotation = tangent_at(path, time)          (- 90° on a vertical axis)
    offset   = point_at(path, time) - item centre   ((0, 0) if undefined)

``along`` is the item's centre coordinate on the scroll axis in scroll-view
space, so scrolling simply shifts it.  Items scrolled past either end of
the path get no point and keep a zero offset.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Literal, Optional, Tuple

import torch

from pathtrace.engine.length import CURVE_SUBDIVISIONS, approximate_length, flatten
from pathtrace.engine.sampler import point_at
from pathtrace.engine.tangent import TANGENT_DELTA, Angle, tangent_at
from pathtrace.path.commands import Path, Point, PointLike, as_point
from pathtrace.utils import geometry

logger = logging.getLogger(__name__)

Axis = Literal["horizontal", "vertical"]

_VERTICAL_CORRECTION = Angle.from_degrees(90.0)


@dataclass(frozen=True, slots=True)
class Placement:
    """Where one item goes.

    Parameters
    ----------
    time : float
        Normalized time the item maps to (may fall outside [0, 1]).
    point : Point | None
        Path point at ``time``; None when undefined.
    rotation : Angle
        Rotation to apply to the item.
    offset : Point
        Translation from the item's laid-out centre onto the path.
    """

    time: float
    point: Optional[Point]
    rotation: Angle
    offset: Point


def _check_axis(axis: str) -> None:
    if axis not in ("horizontal", "vertical"):
        raise ValueError(f"axis must be 'horizontal' or 'vertical', got {axis!r}")


def bounding_box(
    path: Path, subdivisions: int = CURVE_SUBDIVISIONS
) -> Optional[Tuple[float, float, float, float]]:
    """Axis-aligned bounds (xmin, ymin, xmax, ymax) of the flattened path.

    Returns None when the path draws nothing.  Curves are bounded by their
    chord vertices, which lie on the curve.
    """
    table = flatten(path, subdivisions)
    if table.chord_count == 0:
        return None
    return geometry.polyline_bbox(torch.cat([table.starts, table.ends], dim=0))


def place_item(
    path: Path,
    along: float,
    center: PointLike,
    axis: Axis = "horizontal",
    path_length: Optional[float] = None,
    delta: float = TANGENT_DELTA,
    subdivisions: int = CURVE_SUBDIVISIONS,
) -> Placement:
    """Compute the placement of one item.

    Parameters
    ----------
    path : Path
        Path the content follows
    along : float
        Item centre on the scroll axis, in the same units as the path
    center : PointLike
        Item centre in scroll-view space (x, y)
    axis : "horizontal" | "vertical"
        Scroll axis; vertical content is rotated back by 90°
    path_length : float, optional
        Precomputed ``approximate_length(path)``
    delta, subdivisions
        Forwarded to the tangent and sampler

    Returns
    -------
    Placement
        Zero rotation and offset for a path of zero length.
    """
    _check_axis(axis)
    center = as_point(center)

    if path_length is None:
        path_length = approximate_length(path, subdivisions)
    if path_length <= 0.0:
        return Placement(0.0, None, Angle.zero(), Point(0.0, 0.0))

    time = along / path_length
    rotation = tangent_at(path, time, delta, subdivisions)
    if axis == "vertical":
        rotation = rotation - _VERTICAL_CORRECTION

    point = point_at(path, time, subdivisions)
    if point is None:
        offset = Point(0.0, 0.0)
    else:
        offset = Point(point.x - center.x, point.y - center.y)

    return Placement(time, point, rotation, offset)


def distribute(
    path: Path,
    count: int,
    item_extent: float,
    spacing: float = 8.0,
    axis: Axis = "horizontal",
    scroll_offset: float = 0.0,
    cross: float = 0.0,
    delta: float = TANGENT_DELTA,
    subdivisions: int = CURVE_SUBDIVISIONS,
) -> List[Placement]:
    """Placements for ``count`` equally sized items stacked along the axis.

    Parameters
    ----------
    path : Path
        Path the content follows
    count : int
        Number of items, >= 0
    item_extent : float
        Item size along the scroll axis
    spacing : float
        Gap between neighbouring items, default 8
    axis : "horizontal" | "vertical"
        Scroll axis
    scroll_offset : float
        Current scroll position; content moves back by this amount
    cross : float
        Item centre coordinate on the cross axis

    Returns
    -------
    list[Placement]
        One entry per item, in stacking order.
    """
    _check_axis(axis)
    if count < 0:
        raise ValueError(f"count must be >= 0, got {count}")

    length = approximate_length(path, subdivisions)
    pitch = item_extent + spacing

    placements = []
    for i in range(count):
        along = i * pitch + item_extent / 2.0 - scroll_offset
        center = (along, cross) if axis == "horizontal" else (cross, along)
        placements.append(
            place_item(path, along, center, axis, length, delta, subdivisions)
        )

    logger.debug(
        "Placed %d items (length=%.3f, scroll_offset=%.3f, on_path=%d)",
        count, length, scroll_offset, sum(p.point is not None for p in placements),
    )
    return placements
