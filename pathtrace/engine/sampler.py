"""Arc-length parametrized point sampling.

``point_at(path, t)`` returns the point reached after travelling the
fraction ``t`` of the path's approximate length, i.e. the terminal point of
the path trimmed to [0, t·L].  Trimming walks the same chord table as
``approximate_length``, so sampling is arc-length proportional rather than
Bézier-parameter proportional.

Out-of-domain times and degenerate paths yield None; callers treat that as
"leave this item where it is" rather than as an error.
"""

from __future__ import annotations

import logging
import math
import numbers
from typing import Optional

import torch

from pathtrace.engine.length import CURVE_SUBDIVISIONS, ChordTable, flatten
from pathtrace.path.commands import Path, Point

logger = logging.getLogger(__name__)


def in_time_domain(t: float) -> bool:
    """True when t is a finite real number within [0, 1].

    Strings and bools are not times, even though ``float()`` accepts them.
    """
    if isinstance(t, bool) or not isinstance(t, numbers.Real):
        return False
    t = float(t)
    return math.isfinite(t) and 0.0 <= t <= 1.0


def point_at_distance(table: ChordTable, distance: float) -> Optional[Point]:
    """Point at arc length ``distance`` along a flattened path.

    Parameters
    ----------
    table : ChordTable
        Flattened path
    distance : float
        Arc length from the start, clamped to [0, total_length]

    Returns
    -------
    Point | None
        None when the table has no chords.

    Notes
    -----
    Distance 0 maps to the path origin and the total length to the end of
    the last chord, without interpolation error.  In between, the first
    chord whose cumulative length reaches ``distance`` is interpolated
    linearly; that chord always has positive length.
    """
    n = table.chord_count
    if n == 0 or table.origin is None:
        return None

    total = table.total_length
    if distance <= 0.0:
        return table.origin
    if distance >= total:
        return table.end_point

    target = torch.tensor([distance], dtype=table.cumulative.dtype)
    idx = int(torch.searchsorted(table.cumulative, target).item())
    idx = min(idx, n - 1)

    seg_len = float(table.lengths[idx])
    if seg_len <= 0.0:
        x, y = table.ends[idx].tolist()
        return Point(x, y)

    before = float(table.cumulative[idx]) - seg_len
    frac = min(max((distance - before) / seg_len, 0.0), 1.0)

    xy = table.starts[idx] + frac * (table.ends[idx] - table.starts[idx])
    x, y = xy.tolist()
    return Point(x, y)


def point_at(
    path: Path,
    t: float,
    subdivisions: int = CURVE_SUBDIVISIONS,
) -> Optional[Point]:
    """Point at normalized arc-length time ``t``.

    Parameters
    ----------
    path : Path
        Immutable path
    t : float
        Normalized time in [0, 1]
    subdivisions : int
        Chords per quadratic/cubic curve, default 100

    Returns
    -------
    Point | None
        None if t is outside [0, 1] or not finite, or if the path has no
        start point or zero length.

    Examples
    --------
    >>> path = PathBuilder().move_to((0, 0)).line_to((10, 0)).build()
    >>> point_at(path, 0.5)
    Point(x=5.0, y=0.0)
    """
    if not in_time_domain(t):
        return None

    table = flatten(path, subdivisions)
    total = table.total_length
    if table.origin is None or total <= 0.0:
        logger.debug("Cannot sample degenerate path (length=%s)", total)
        return None

    t = float(t)
    if t == 1.0:
        return table.end_point
    return point_at_distance(table, t * total)
