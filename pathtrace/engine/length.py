"""Arc-length estimation by fixed-resolution chord flattening.

Every drawing segment becomes one or more straight chords:
    - line / close: one chord, exact length
    - quad / cubic: ``subdivisions`` chords between Bernstein samples at
      i / subdivisions
    - move: no chord (subpaths are not joined)

The resulting ``ChordTable`` is shared with the sampler, so
``approximate_length`` and ``point_at`` always agree on where distance
``s`` lies along the path.  Tables are memoized per (path, subdivisions);
``Path`` is immutable, so the memo never goes stale.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

import torch

from pathtrace.path.commands import Path, Point
from pathtrace.path.decoder import PathDecoder
from pathtrace.utils import geometry

logger = logging.getLogger(__name__)

CURVE_SUBDIVISIONS = 100


@dataclass(frozen=True, eq=False)
class ChordTable:
    """Flattened path geometry.

    Attributes
    ----------
    origin : Point | None
        Start point of the path; None for a degenerate path.
    starts, ends : torch.Tensor
        Chord endpoints, shape (M, 2), float64.
    lengths : torch.Tensor
        Chord lengths, shape (M,).
    cumulative : torch.Tensor
        Arc length at the end of each chord, shape (M,).

    Notes
    -----
    Tensors are shared through the memo and must not be modified in place.
    """

    origin: Optional[Point]
    starts: torch.Tensor
    ends: torch.Tensor
    lengths: torch.Tensor
    cumulative: torch.Tensor

    @property
    def chord_count(self) -> int:
        return int(self.lengths.shape[0])

    @property
    def total_length(self) -> float:
        if self.chord_count == 0:
            return 0.0
        return float(self.cumulative[-1])

    @property
    def end_point(self) -> Optional[Point]:
        """Terminal point of the last chord."""
        if self.chord_count == 0:
            return None
        x, y = self.ends[-1].tolist()
        return Point(x, y)


def _empty_table(origin: Optional[Point]) -> ChordTable:
    empty_pts = torch.zeros((0, 2), dtype=geometry.DTYPE)
    empty = torch.zeros(0, dtype=geometry.DTYPE)
    return ChordTable(origin, empty_pts, empty_pts, empty, empty)


@lru_cache(maxsize=256)
def _flatten_cached(path: Path, subdivisions: int) -> ChordTable:
    decoder = PathDecoder(path)
    starts = []
    ends = []

    for seg in decoder:
        if seg.kind == "move":
            continue

        p0 = geometry.as_point_tensor(seg.start.as_tuple())
        p1 = geometry.as_point_tensor(seg.end.as_tuple())

        if seg.kind in ("line", "close"):
            starts.append(p0.unsqueeze(0))
            ends.append(p1.unsqueeze(0))
            continue

        controls = [geometry.as_point_tensor(c.as_tuple()) for c in seg.controls]
        if seg.kind == "quad":
            pts = geometry.flatten_quadratic(p0, controls[0], p1, subdivisions)
        else:
            pts = geometry.flatten_cubic(p0, controls[0], controls[1], p1, subdivisions)
        starts.append(pts[:-1])
        ends.append(pts[1:])

    if not starts:
        logger.debug("Path has no drawable segments; length is 0")
        return _empty_table(decoder.start_point)

    starts_t = torch.cat(starts, dim=0)
    ends_t = torch.cat(ends, dim=0)
    lengths = geometry.chord_lengths(starts_t, ends_t)
    table = ChordTable(
        origin=decoder.start_point,
        starts=starts_t,
        ends=ends_t,
        lengths=lengths,
        cumulative=geometry.cumulative_lengths(lengths),
    )
    logger.debug(
        "Flattened %d commands into %d chords (subdivisions=%d, length=%.6g)",
        len(path), table.chord_count, subdivisions, table.total_length,
    )
    return table


def flatten(path: Path, subdivisions: int = CURVE_SUBDIVISIONS) -> ChordTable:
    """Flatten a path into chords at the given curve resolution.

    Parameters
    ----------
    path : Path
        Immutable path
    subdivisions : int
        Chords per quadratic/cubic curve, default 100

    Returns
    -------
    ChordTable
        Memoized chord table

    Raises
    ------
    ValueError
        If subdivisions < 1
    """
    subdivisions = int(subdivisions)
    if subdivisions < 1:
        raise ValueError(f"subdivisions must be >= 1, got {subdivisions}")
    return _flatten_cached(path, subdivisions)


def approximate_length(path: Path, subdivisions: int = CURVE_SUBDIVISIONS) -> float:
    """Approximate arc length of a path.

    Parameters
    ----------
    path : Path
        Immutable path
    subdivisions : int
        Chords per quadratic/cubic curve, default 100

    Returns
    -------
    float
        Sum of chord lengths, >= 0.  Zero for an empty path or one that
        does not start with a MoveTo.

    Notes
    -----
    Lines and closures contribute their exact length; curves contribute
    the length of their inscribed polyline, which never exceeds the true
    arc length and converges to it as subdivisions grows.
    """
    return flatten(path, subdivisions).total_length


def clear_cache() -> None:
    """Drop all memoized chord tables."""
    _flatten_cached.cache_clear()
