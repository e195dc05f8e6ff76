"""Numeric kernels for Bézier curves and polylines.

Provides:
    - Quadratic and cubic Bézier evaluation (Bernstein basis)
    - Fixed-resolution chord flattening of a curve
    - Polyline operations: chord lengths, cumulative arc length, bbox
    - Circular arc → cubic Bézier conversion

Used by:
    - engine.length: chord table construction
    - engine.sampler: arc-length lookup
    - engine.placement: bounding box
    - path.commands: PathBuilder.add_arc

All tensors are float64 on CPU so that results are deterministic and
identical across calls. Points are (x, y) tuples at API boundaries and
tensors of shape (2,) or (N, 2) inside.
"""

import math
from typing import List, Sequence, Tuple

import torch

DTYPE = torch.float64

# Largest sweep covered by a single cubic when converting arcs
MAX_ARC_SWEEP = math.pi / 2


def as_point_tensor(xy: Sequence[float]) -> torch.Tensor:
    """Convert an (x, y) pair to a float64 tensor of shape (2,)."""
    return torch.tensor([float(xy[0]), float(xy[1])], dtype=DTYPE)


def parameter_steps(subdivisions: int) -> torch.Tensor:
    """Equally spaced Bézier parameters i / subdivisions, i = 0..subdivisions.

    Parameters
    ----------
    subdivisions : int
        Number of chords per curve, >= 1

    Returns
    -------
    torch.Tensor
        Shape (subdivisions + 1,), first 0.0, last 1.0

    Raises
    ------
    ValueError
        If subdivisions < 1
    """
    if subdivisions < 1:
        raise ValueError(f"subdivisions must be >= 1, got {subdivisions}")
    return torch.arange(subdivisions + 1, dtype=DTYPE) / subdivisions


def bezier_quadratic_eval(
    p0: torch.Tensor,
    c: torch.Tensor,
    p1: torch.Tensor,
    t: torch.Tensor
) -> torch.Tensor:
    """Evaluate quadratic Bézier curve at parameters t.

    Parameters
    ----------
    p0, c, p1 : torch.Tensor
        Start, control and end point, shape (2,)
    t : torch.Tensor
        Parameter values in [0, 1], shape (N,)

    Returns
    -------
    torch.Tensor
        Points on curve, shape (N, 2)

    Notes
    -----
    B(t) = (1-t)²·p0 + 2(1-t)t·c + t²·p1
    """
    t = t.reshape(-1, 1)
    one_minus_t = 1.0 - t

    b0 = one_minus_t ** 2
    b1 = 2.0 * one_minus_t * t
    b2 = t ** 2

    return b0 * p0 + b1 * c + b2 * p1


def bezier_cubic_eval(
    p0: torch.Tensor,
    c1: torch.Tensor,
    c2: torch.Tensor,
    p1: torch.Tensor,
    t: torch.Tensor
) -> torch.Tensor:
    """Evaluate cubic Bézier curve at parameters t.

    Parameters
    ----------
    p0, c1, c2, p1 : torch.Tensor
        Start, first control, second control and end point, shape (2,)
    t : torch.Tensor
        Parameter values in [0, 1], shape (N,)

    Returns
    -------
    torch.Tensor
        Points on curve, shape (N, 2)

    Notes
    -----
    B(t) = (1-t)³·p0 + 3(1-t)²t·c1 + 3(1-t)t²·c2 + t³·p1
    """
    t = t.reshape(-1, 1)
    one_minus_t = 1.0 - t

    b0 = one_minus_t ** 3
    b1 = 3.0 * (one_minus_t ** 2) * t
    b2 = 3.0 * one_minus_t * (t ** 2)
    b3 = t ** 3

    return b0 * p0 + b1 * c1 + b2 * c2 + b3 * p1


def flatten_quadratic(
    p0: torch.Tensor,
    c: torch.Tensor,
    p1: torch.Tensor,
    subdivisions: int
) -> torch.Tensor:
    """Polyline through a quadratic Bézier at fixed resolution, shape (subdivisions + 1, 2).

    The first and last vertices are exactly p0 and p1.
    """
    return bezier_quadratic_eval(p0, c, p1, parameter_steps(subdivisions))


def flatten_cubic(
    p0: torch.Tensor,
    c1: torch.Tensor,
    c2: torch.Tensor,
    p1: torch.Tensor,
    subdivisions: int
) -> torch.Tensor:
    """Polyline through a cubic Bézier at fixed resolution, shape (subdivisions + 1, 2).

    The first and last vertices are exactly p0 and p1.
    """
    return bezier_cubic_eval(p0, c1, c2, p1, parameter_steps(subdivisions))


def chord_lengths(starts: torch.Tensor, ends: torch.Tensor) -> torch.Tensor:
    """Euclidean length of each chord, shape (M,) for (M, 2) inputs."""
    if starts.shape[0] == 0:
        return torch.zeros(0, dtype=DTYPE)
    return torch.norm(ends - starts, dim=1)


def cumulative_lengths(lengths: torch.Tensor) -> torch.Tensor:
    """Running arc length at the end of each chord, shape (M,).

    Notes
    -----
    Non-decreasing because chord lengths are non-negative. The last entry
    is the total length.
    """
    return torch.cumsum(lengths, dim=0)


def polyline_bbox(points: torch.Tensor) -> Tuple[float, float, float, float]:
    """Compute axis-aligned bounding box of polyline.

    Parameters
    ----------
    points : torch.Tensor
        Polyline vertices, shape (N, 2)

    Returns
    -------
    Tuple[float, float, float, float]
        (xmin, ymin, xmax, ymax); (0, 0, 0, 0) if no points
    """
    if points.shape[0] == 0:
        return (0.0, 0.0, 0.0, 0.0)

    mins = points.min(dim=0).values
    maxs = points.max(dim=0).values

    return (mins[0].item(), mins[1].item(), maxs[0].item(), maxs[1].item())


def arc_to_cubics(
    center: Tuple[float, float],
    radius: float,
    start_angle: float,
    end_angle: float,
    clockwise: bool = False
) -> List[Tuple[Tuple[float, float], Tuple[float, float], Tuple[float, float], Tuple[float, float]]]:
    """Approximate a circular arc with cubic Bézier pieces.

    Parameters
    ----------
    center : (float, float)
        Arc centre
    radius : float
        Arc radius, >= 0
    start_angle, end_angle : float
        Endpoint angles in radians, measured from +x towards +y
    clockwise : bool
        Sweep direction in a y-down frame. False sweeps with increasing
        angle, True with decreasing angle.

    Returns
    -------
    list of (p0, c1, c2, p1)
        One tuple per piece, each sweeping at most 90°. An arc with zero
        sweep yields an empty list.

    Notes
    -----
    The sweep is normalised to (0, 2π] in the chosen direction;
    start_angle == end_angle produces no pieces, while a difference that is
    a non-zero multiple of 2π draws a full circle. Handle length is
    (4/3)·tan(θ/4)·r, which keeps the radial error below 0.03% for θ = 90°.
    """
    if radius < 0:
        raise ValueError(f"radius must be >= 0, got {radius}")

    raw = end_angle - start_angle
    if raw == 0.0 or radius == 0.0:
        return []

    turn = 2.0 * math.pi
    if clockwise:
        sweep = -((-raw) % turn) or -turn
    else:
        sweep = (raw % turn) or turn

    n_pieces = max(1, math.ceil(abs(sweep) / MAX_ARC_SWEEP - 1e-12))
    step = sweep / n_pieces
    k = 4.0 / 3.0 * math.tan(step / 4.0)
    cx, cy = center

    pieces = []
    a0 = start_angle
    for _ in range(n_pieces):
        a1 = a0 + step
        cos0, sin0 = math.cos(a0), math.sin(a0)
        cos1, sin1 = math.cos(a1), math.sin(a1)

        p0 = (cx + radius * cos0, cy + radius * sin0)
        p1 = (cx + radius * cos1, cy + radius * sin1)
        c1 = (p0[0] - k * radius * sin0, p0[1] + k * radius * cos0)
        c2 = (p1[0] + k * radius * sin1, p1[1] - k * radius * cos1)

        pieces.append((p0, c1, c2, p1))
        a0 = a1

    return pieces
