"""pathtrace: parametric path geometry for content that follows a curve.

Given a 2D path of lines, quadratic/cubic Béziers and subpath closures, the
engine answers three questions for a presentation layer that lays content
out along the path:
    - approximate_length(path): total arc length
    - point_at(path, t): point at fraction t of the arc length
    - tangent_at(path, t): direction of travel at t

Architecture layers (strict one-way dependency):
    scripts/ → pathtrace/engine/ → pathtrace/path/ → pathtrace/utils/

Key invariants:
    - Paths are immutable values; every query is a pure function of (path, t)
    - Curves are flattened at a fixed resolution (100 chords by default)
    - No query raises for any path or time; undefined results are None,
      zero length or the zero angle
    - Configs are YAML, validated with pydantic
"""

__version__ = "1.0.0"

from pathtrace.engine import (
    Angle,
    PathEngine,
    Placement,
    approximate_length,
    bounding_box,
    distribute,
    place_item,
    point_at,
    tangent_at,
)
from pathtrace.path import (
    CloseSubpath,
    CubicCurveTo,
    LineTo,
    MoveTo,
    Path,
    PathBuilder,
    Point,
    QuadCurveTo,
)

__all__ = [
    "Angle",
    "CloseSubpath",
    "CubicCurveTo",
    "LineTo",
    "MoveTo",
    "Path",
    "PathBuilder",
    "PathEngine",
    "Placement",
    "Point",
    "QuadCurveTo",
    "approximate_length",
    "bounding_box",
    "distribute",
    "place_item",
    "point_at",
    "tangent_at",
]
