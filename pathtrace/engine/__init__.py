"""Geometry engine: arc length, point sampling, tangents and placement.

All functions are pure over an immutable ``Path``; flattened geometry is
memoized per (path, subdivisions) and safe to share between threads.
"""

from pathtrace.engine.length import (
    CURVE_SUBDIVISIONS,
    ChordTable,
    approximate_length,
    clear_cache,
    flatten,
)
from pathtrace.engine.placement import Placement, bounding_box, distribute, place_item
from pathtrace.engine.configured import PathEngine
from pathtrace.engine.sampler import in_time_domain, point_at, point_at_distance
from pathtrace.engine.tangent import TANGENT_DELTA, Angle, tangent_at

__all__ = [
    "CURVE_SUBDIVISIONS",
    "TANGENT_DELTA",
    "Angle",
    "ChordTable",
    "PathEngine",
    "Placement",
    "approximate_length",
    "bounding_box",
    "clear_cache",
    "distribute",
    "flatten",
    "in_time_domain",
    "place_item",
    "point_at",
    "point_at_distance",
    "tangent_at",
]
