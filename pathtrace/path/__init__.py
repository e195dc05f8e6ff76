"""Path data model: commands, builder, decoder and file loader."""

from pathtrace.path.commands import (
    CloseSubpath,
    CubicCurveTo,
    LineTo,
    MoveTo,
    Path,
    PathBuilder,
    PathCommand,
    Point,
    QuadCurveTo,
    as_point,
)
from pathtrace.path.decoder import PathDecoder, Segment, iter_segments, start_point

__all__ = [
    "CloseSubpath",
    "CubicCurveTo",
    "LineTo",
    "MoveTo",
    "Path",
    "PathBuilder",
    "PathCommand",
    "PathDecoder",
    "Point",
    "QuadCurveTo",
    "Segment",
    "as_point",
    "iter_segments",
    "start_point",
]
