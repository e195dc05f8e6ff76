"""Path decoder: ordered traversal with current-point tracking.

Turns a ``Path`` into a stream of ``Segment`` records.  Each record carries
the absolute start point of the command, so downstream code never has to
track state itself:

    MoveTo        -> Segment("move", previous point, target)
    LineTo        -> Segment("line", current, target)
    QuadCurveTo   -> Segment("quad", current, target, (control,))
    CubicCurveTo  -> Segment("cubic", current, target, (control1, control2))
    CloseSubpath  -> Segment("close", current, subpath start)

A path that is empty, or whose first command is not a ``MoveTo``, has no
start point and decodes to nothing.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, Literal, Optional

from pathtrace.path.commands import (
    CloseSubpath,
    CubicCurveTo,
    LineTo,
    MoveTo,
    Path,
    PathCommand,
    Point,
    QuadCurveTo,
)

logger = logging.getLogger(__name__)

SegmentKind = Literal["move", "line", "quad", "cubic", "close"]


@dataclass(frozen=True, slots=True)
class Segment:
    """Geometry implied by one command at its traversal position.

    Parameters
    ----------
    kind : SegmentKind
        Command kind.
    start : Point
        Current point before the command.
    end : Point
        Current point after the command.
    controls : tuple[Point, ...]
        Bézier control points in order; empty for non-curves.
    """

    kind: SegmentKind
    start: Point
    end: Point
    controls: tuple[Point, ...] = ()

    @property
    def draws(self) -> bool:
        """True for every kind except ``move``."""
        return self.kind != "move"


def start_point(path: Path) -> Optional[Point]:
    """Point of the leading ``MoveTo``, or None for a degenerate path."""
    if path.is_empty:
        return None
    first = path.commands[0]
    if not isinstance(first, MoveTo):
        return None
    return first.point


class PathDecoder:
    """Stateful walker over a path's commands.

    Attributes
    ----------
    current_point : Point | None
        Terminal point of the last processed command.
    subpath_start : Point | None
        Point of the most recent ``MoveTo``; consumed by ``CloseSubpath``.
    """

    def __init__(self, path: Path):
        self.path = path
        self.start_point = start_point(path)
        self.current_point: Optional[Point] = None
        self.subpath_start: Optional[Point] = None

    def __iter__(self) -> Iterator[Segment]:
        if self.start_point is None:
            if not self.path.is_empty:
                logger.debug(
                    "Path starts with %s instead of MoveTo; treating it as empty",
                    type(self.path.commands[0]).__name__,
                )
            return

        self.current_point = self.start_point
        self.subpath_start = self.start_point

        for cmd in self.path.commands:
            seg = self._step(cmd)
            if seg is not None:
                yield seg

    def _step(self, cmd: PathCommand) -> Optional[Segment]:
        current = self.current_point

        if isinstance(cmd, MoveTo):
            seg = Segment("move", current, cmd.point)
            self.subpath_start = cmd.point
        elif isinstance(cmd, LineTo):
            seg = Segment("line", current, cmd.point)
        elif isinstance(cmd, QuadCurveTo):
            seg = Segment("quad", current, cmd.point, (cmd.control,))
        elif isinstance(cmd, CubicCurveTo):
            seg = Segment("cubic", current, cmd.point, (cmd.control1, cmd.control2))
        elif isinstance(cmd, CloseSubpath):
            seg = Segment("close", current, self.subpath_start)
        else:
            # Unknown PathCommand subclasses carry no geometry
            logger.debug("Skipping unsupported path command %s", type(cmd).__name__)
            return None

        self.current_point = seg.end
        return seg


def iter_segments(path: Path) -> Iterator[Segment]:
    """Yield one ``Segment`` per command; nothing for a degenerate path."""
    return iter(PathDecoder(path))
