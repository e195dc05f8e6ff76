"""Engine functions bound to a validated ``EngineV1`` configuration.

Collaborators that load ``configs/engine.v1.yaml`` once can hold a
``PathEngine`` instead of threading ``subdivisions`` and ``delta`` through
every call::

    engine = PathEngine.from_config(validators.load_engine_config(cfg_path))
    length = engine.length(path)
    angle = engine.tangent_at(path, 0.25)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from pathtrace.engine import length as _length
from pathtrace.engine import placement as _placement
from pathtrace.engine import sampler as _sampler
from pathtrace.engine import tangent as _tangent
from pathtrace.path.commands import Path, Point, PointLike
from pathtrace.utils.validators import EngineV1


@dataclass(frozen=True, slots=True)
class PathEngine:
    """Resolution settings shared by every query."""

    subdivisions: int = _length.CURVE_SUBDIVISIONS
    delta: float = _tangent.TANGENT_DELTA

    def __post_init__(self) -> None:
        if self.subdivisions < 1:
            raise ValueError(f"subdivisions must be >= 1, got {self.subdivisions}")
        if not 0.0 < self.delta < 0.5:
            raise ValueError(f"delta must be in (0, 0.5), got {self.delta}")

    @classmethod
    def from_config(cls, cfg: EngineV1) -> PathEngine:
        return cls(subdivisions=cfg.curve_subdivisions, delta=cfg.tangent_delta)

    def length(self, path: Path) -> float:
        return _length.approximate_length(path, self.subdivisions)

    def point_at(self, path: Path, t: float) -> Optional[Point]:
        return _sampler.point_at(path, t, self.subdivisions)

    def tangent_at(self, path: Path, t: float) -> _tangent.Angle:
        return _tangent.tangent_at(path, t, self.delta, self.subdivisions)

    def bounding_box(self, path: Path) -> Optional[Tuple[float, float, float, float]]:
        return _placement.bounding_box(path, self.subdivisions)

    def place_item(
        self,
        path: Path,
        along: float,
        center: PointLike,
        axis: _placement.Axis = "horizontal",
        path_length: Optional[float] = None,
    ) -> _placement.Placement:
        return _placement.place_item(
            path, along, center, axis, path_length, self.delta, self.subdivisions
        )

    def distribute(
        self,
        path: Path,
        count: int,
        item_extent: float,
        spacing: float = 8.0,
        axis: _placement.Axis = "horizontal",
        scroll_offset: float = 0.0,
        cross: float = 0.0,
    ) -> List[_placement.Placement]:
        return _placement.distribute(
            path, count, item_extent, spacing, axis, scroll_offset, cross,
            self.delta, self.subdivisions,
        )
