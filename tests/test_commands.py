"""Tests for path commands, the Path value and PathBuilder.

Validates dataclass creation, immutability, coordinate validation, builder
chaining and arc emission.
"""

from __future__ import annotations

import dataclasses
import math

import pytest

from pathtrace.path.commands import (
    CloseSubpath,
    CubicCurveTo,
    LineTo,
    MoveTo,
    Path,
    PathBuilder,
    Point,
    QuadCurveTo,
    as_point,
)


# ---------------------------------------------------------------------------
# Points
# ---------------------------------------------------------------------------


class TestPoint:
    def test_fields(self) -> None:
        p = Point(1.5, -2.0)
        assert p.x == 1.5
        assert p.y == -2.0
        assert p.as_tuple() == (1.5, -2.0)

    def test_distance(self) -> None:
        assert Point(0.0, 0.0).distance_to(Point(3.0, 4.0)) == 5.0

    @pytest.mark.parametrize("x, y", [(math.nan, 0.0), (0.0, math.inf), (-math.inf, 1.0)])
    def test_rejects_non_finite(self, x: float, y: float) -> None:
        with pytest.raises(ValueError, match="finite"):
            Point(x, y)

    def test_frozen(self) -> None:
        p = Point(1.0, 2.0)
        with pytest.raises(dataclasses.FrozenInstanceError):
            p.x = 3.0  # type: ignore[misc]

    def test_as_point_from_tuple(self) -> None:
        assert as_point((3, 4)) == Point(3.0, 4.0)

    def test_as_point_passthrough(self) -> None:
        p = Point(1.0, 1.0)
        assert as_point(p) is p

    def test_as_point_wrong_arity(self) -> None:
        with pytest.raises(ValueError, match=r"\(x, y\) pair"):
            as_point((1.0, 2.0, 3.0))


# ---------------------------------------------------------------------------
# Path value
# ---------------------------------------------------------------------------


class TestPath:
    def test_list_is_frozen_into_tuple(self) -> None:
        path = Path([MoveTo(Point(0, 0)), LineTo(Point(1, 0))])
        assert isinstance(path.commands, tuple)
        assert len(path) == 2

    def test_empty(self) -> None:
        assert Path().is_empty
        assert len(Path()) == 0

    def test_rejects_non_commands(self) -> None:
        with pytest.raises(TypeError, match="command 1 must be a PathCommand"):
            Path([MoveTo(Point(0, 0)), (1.0, 2.0)])  # type: ignore[list-item]

    def test_equal_paths_hash_equal(self) -> None:
        a = PathBuilder().move_to((0, 0)).line_to((10, 0)).build()
        b = PathBuilder().move_to((0, 0)).line_to((10, 0)).build()
        assert a == b
        assert hash(a) == hash(b)

    def test_different_kinds_not_equal(self) -> None:
        assert MoveTo(Point(1, 1)) != LineTo(Point(1, 1))

    def test_iteration_order(self) -> None:
        cmds = [MoveTo(Point(0, 0)), LineTo(Point(1, 0)), CloseSubpath()]
        assert list(Path(cmds)) == cmds


# ---------------------------------------------------------------------------
# Builder
# ---------------------------------------------------------------------------


class TestPathBuilder:
    def test_chaining_emits_commands(self) -> None:
        path = (
            PathBuilder()
            .move_to((0, 0))
            .line_to((10, 0))
            .quad_curve_to((10, 10), (15, 5))
            .curve_to((0, 10), (8, 14), (2, 14))
            .close_subpath()
            .build()
        )
        assert [type(c) for c in path] == [
            MoveTo, LineTo, QuadCurveTo, CubicCurveTo, CloseSubpath,
        ]
        assert path.commands[2] == QuadCurveTo(Point(10, 10), Point(15, 5))
        assert path.commands[3] == CubicCurveTo(Point(0, 10), Point(8, 14), Point(2, 14))

    def test_build_snapshot_is_independent(self) -> None:
        builder = PathBuilder().move_to((0, 0))
        first = builder.build()
        builder.line_to((1, 1))
        assert len(first) == 1
        assert len(builder.build()) == 2

    def test_add_lines(self) -> None:
        path = PathBuilder().add_lines([(0, 0), (1, 0), (1, 1)]).build()
        assert path.commands == (
            MoveTo(Point(0, 0)), LineTo(Point(1, 0)), LineTo(Point(1, 1)),
        )

    def test_add_lines_empty(self) -> None:
        assert PathBuilder().add_lines([]).build().is_empty

    def test_add_rect(self) -> None:
        path = PathBuilder().add_rect(1, 2, 3, 4).build()
        assert path.commands[0] == MoveTo(Point(1, 2))
        assert path.commands[2] == LineTo(Point(4, 6))
        assert isinstance(path.commands[-1], CloseSubpath)

    def test_add_arc_on_empty_builder_starts_with_move(self) -> None:
        path = PathBuilder().add_arc((200, 200), 150, 180, 0).build()
        first = path.commands[0]
        assert isinstance(first, MoveTo)
        assert first.point.x == pytest.approx(50.0)
        assert first.point.y == pytest.approx(200.0)
        # 180° sweep → two quarter-circle cubics
        assert [type(c) for c in path.commands[1:]] == [CubicCurveTo, CubicCurveTo]
        last = path.commands[-1]
        assert last.point.x == pytest.approx(350.0)
        assert last.point.y == pytest.approx(200.0, abs=1e-9)

    def test_add_arc_after_current_point_joins_with_line(self) -> None:
        path = PathBuilder().move_to((0, 0)).add_arc((10, 0), 5, 180, 270).build()
        assert isinstance(path.commands[1], LineTo)
        assert path.commands[1].point.x == pytest.approx(5.0)

    def test_add_arc_upper_half_in_y_down_frame(self) -> None:
        path = PathBuilder().add_arc((200, 200), 150, 180, 0, clockwise=False).build()
        join = path.commands[1].point
        assert join.x == pytest.approx(200.0)
        assert join.y == pytest.approx(50.0)

    def test_add_arc_clockwise_takes_lower_half(self) -> None:
        path = PathBuilder().add_arc((200, 200), 150, 180, 0, clockwise=True).build()
        join = path.commands[1].point
        assert join.y == pytest.approx(350.0)

    def test_add_arc_zero_sweep_emits_only_move(self) -> None:
        path = PathBuilder().add_arc((0, 0), 10, 45, 45).build()
        assert len(path) == 1
        assert isinstance(path.commands[0], MoveTo)
