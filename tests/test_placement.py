"""Tests for item placement along a path.

Tests:
    - place_item time/point/offset/rotation on horizontal and vertical axes
    - Items scrolled off either end keep a zero offset
    - distribute() stacking, scroll offset and cross-axis coordinate
    - bounding_box() of flattened paths
    - PathEngine forwards its resolution settings

Run:
    pytest tests/test_placement.py -v
"""

import pytest

from pathtrace.engine.configured import PathEngine
from pathtrace.engine.length import approximate_length
from pathtrace.engine.placement import bounding_box, distribute, place_item
from pathtrace.engine.tangent import Angle
from pathtrace.path.commands import Path, PathBuilder, Point
from pathtrace.utils.validators import EngineV1


@pytest.fixture
def horizontal_line():
    return PathBuilder().move_to((0, 0)).line_to((100, 0)).build()


@pytest.fixture
def vertical_line():
    return PathBuilder().move_to((0, 0)).line_to((0, 100)).build()


@pytest.fixture
def wave_path():
    return (
        PathBuilder()
        .move_to((50, 100))
        .curve_to((350, 100), (150, 200), (250, 0))
        .build()
    )


# ============================================================================
# SINGLE ITEM
# ============================================================================

def test_place_item_horizontal(horizontal_line):
    placement = place_item(horizontal_line, 25.0, (25.0, 10.0))

    assert placement.time == pytest.approx(0.25)
    assert placement.point == Point(25.0, 0.0)
    assert placement.offset.x == pytest.approx(0.0)
    assert placement.offset.y == pytest.approx(-10.0)
    assert placement.rotation.degrees == pytest.approx(0.0)


def test_place_item_vertical_axis_rotates_back(vertical_line):
    placement = place_item(vertical_line, 50.0, (5.0, 50.0), axis="vertical")

    assert placement.rotation.degrees == pytest.approx(0.0)
    assert placement.offset.x == pytest.approx(-5.0)
    assert placement.offset.y == pytest.approx(0.0)


def test_place_item_past_end(horizontal_line):
    placement = place_item(horizontal_line, 150.0, (150.0, 0.0))

    assert placement.time == pytest.approx(1.5)
    assert placement.point is None
    assert placement.offset == Point(0.0, 0.0)
    assert placement.rotation == Angle.zero()


def test_place_item_before_start(horizontal_line):
    placement = place_item(horizontal_line, -5.0, (-5.0, 0.0))
    assert placement.point is None
    assert placement.offset == Point(0.0, 0.0)


def test_place_item_at_start(horizontal_line):
    placement = place_item(horizontal_line, 0.0, (0.0, 3.0))
    assert placement.point == Point(0.0, 0.0)
    assert placement.offset == Point(0.0, -3.0)
    assert placement.rotation == Angle.zero()


def test_place_item_uses_given_length(horizontal_line):
    placement = place_item(horizontal_line, 25.0, (25.0, 0.0), path_length=50.0)
    assert placement.time == pytest.approx(0.5)
    assert placement.point == Point(50.0, 0.0)


def test_place_item_zero_length_path():
    path = PathBuilder().move_to((5, 5)).build()
    placement = place_item(path, 10.0, (10.0, 0.0), axis="vertical")
    assert placement.time == 0.0
    assert placement.point is None
    assert placement.rotation == Angle.zero()
    assert placement.offset == Point(0.0, 0.0)


def test_place_item_rejects_unknown_axis(horizontal_line):
    with pytest.raises(ValueError, match="axis"):
        place_item(horizontal_line, 1.0, (1.0, 0.0), axis="diagonal")


# ============================================================================
# DISTRIBUTION
# ============================================================================

def test_distribute_stacks_items(horizontal_line):
    placements = distribute(horizontal_line, 6, item_extent=10.0, spacing=10.0)

    assert len(placements) == 6
    assert [p.time for p in placements] == pytest.approx([0.05, 0.25, 0.45, 0.65, 0.85, 1.05])
    assert all(p.point is not None for p in placements[:5])
    assert placements[-1].point is None


def test_distribute_scroll_offset(horizontal_line):
    placements = distribute(horizontal_line, 3, item_extent=10.0, spacing=10.0, scroll_offset=20.0)

    assert placements[0].point is None
    assert placements[1].point.x == pytest.approx(5.0)
    assert placements[2].point.x == pytest.approx(25.0)


def test_distribute_cross_axis(horizontal_line):
    placements = distribute(horizontal_line, 2, item_extent=10.0, cross=40.0)
    assert all(p.offset.y == pytest.approx(-40.0) for p in placements)


def test_distribute_vertical(vertical_line):
    placements = distribute(vertical_line, 2, item_extent=20.0, spacing=0.0, axis="vertical", cross=3.0)
    assert [p.point.y for p in placements] == pytest.approx([10.0, 30.0])
    assert all(p.offset.x == pytest.approx(-3.0) for p in placements)
    assert all(p.rotation.degrees == pytest.approx(0.0) for p in placements)


def test_distribute_empty(wave_path):
    assert distribute(wave_path, 0, item_extent=10.0) == []


def test_distribute_negative_count(wave_path):
    with pytest.raises(ValueError, match="count"):
        distribute(wave_path, -1, item_extent=10.0)


def test_distribute_on_wave_stays_on_curve(wave_path):
    placements = distribute(wave_path, 5, item_extent=40.0)
    on_path = [p for p in placements if p.point is not None]
    assert len(on_path) == 5
    xs = [p.point.x for p in on_path]
    assert xs == sorted(xs)


# ============================================================================
# BOUNDING BOX
# ============================================================================

def test_bounding_box_wave(wave_path):
    xmin, ymin, xmax, ymax = bounding_box(wave_path)
    assert xmin == pytest.approx(50.0)
    assert xmax == pytest.approx(350.0)
    # Curve stays inside its control polygon
    assert 0.0 < ymin < 100.0 < ymax < 200.0


def test_bounding_box_half_wheel():
    path = PathBuilder().add_arc((200, 200), 150, 180, 0).build()
    xmin, ymin, xmax, ymax = bounding_box(path)
    assert (xmin, xmax) == pytest.approx((50.0, 350.0))
    assert ymin == pytest.approx(50.0, abs=0.1)
    assert ymax == pytest.approx(200.0)


def test_bounding_box_empty():
    assert bounding_box(Path()) is None


# ============================================================================
# CONFIGURED ENGINE
# ============================================================================

def test_engine_from_config(wave_path):
    engine = PathEngine.from_config(EngineV1(curve_subdivisions=20, tangent_delta=0.01))

    assert engine.subdivisions == 20
    assert engine.delta == 0.01
    assert engine.length(wave_path) == approximate_length(wave_path, 20)
    assert engine.point_at(wave_path, 1.0) == Point(350.0, 100.0)


def test_engine_defaults(horizontal_line):
    engine = PathEngine()
    assert engine.tangent_at(horizontal_line, 0.5) == Angle(0.0)
    assert engine.bounding_box(horizontal_line) == (0.0, 0.0, 100.0, 0.0)
    assert engine.place_item(horizontal_line, 50.0, (50.0, 0.0)).offset == Point(0.0, 0.0)
    assert len(engine.distribute(horizontal_line, 3, 10.0)) == 3


@pytest.mark.parametrize("kwargs", [{"subdivisions": 0}, {"delta": 0.0}, {"delta": 0.5}])
def test_engine_rejects_bad_settings(kwargs):
    with pytest.raises(ValueError):
        PathEngine(**kwargs)
