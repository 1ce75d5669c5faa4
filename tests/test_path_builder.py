"""
Unit tests for callout outline construction.
These tests don't require KiCad to be running.
"""
import math
import pytest
from callout.core.models import (
    ArcTo,
    LeaderPosition,
    MoveTo,
    Point,
    CONCRETE_POSITIONS,
)
from callout.core.path_builder import (
    build_callout_path,
    body_offset,
    expected_segment_count,
    MID_EDGE_SEGMENTS,
    CORNER_NOTCH_SEGMENTS,
)

RECT_W = 210
RECT_H = 100
RADIUS = 10
LEADER_W = 30
LEADER_H = 15


def _build(position, commit=False, radius=RADIUS):
    return build_callout_path(RECT_W, RECT_H, radius, LEADER_W, LEADER_H, position, commit=commit)


def _signed_area(points):
    """Shoelace sum; positive for a clockwise contour with y down"""
    total = 0.0
    for a, b in zip(points, points[1:] + points[:1]):
        total += a.x * b.y - b.x * a.y
    return total / 2.0


class TestPathShape:
    """Tests for path structure"""

    @pytest.mark.parametrize("position", CONCRETE_POSITIONS)
    def test_path_is_closed(self, position):
        path = _build(position)
        assert path.is_closed
        assert isinstance(path.segments[0], MoveTo)
        assert path.position == position

    @pytest.mark.parametrize("position", CONCRETE_POSITIONS)
    def test_segment_count(self, position):
        path = _build(position)
        assert len(path.segments) == expected_segment_count(position)

    def test_segment_count_constants(self):
        assert MID_EDGE_SEGMENTS == 12
        assert CORNER_NOTCH_SEGMENTS == 10
        assert expected_segment_count(LeaderPosition.TOP) == 12
        assert expected_segment_count(LeaderPosition.LOWER_LEFT) == 10

    @pytest.mark.parametrize("position", CONCRETE_POSITIONS)
    def test_arc_count(self, position):
        """Corner notches replace one of the four corner arcs"""
        arcs = [s for s in _build(position).segments if isinstance(s, ArcTo)]
        assert len(arcs) == (3 if position.is_corner else 4)

    @pytest.mark.parametrize("position", CONCRETE_POSITIONS)
    def test_contour_runs_clockwise(self, position):
        assert _signed_area(_build(position).points()) > 0

    @pytest.mark.parametrize("position", CONCRETE_POSITIONS)
    def test_zero_radius_still_closed(self, position):
        path = _build(position, radius=0)
        assert path.is_closed
        assert len(path.segments) == expected_segment_count(position)

    def test_automatic_rejected(self):
        with pytest.raises(ValueError):
            _build(LeaderPosition.AUTOMATIC)


class TestApex:
    """Tests for the leader apex location in frame coordinates"""

    @pytest.mark.parametrize("position,apex", [
        (LeaderPosition.TOP, (105, 0)),
        (LeaderPosition.BOTTOM, (105, 115)),
        (LeaderPosition.LEFT, (0, 50)),
        (LeaderPosition.RIGHT, (225, 50)),
        (LeaderPosition.UPPER_LEFT, (15, 0)),
        (LeaderPosition.UPPER_RIGHT, (195, 0)),
        (LeaderPosition.LOWER_LEFT, (15, 115)),
        (LeaderPosition.LOWER_RIGHT, (195, 115)),
    ])
    def test_apex_point(self, position, apex):
        assert Point(*apex) in _build(position).points()

    @pytest.mark.parametrize("position", CONCRETE_POSITIONS)
    def test_path_stays_inside_frame(self, position):
        """Every point lies within the frame that starts at (0, 0)"""
        if position in (LeaderPosition.LEFT, LeaderPosition.RIGHT):
            frame_w, frame_h = RECT_W + LEADER_H, RECT_H
        else:
            frame_w, frame_h = RECT_W, RECT_H + LEADER_H

        for point in _build(position).points():
            assert -1e-9 <= point.x <= frame_w + 1e-9
            assert -1e-9 <= point.y <= frame_h + 1e-9


class TestBodyOffset:
    """Tests for the body box offset inside the frame"""

    def test_offsets(self):
        assert body_offset(LEADER_H, LeaderPosition.LEFT) == (LEADER_H, 0.0)
        assert body_offset(LEADER_H, LeaderPosition.TOP) == (0.0, LEADER_H)
        assert body_offset(LEADER_H, LeaderPosition.UPPER_LEFT) == (0.0, LEADER_H)
        assert body_offset(LEADER_H, LeaderPosition.UPPER_RIGHT) == (0.0, LEADER_H)
        assert body_offset(LEADER_H, LeaderPosition.BOTTOM) == (0.0, 0.0)
        assert body_offset(LEADER_H, LeaderPosition.RIGHT) == (0.0, 0.0)

    def test_bottom_path_starts_after_top_left_corner(self):
        assert _build(LeaderPosition.BOTTOM).start == Point(RADIUS, 0)

    def test_top_path_starts_below_leader(self):
        assert _build(LeaderPosition.TOP).start == Point(RADIUS, LEADER_H)


class TestArcs:
    """Tests for corner arc parameters"""

    def test_top_right_arc(self):
        path = _build(LeaderPosition.BOTTOM)
        arc = path.segments[2]
        assert isinstance(arc, ArcTo)
        assert (arc.center_x, arc.center_y) == (RECT_W - RADIUS, RADIUS)
        assert (arc.start_angle, arc.end_angle) == (-90.0, 0.0)
        assert arc.end == Point(RECT_W, RADIUS)

        mid = arc.midpoint()
        assert mid.x == pytest.approx(RECT_W - RADIUS + RADIUS * math.cos(math.radians(45)))
        assert mid.y == pytest.approx(RADIUS - RADIUS * math.sin(math.radians(45)))

    def test_arcs_sweep_clockwise(self):
        for segment in _build(LeaderPosition.BOTTOM).segments:
            if isinstance(segment, ArcTo):
                assert segment.clockwise
                assert segment.end_angle - segment.start_angle == pytest.approx(90.0)


class TestCommit:
    """Tests for the commit flag"""

    def test_provisional_by_default(self):
        assert not _build(LeaderPosition.BOTTOM).committed

    def test_commit(self):
        assert _build(LeaderPosition.BOTTOM, commit=True).committed
