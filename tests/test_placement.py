"""
Unit tests for frame placement.
These tests don't require KiCad to be running.
"""
import pytest
from callout.core.models import LeaderPosition, Point, CONCRETE_POSITIONS
from callout.core.placement import place_frame, frame_extent

ANCHOR = Point(200, 150)
RECT_W = 210
RECT_H = 100
LEADER_W = 30
LEADER_H = 15


def _place(position):
    return place_frame(ANCHOR, RECT_W, RECT_H, LEADER_W, LEADER_H, position)


class TestPlaceFrame:
    """Tests for the frame origin of every position"""

    @pytest.mark.parametrize("position,expected", [
        (LeaderPosition.TOP, (95, 150)),
        (LeaderPosition.BOTTOM, (95, 35)),
        (LeaderPosition.LEFT, (200, 100)),
        (LeaderPosition.RIGHT, (-40, 100)),
        (LeaderPosition.UPPER_LEFT, (185, 150)),
        (LeaderPosition.UPPER_RIGHT, (5, 150)),
        (LeaderPosition.LOWER_LEFT, (185, 35)),
        (LeaderPosition.LOWER_RIGHT, (5, 35)),
    ])
    def test_origin(self, position, expected):
        placement = _place(position)
        assert (placement.origin_x, placement.origin_y) == pytest.approx(expected)

    def test_left_reserves_margin(self):
        """Only the left leader reserves a margin inside the frame"""
        assert _place(LeaderPosition.LEFT).left_margin == LEADER_H
        for position in CONCRETE_POSITIONS:
            if position != LeaderPosition.LEFT:
                assert _place(position).left_margin == 0.0

    def test_right_corners_share_x(self):
        """Both right-hand corners put the apex the same distance from the body edge"""
        assert _place(LeaderPosition.UPPER_RIGHT).origin_x == pytest.approx(
            _place(LeaderPosition.LOWER_RIGHT).origin_x
        )

    def test_automatic_rejected(self):
        with pytest.raises(ValueError):
            _place(LeaderPosition.AUTOMATIC)


class TestFrameExtent:
    """Tests for the outer frame size"""

    @pytest.mark.parametrize("position", [LeaderPosition.LEFT, LeaderPosition.RIGHT])
    def test_side_leaders_add_width(self, position):
        assert frame_extent(RECT_W, RECT_H, LEADER_H, position) == (225, 100)

    @pytest.mark.parametrize("position", [
        LeaderPosition.TOP,
        LeaderPosition.BOTTOM,
        LeaderPosition.UPPER_LEFT,
        LeaderPosition.UPPER_RIGHT,
        LeaderPosition.LOWER_LEFT,
        LeaderPosition.LOWER_RIGHT,
    ])
    def test_other_leaders_add_height(self, position):
        assert frame_extent(RECT_W, RECT_H, LEADER_H, position) == (210, 115)
