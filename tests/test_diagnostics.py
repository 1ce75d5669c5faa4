"""
Unit tests for placement diagnostics.
These tests don't require KiCad to be running.
"""
from callout.core.diagnostics import find_overflowing_edges
from callout.core.engine import run_placement
from callout.core.models import CalloutContent, CalloutStyle, LeaderPosition, MoveDirection, Point, Viewport

VIEWPORT = Viewport(400, 300)


def _reference_style(**overrides):
    values = dict(
        corner_radius=10, leader_width=30, leader_height=15,
        min_width=210, min_height=100, max_width=210, max_height=100,
    )
    values.update(overrides)
    return CalloutStyle(**values)


class TestFindOverflowingEdges:
    """Tests for overflow detection on a finished frame"""

    def test_frame_inside(self):
        assert find_overflowing_edges((10, 10, 100, 100), VIEWPORT) == []

    def test_every_edge(self):
        edges = find_overflowing_edges((-5, -5, 500, 400), VIEWPORT)
        assert edges == ["left", "top", "right", "bottom"]

    def test_edge_buffer(self):
        assert find_overflowing_edges((10, 10, 100, 100), VIEWPORT, edge_buffer=20) == ["left", "top"]


class TestPlacementDiagnostic:
    """Tests for the diagnostic captured by a placement pass"""

    def test_centred_pass(self):
        diag = run_placement(Point(200, 150), VIEWPORT, CalloutContent(), _reference_style()).diagnostic

        assert diag.requested_position == LeaderPosition.AUTOMATIC
        assert diag.provisional_position == LeaderPosition.BOTTOM
        assert diag.adjusted_position == LeaderPosition.BOTTOM
        assert diag.horizontal_check == MoveDirection.RIGHT
        assert diag.blocked_moves == [MoveDirection.RIGHT]
        assert diag.applied_moves == []
        assert (diag.provisional_frame_width, diag.provisional_frame_height) == (210, 115)
        assert diag.frame_bounds == (95, 35, 210, 115)
        assert not diag.has_overflow()
        assert not diag.path_rebuilt

    def test_moved_pass(self):
        diag = run_placement(Point(390, 150), VIEWPORT, CalloutContent(), _reference_style()).diagnostic

        assert diag.adjusted_position == LeaderPosition.LOWER_LEFT
        assert diag.applied_moves == [MoveDirection.RIGHT]
        assert diag.path_rebuilt
        # Moving the leader to the left corner still leaves the body past the edge
        assert diag.overflowing_edges == ["right"]
        assert diag.has_overflow()

    def test_fixed_position_overflow_reported(self):
        style = _reference_style(leader_position=LeaderPosition.TOP)
        diag = run_placement(Point(200, 290), VIEWPORT, CalloutContent(), style).diagnostic

        assert diag.adjusted_position == LeaderPosition.TOP
        assert diag.horizontal_check is None
        assert "bottom" in diag.overflowing_edges

    def test_summary(self):
        diag = run_placement(Point(390, 150), VIEWPORT, CalloutContent(), _reference_style()).diagnostic
        summary = diag.summary()

        assert "Placement Diagnostic" in summary
        assert "adjusted: LOWER_LEFT" in summary
        assert "applied: ['RIGHT']" in summary
        assert "OVERFLOW: right" in summary

    def test_summary_fits(self):
        diag = run_placement(Point(200, 150), VIEWPORT, CalloutContent(), _reference_style()).diagnostic
        assert "Fits viewport" in diag.summary()
