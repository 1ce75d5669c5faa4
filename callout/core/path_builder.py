"""
Callout outline construction.

Builds the closed outline of a callout: a rounded rectangle with one side or
corner interrupted by the leader. Side positions get a triangle centred on
the edge; corner positions replace the corner arc with a sharp notch.

Coordinates are frame-local (frame origin at 0, 0, y down). The contour runs
clockwise on screen, starting on the top edge just right of the top-left
corner.
"""
from typing import List, Tuple
from .models import (
    ArcTo,
    CalloutPath,
    LeaderPosition,
    LineTo,
    MoveTo,
    PathSegment,
)

# Segment counts including the initial MoveTo
ROUNDED_RECT_SEGMENTS = 9
MID_EDGE_SEGMENTS = ROUNDED_RECT_SEGMENTS + 3  # One edge split into four lines
CORNER_NOTCH_SEGMENTS = ROUNDED_RECT_SEGMENTS + 1  # One arc becomes two lines

# Arc angles (degrees, y down) for each corner: (start, end)
_TOP_RIGHT_ARC = (-90.0, 0.0)
_BOTTOM_RIGHT_ARC = (0.0, 90.0)
_BOTTOM_LEFT_ARC = (90.0, 180.0)
_TOP_LEFT_ARC = (180.0, 270.0)


def body_offset(leader_height: float, position: LeaderPosition) -> Tuple[float, float]:
    """
    Offset of the body box inside the frame.

    Leaders on the top edge or the left side sit inside the frame before the
    body starts, so the body is pushed by one leader height.

    Args:
        leader_height: Leader length
        position: Concrete leader position

    Returns:
        Tuple of (left, top) of the body box in frame coordinates
    """
    left = leader_height if position == LeaderPosition.LEFT else 0.0
    top = leader_height if position in (
        LeaderPosition.TOP, LeaderPosition.UPPER_LEFT, LeaderPosition.UPPER_RIGHT
    ) else 0.0
    return left, top


def _arc(end_x: float, end_y: float, radius: float,
         center_x: float, center_y: float, angles: Tuple[float, float]) -> ArcTo:
    return ArcTo(
        x=end_x,
        y=end_y,
        radius=radius,
        center_x=center_x,
        center_y=center_y,
        start_angle=angles[0],
        end_angle=angles[1],
    )


def build_callout_path(
    rect_width: float,
    rect_height: float,
    corner_radius: float,
    leader_width: float,
    leader_height: float,
    position: LeaderPosition,
    commit: bool = False
) -> CalloutPath:
    """
    Build the closed callout outline for a resolved leader position.

    Args:
        rect_width: Body box width
        rect_height: Body box height
        corner_radius: Radius of the rounded corners
        leader_width: Leader base width
        leader_height: Leader length from body edge to apex
        position: Concrete leader position
        commit: Mark the path for fill and stroke

    Returns:
        CalloutPath whose last segment ends at its MoveTo point

    Raises:
        ValueError: If position is AUTOMATIC
    """
    if not position.is_concrete:
        raise ValueError("Cannot build a callout path for an unresolved leader position")

    r = corner_radius
    half_leader = leader_width / 2.0

    left, top = body_offset(leader_height, position)
    right = left + rect_width
    bottom = top + rect_height
    center_x = left + rect_width / 2.0
    center_y = top + rect_height / 2.0

    segments: List[PathSegment] = []

    # Start just right of the top-left corner (or its notch)
    start_x = left + leader_width if position == LeaderPosition.UPPER_LEFT else left + r
    segments.append(MoveTo(start_x, top))

    # Top edge, left to right
    if position == LeaderPosition.TOP:
        segments.append(LineTo(center_x - half_leader, top))
        segments.append(LineTo(center_x, top - leader_height))
        segments.append(LineTo(center_x + half_leader, top))

    # Top-right corner
    if position == LeaderPosition.UPPER_RIGHT:
        segments.append(LineTo(right - leader_width, top))
        segments.append(LineTo(right - half_leader, top - leader_height))
        segments.append(LineTo(right, top))
    else:
        segments.append(LineTo(right - r, top))
        segments.append(_arc(right, top + r, r, right - r, top + r, _TOP_RIGHT_ARC))

    # Right edge, top to bottom
    if position == LeaderPosition.RIGHT:
        segments.append(LineTo(right, center_y - half_leader))
        segments.append(LineTo(right + leader_height, center_y))
        segments.append(LineTo(right, center_y + half_leader))

    # Bottom-right corner
    if position == LeaderPosition.LOWER_RIGHT:
        segments.append(LineTo(right, bottom))
        segments.append(LineTo(right - half_leader, bottom + leader_height))
        segments.append(LineTo(right - leader_width, bottom))
    else:
        segments.append(LineTo(right, bottom - r))
        segments.append(_arc(right - r, bottom, r, right - r, bottom - r, _BOTTOM_RIGHT_ARC))

    # Bottom edge, right to left
    if position == LeaderPosition.BOTTOM:
        segments.append(LineTo(center_x + half_leader, bottom))
        segments.append(LineTo(center_x, bottom + leader_height))
        segments.append(LineTo(center_x - half_leader, bottom))

    # Bottom-left corner
    if position == LeaderPosition.LOWER_LEFT:
        segments.append(LineTo(left + leader_width, bottom))
        segments.append(LineTo(left + half_leader, bottom + leader_height))
        segments.append(LineTo(left, bottom))
    else:
        segments.append(LineTo(left + r, bottom))
        segments.append(_arc(left, bottom - r, r, left + r, bottom - r, _BOTTOM_LEFT_ARC))

    # Left edge, bottom to top
    if position == LeaderPosition.LEFT:
        segments.append(LineTo(left, center_y + half_leader))
        segments.append(LineTo(left - leader_height, center_y))
        segments.append(LineTo(left, center_y - half_leader))

    # Top-left corner closes the contour
    if position == LeaderPosition.UPPER_LEFT:
        segments.append(LineTo(left, top))
        segments.append(LineTo(left + half_leader, top - leader_height))
        segments.append(LineTo(start_x, top))
    else:
        segments.append(LineTo(left, top + r))
        segments.append(_arc(start_x, top, r, left + r, top + r, _TOP_LEFT_ARC))

    return CalloutPath(segments=segments, position=position, committed=commit)


def expected_segment_count(position: LeaderPosition) -> int:
    """
    Number of segments build_callout_path emits for a position.

    Args:
        position: Concrete leader position

    Returns:
        Segment count, including the MoveTo
    """
    if position.is_corner:
        return CORNER_NOTCH_SEGMENTS
    return MID_EDGE_SEGMENTS
