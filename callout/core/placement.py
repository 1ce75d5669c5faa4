"""
Callout frame placement relative to the anchor point.
Pure functions - no KiCad imports.
"""
from typing import Tuple
from .models import FramePlacement, LeaderPosition, Point


def place_frame(
    anchor: Point,
    rect_width: float,
    rect_height: float,
    leader_width: float,
    leader_height: float,
    position: LeaderPosition
) -> FramePlacement:
    """
    Calculate the top-left origin of the callout frame.

    Args:
        anchor: Point the leader points at
        rect_width: Body box width
        rect_height: Body box height
        leader_width: Leader base width
        leader_height: Leader length from body edge to apex
        position: Concrete leader position

    Returns:
        FramePlacement with origin and left margin

    Raises:
        ValueError: If position is AUTOMATIC (resolve it first)
    """
    x, y = anchor.x, anchor.y
    below_anchor = y - (leader_height + rect_height)

    if position == LeaderPosition.TOP:
        return FramePlacement(x - rect_width / 2, y)
    elif position == LeaderPosition.BOTTOM:
        return FramePlacement(x - rect_width / 2, below_anchor)
    elif position == LeaderPosition.LEFT:
        # Leader triangle lives inside the frame on the left
        return FramePlacement(x, y - rect_height / 2, left_margin=leader_height)
    elif position == LeaderPosition.RIGHT:
        return FramePlacement(x - (rect_width + leader_width), y - rect_height / 2)
    elif position == LeaderPosition.UPPER_LEFT:
        return FramePlacement(x - leader_width / 2, y)
    elif position == LeaderPosition.UPPER_RIGHT:
        return FramePlacement(x - leader_width / 2 - (rect_width - leader_width), y)
    elif position == LeaderPosition.LOWER_LEFT:
        return FramePlacement(x - leader_width / 2, below_anchor)
    elif position == LeaderPosition.LOWER_RIGHT:
        return FramePlacement(x - rect_width + leader_width / 2, below_anchor)

    raise ValueError(f"Cannot place a frame for unresolved position: {position}")


def frame_extent(
    rect_width: float,
    rect_height: float,
    leader_height: float,
    position: LeaderPosition
) -> Tuple[float, float]:
    """
    Outer size of the callout frame (body plus leader).

    Side leaders stick out horizontally, every other leader vertically.

    Args:
        rect_width: Body box width
        rect_height: Body box height
        leader_height: Leader length
        position: Concrete leader position

    Returns:
        Tuple of (frame_width, frame_height)
    """
    if position in (LeaderPosition.LEFT, LeaderPosition.RIGHT):
        return rect_width + leader_height, rect_height
    return rect_width, rect_height + leader_height
