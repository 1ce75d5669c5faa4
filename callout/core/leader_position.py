"""
Automatic leader positioning.

The leader can sit on any of eight sides/corners of the callout body. When
the requested position is AUTOMATIC, the callout is checked against the
viewport edges and the leader is moved through a transition table keyed by
(current position, move direction). Each cell carries a guard so that large
callouts only flip once the anchor is well into the overflowing half.

Pure functions - no KiCad dependencies, fully testable.
"""
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple
from .models import LeaderPosition, MoveDirection, Point, Viewport


# Fallback when no concrete default has been configured
FALLBACK_LEADER_POSITION = LeaderPosition.BOTTOM

# Anchor thresholds, as a fraction of the viewport along the move axis
ONE_THIRD = 1.0 / 3.0
ONE_HALF = 0.5
TWO_THIRDS = 2.0 / 3.0

Guard = Callable[[Point, float, float, Viewport], bool]


def _anchor_past(direction: MoveDirection, fraction: float) -> Guard:
    """
    Build a guard that holds for small callouts, or when the anchor lies past
    `fraction` of the viewport in the direction of the move.

    Args:
        direction: Move direction the guard belongs to
        fraction: Threshold as a fraction of the viewport dimension

    Returns:
        Guard predicate taking (anchor, frame_width, frame_height, viewport)
    """
    def guard(anchor: Point, frame_width: float, frame_height: float, viewport: Viewport) -> bool:
        if direction.is_horizontal:
            # Narrow callouts can always move
            if frame_width <= viewport.width / 2:
                return True
            if direction == MoveDirection.RIGHT:
                return anchor.x > viewport.width * fraction
            return anchor.x < viewport.width * (1.0 - fraction)

        # Short callouts can always move
        if frame_height <= viewport.height / 2:
            return True
        if direction == MoveDirection.DOWN:
            return anchor.y > viewport.height * fraction
        return anchor.y < viewport.height * (1.0 - fraction)

    return guard


@dataclass(frozen=True)
class TransitionRule:
    """One cell of the transition table"""
    target: LeaderPosition
    threshold: float
    guard: Guard = field(compare=False, repr=False)


def _rule(direction: MoveDirection, target: LeaderPosition, threshold: float) -> TransitionRule:
    return TransitionRule(target=target, threshold=threshold, guard=_anchor_past(direction, threshold))


_UL = LeaderPosition.UPPER_LEFT
_T = LeaderPosition.TOP
_UR = LeaderPosition.UPPER_RIGHT
_R = LeaderPosition.RIGHT
_LR = LeaderPosition.LOWER_RIGHT
_B = LeaderPosition.BOTTOM
_LL = LeaderPosition.LOWER_LEFT
_L = LeaderPosition.LEFT

_DOWN = MoveDirection.DOWN
_UP = MoveDirection.UP
_RIGHT = MoveDirection.RIGHT
_LEFT = MoveDirection.LEFT

# (current position, direction) -> rule. Missing cells mean "no move".
TRANSITION_TABLE: Dict[Tuple[LeaderPosition, MoveDirection], TransitionRule] = {
    # Bottom edge overflow: leaders walk down the sides, top flips to bottom
    (_UL, _DOWN): _rule(_DOWN, _L, ONE_THIRD),
    (_L, _DOWN): _rule(_DOWN, _LL, ONE_HALF),
    (_T, _DOWN): _rule(_DOWN, _B, TWO_THIRDS),
    (_UR, _DOWN): _rule(_DOWN, _R, ONE_THIRD),
    (_R, _DOWN): _rule(_DOWN, _LR, ONE_HALF),

    # Top edge overflow: mirror image of DOWN
    (_LL, _UP): _rule(_UP, _L, ONE_THIRD),
    (_L, _UP): _rule(_UP, _UL, ONE_HALF),
    (_B, _UP): _rule(_UP, _T, TWO_THIRDS),
    (_LR, _UP): _rule(_UP, _R, ONE_THIRD),
    (_R, _UP): _rule(_UP, _UR, ONE_HALF),

    # Right edge overflow: every move lands in the left-hand family
    (_T, _RIGHT): _rule(_RIGHT, _UL, ONE_HALF),
    (_B, _RIGHT): _rule(_RIGHT, _LL, ONE_HALF),
    (_UR, _RIGHT): _rule(_RIGHT, _UL, TWO_THIRDS),
    (_R, _RIGHT): _rule(_RIGHT, _L, TWO_THIRDS),
    (_LR, _RIGHT): _rule(_RIGHT, _LL, TWO_THIRDS),

    # Left edge overflow: every move lands in the right-hand family
    (_T, _LEFT): _rule(_LEFT, _UR, ONE_HALF),
    (_B, _LEFT): _rule(_LEFT, _LR, ONE_HALF),
    (_UL, _LEFT): _rule(_LEFT, _UR, TWO_THIRDS),
    (_L, _LEFT): _rule(_LEFT, _R, TWO_THIRDS),
    (_LL, _LEFT): _rule(_LEFT, _LR, TWO_THIRDS),
}


@dataclass
class LeaderResolution:
    """Record of one automatic resolution pass"""
    requested: LeaderPosition
    start: LeaderPosition
    position: LeaderPosition
    horizontal_check: Optional[MoveDirection] = None  # Edge that overflowed, if any
    vertical_check: Optional[MoveDirection] = None
    applied: List[MoveDirection] = field(default_factory=list)
    blocked: List[MoveDirection] = field(default_factory=list)  # Overflowed but guard failed or no cell

    @property
    def moved(self) -> bool:
        return self.position != self.start


def apply_move(
    position: LeaderPosition,
    direction: MoveDirection,
    anchor: Point,
    frame_width: float,
    frame_height: float,
    viewport: Viewport
) -> Optional[LeaderPosition]:
    """
    Look up (position, direction) in the transition table and apply it.

    Args:
        position: Current concrete position
        direction: Move direction to attempt
        anchor: Anchor point
        frame_width: Provisional frame width
        frame_height: Provisional frame height
        viewport: Containing surface extent

    Returns:
        New position, or None when there is no cell or its guard fails
    """
    rule = TRANSITION_TABLE.get((position, direction))
    if rule is None:
        return None

    if not rule.guard(anchor, frame_width, frame_height, viewport):
        return None

    return rule.target


def _concrete_default(default: Optional[LeaderPosition]) -> LeaderPosition:
    if default is None or not default.is_concrete:
        return FALLBACK_LEADER_POSITION
    return default


def trace_leader_resolution(
    requested: LeaderPosition,
    anchor: Point,
    frame_width: float,
    frame_height: float,
    viewport: Viewport,
    default: Optional[LeaderPosition] = FALLBACK_LEADER_POSITION,
    edge_buffer: float = 0.0
) -> LeaderResolution:
    """
    Resolve the leader position and record how the decision was reached.

    Args:
        requested: Requested position (AUTOMATIC or a fixed position)
        anchor: Anchor point in surface coordinates
        frame_width: Width of the provisional callout frame
        frame_height: Height of the provisional callout frame
        viewport: Containing surface extent
        default: Concrete position used when no move applies
        edge_buffer: Clearance kept from each viewport edge

    Returns:
        LeaderResolution with a concrete final position
    """
    # Fixed positions are trusted as-is
    if requested.is_concrete:
        return LeaderResolution(requested=requested, start=requested, position=requested)

    start = _concrete_default(default)
    resolution = LeaderResolution(requested=requested, start=start, position=start)

    # Step 1: horizontal overflow
    if anchor.x + frame_width > viewport.width - edge_buffer:
        resolution.horizontal_check = MoveDirection.RIGHT
    elif anchor.x - frame_width < edge_buffer:
        resolution.horizontal_check = MoveDirection.LEFT

    if resolution.horizontal_check is not None:
        moved = apply_move(
            start, resolution.horizontal_check, anchor, frame_width, frame_height, viewport
        )
        if moved is not None:
            resolution.position = moved
            resolution.applied.append(resolution.horizontal_check)
            return resolution
        resolution.blocked.append(resolution.horizontal_check)

    # Step 2: vertical overflow, only when the horizontal check did not move
    if anchor.y + frame_height > viewport.height - edge_buffer:
        resolution.vertical_check = MoveDirection.DOWN
    elif anchor.y - frame_height < edge_buffer:
        resolution.vertical_check = MoveDirection.UP

    if resolution.vertical_check is not None:
        moved = apply_move(
            start, resolution.vertical_check, anchor, frame_width, frame_height, viewport
        )
        if moved is not None:
            resolution.position = moved
            resolution.applied.append(resolution.vertical_check)
        else:
            resolution.blocked.append(resolution.vertical_check)

    return resolution


def resolve_leader_position(
    requested: LeaderPosition,
    anchor: Point,
    frame_width: float,
    frame_height: float,
    viewport: Viewport,
    default: Optional[LeaderPosition] = FALLBACK_LEADER_POSITION,
    edge_buffer: float = 0.0
) -> LeaderPosition:
    """
    Resolve the requested leader position to a concrete one.

    See trace_leader_resolution for the arguments.

    Returns:
        Concrete LeaderPosition (never AUTOMATIC)
    """
    return trace_leader_resolution(
        requested, anchor, frame_width, frame_height, viewport,
        default=default, edge_buffer=edge_buffer
    ).position
