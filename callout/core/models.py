"""
Pure data models for callout geometry.
No KiCad imports - fully testable with plain numbers.
"""
import math
from dataclasses import dataclass, field, replace
from typing import List, Optional, Tuple, Union
from enum import Enum


# Default style dimensions (surface units, pixels on screen or mm on a board)
DEFAULT_BORDER_WIDTH = 2.0
DEFAULT_CORNER_RADIUS = 10.0
DEFAULT_LEADER_WIDTH = 30.0
DEFAULT_LEADER_HEIGHT = 15.0
DEFAULT_MIN_WIDTH = 210.0
DEFAULT_MAX_WIDTH = 300.0
DEFAULT_MIN_HEIGHT = 100.0
DEFAULT_MAX_HEIGHT = 200.0

# Leader margins kept free around the anchor when clamping to the viewport
VIEWPORT_LEADER_MARGINS = 3


class LeaderPosition(Enum):
    """Side or corner of the callout body that carries the leader"""
    UPPER_LEFT = "upper_left"
    TOP = "top"
    UPPER_RIGHT = "upper_right"
    RIGHT = "right"
    LOWER_RIGHT = "lower_right"
    BOTTOM = "bottom"
    LOWER_LEFT = "lower_left"
    LEFT = "left"
    AUTOMATIC = "automatic"  # Request value only, never a resolved position

    @property
    def is_concrete(self) -> bool:
        return self is not LeaderPosition.AUTOMATIC

    @property
    def is_corner(self) -> bool:
        """Corner positions draw a sharp notch in place of a corner arc"""
        return self in CORNER_POSITIONS

    @property
    def is_mid_edge(self) -> bool:
        """Side positions draw a triangle centred on a flat edge"""
        return self in MID_EDGE_POSITIONS

    @property
    def horizontal_bias(self) -> str:
        if self in (LeaderPosition.UPPER_LEFT, LeaderPosition.LEFT, LeaderPosition.LOWER_LEFT):
            return "left"
        if self in (LeaderPosition.UPPER_RIGHT, LeaderPosition.RIGHT, LeaderPosition.LOWER_RIGHT):
            return "right"
        return "center"

    @property
    def vertical_bias(self) -> str:
        if self in (LeaderPosition.UPPER_LEFT, LeaderPosition.TOP, LeaderPosition.UPPER_RIGHT):
            return "upper"
        if self in (LeaderPosition.LOWER_LEFT, LeaderPosition.BOTTOM, LeaderPosition.LOWER_RIGHT):
            return "lower"
        return "middle"


CORNER_POSITIONS = frozenset([
    LeaderPosition.UPPER_LEFT,
    LeaderPosition.UPPER_RIGHT,
    LeaderPosition.LOWER_LEFT,
    LeaderPosition.LOWER_RIGHT,
])

MID_EDGE_POSITIONS = frozenset([
    LeaderPosition.TOP,
    LeaderPosition.RIGHT,
    LeaderPosition.BOTTOM,
    LeaderPosition.LEFT,
])

# Clockwise octagon order, used for listings and CLI choices
CONCRETE_POSITIONS = (
    LeaderPosition.UPPER_LEFT,
    LeaderPosition.TOP,
    LeaderPosition.UPPER_RIGHT,
    LeaderPosition.RIGHT,
    LeaderPosition.LOWER_RIGHT,
    LeaderPosition.BOTTOM,
    LeaderPosition.LOWER_LEFT,
    LeaderPosition.LEFT,
)


class MoveDirection(Enum):
    """Direction of a leader transition, named after the overflowing viewport edge"""
    RIGHT = "right"
    LEFT = "left"
    DOWN = "down"
    UP = "up"

    @property
    def is_horizontal(self) -> bool:
        return self in (MoveDirection.RIGHT, MoveDirection.LEFT)


class Platform(Enum):
    """Host platform - only iOS changes the callout sizing"""
    DESKTOP = "desktop"
    IOS = "ios"
    ANDROID = "android"


@dataclass(frozen=True)
class Point:
    """2-D surface coordinate (y grows downward)"""
    x: float
    y: float

    def offset(self, dx: float, dy: float) -> "Point":
        return Point(self.x + dx, self.y + dy)


@dataclass(frozen=True)
class Viewport:
    """Extent of the surface that contains the callout"""
    width: float
    height: float


@dataclass
class CalloutStyle:
    """Style configuration for a callout, changed only between placement passes"""
    # Body box
    border_width: float = DEFAULT_BORDER_WIDTH
    corner_radius: float = DEFAULT_CORNER_RADIUS
    min_width: float = DEFAULT_MIN_WIDTH
    max_width: float = DEFAULT_MAX_WIDTH
    min_height: float = DEFAULT_MIN_HEIGHT
    max_height: float = DEFAULT_MAX_HEIGHT

    # Leader triangle
    leader_width: float = DEFAULT_LEADER_WIDTH  # Base of the triangle
    leader_height: float = DEFAULT_LEADER_HEIGHT  # Distance from body edge to apex
    leader_position: LeaderPosition = LeaderPosition.AUTOMATIC  # Requested position
    default_leader_position: LeaderPosition = LeaderPosition.BOTTOM  # Used when automatic finds no move

    # Overflow detection
    edge_buffer: float = 0.0  # Extra clearance kept from each viewport edge

    # Host integration
    platform: Platform = Platform.DESKTOP
    screen_offset_x: float = 0.0  # Added to the anchor before resolution
    screen_offset_y: float = 0.0

    # Painting (used by renderers only)
    background_color: str = "#ffffff"
    border_color: str = "#000000"


@dataclass
class CalloutContent:
    """Natural size of the title/detail/image block, measured by the host"""
    title: str = ""
    detail: str = ""
    natural_width: float = 0.0  # 0 means not yet measured
    natural_height: float = 0.0

    @property
    def is_measured(self) -> bool:
        return (
            bool(self.title)
            and bool(self.detail)
            and self.natural_width > 0
            and self.natural_height > 0
        )


@dataclass
class CalloutSize:
    """Resolved body box size together with the bounds it was clamped to"""
    rect_width: float
    rect_height: float
    min_width: float
    max_width: float
    min_height: float
    max_height: float


@dataclass
class FramePlacement:
    """Top-left origin of the callout frame in surface coordinates"""
    origin_x: float
    origin_y: float
    left_margin: float = 0.0  # Room reserved for a left-hand leader inside the frame


@dataclass
class CalloutGeometry:
    """Complete placement of one callout, recomputed on every pass"""
    anchor: Point
    rect_width: float
    rect_height: float
    origin_x: float
    origin_y: float
    frame_width: float
    frame_height: float
    requested_leader_position: LeaderPosition
    adjusted_leader_position: LeaderPosition
    left_margin: float = 0.0

    @property
    def origin(self) -> Point:
        return Point(self.origin_x, self.origin_y)

    @property
    def frame_bounds(self) -> Tuple[float, float, float, float]:
        """Frame as (x, y, width, height)"""
        return (self.origin_x, self.origin_y, self.frame_width, self.frame_height)


@dataclass(frozen=True)
class MoveTo:
    """Starts the contour"""
    x: float
    y: float
    kind: str = "move"

    @property
    def end(self) -> Point:
        return Point(self.x, self.y)

    def translated(self, dx: float, dy: float) -> "MoveTo":
        return replace(self, x=self.x + dx, y=self.y + dy)


@dataclass(frozen=True)
class LineTo:
    """Straight segment from the current point"""
    x: float
    y: float
    kind: str = "line"

    @property
    def end(self) -> Point:
        return Point(self.x, self.y)

    def translated(self, dx: float, dy: float) -> "LineTo":
        return replace(self, x=self.x + dx, y=self.y + dy)


@dataclass(frozen=True)
class ArcTo:
    """
    Circular arc from the current point to (x, y).

    Angles are in degrees, measured in surface coordinates (y down), so a
    clockwise sweep on screen has end_angle > start_angle.
    """
    x: float
    y: float
    radius: float
    center_x: float
    center_y: float
    start_angle: float
    end_angle: float
    clockwise: bool = True
    kind: str = "arc"

    @property
    def end(self) -> Point:
        return Point(self.x, self.y)

    def midpoint(self) -> Point:
        """Point halfway along the arc (needed by three-point arc APIs)"""
        mid = math.radians((self.start_angle + self.end_angle) / 2.0)
        return Point(
            self.center_x + self.radius * math.cos(mid),
            self.center_y + self.radius * math.sin(mid),
        )

    def translated(self, dx: float, dy: float) -> "ArcTo":
        return replace(
            self,
            x=self.x + dx,
            y=self.y + dy,
            center_x=self.center_x + dx,
            center_y=self.center_y + dy,
        )


PathSegment = Union[MoveTo, LineTo, ArcTo]


@dataclass
class CalloutPath:
    """Closed callout outline as an ordered segment list"""
    segments: List[PathSegment] = field(default_factory=list)
    position: Optional[LeaderPosition] = None
    committed: bool = False  # Only committed paths are filled and stroked

    @property
    def start(self) -> Point:
        return self.segments[0].end

    @property
    def end(self) -> Point:
        return self.segments[-1].end

    @property
    def is_closed(self) -> bool:
        if len(self.segments) < 2:
            return False
        return (
            math.isclose(self.start.x, self.end.x, abs_tol=1e-9)
            and math.isclose(self.start.y, self.end.y, abs_tol=1e-9)
        )

    def points(self) -> List[Point]:
        """End point of every segment, in traversal order"""
        return [segment.end for segment in self.segments]

    def translated(self, dx: float, dy: float) -> "CalloutPath":
        return CalloutPath(
            segments=[segment.translated(dx, dy) for segment in self.segments],
            position=self.position,
            committed=self.committed,
        )
