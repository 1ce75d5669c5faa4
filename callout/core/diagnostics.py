"""
Diagnostic utilities for debugging callout placement.
Captures how the leader position was chosen and whether the frame fits.
"""
from typing import List, Optional
from dataclasses import dataclass, field

from .leader_position import LeaderResolution
from .models import CalloutGeometry, CalloutSize, LeaderPosition, MoveDirection, Viewport


@dataclass
class PlacementDiagnostic:
    """Captures diagnostic information about one placement pass."""
    anchor_x: float
    anchor_y: float
    viewport_width: float
    viewport_height: float
    rect_width: float
    rect_height: float
    min_width: float
    max_width: float
    min_height: float
    max_height: float
    provisional_frame_width: float
    provisional_frame_height: float
    requested_position: LeaderPosition
    provisional_position: LeaderPosition
    adjusted_position: LeaderPosition
    horizontal_check: Optional[MoveDirection]
    vertical_check: Optional[MoveDirection]
    applied_moves: List[MoveDirection]
    blocked_moves: List[MoveDirection]
    frame_bounds: tuple
    overflowing_edges: List[str] = field(default_factory=list)
    path_rebuilt: bool = False

    def has_overflow(self) -> bool:
        """Check if the final frame still extends past the viewport."""
        return len(self.overflowing_edges) > 0

    def summary(self) -> str:
        """Return a human-readable summary of the diagnostic."""
        x, y, w, h = self.frame_bounds
        lines = [
            f"=== Placement Diagnostic (anchor {self.anchor_x:.1f}, {self.anchor_y:.1f}) ===",
            f"Viewport: {self.viewport_width:.1f} x {self.viewport_height:.1f}",
            f"Body: {self.rect_width:.1f} x {self.rect_height:.1f}",
            f"  width bounds: [{self.min_width:.1f}, {self.max_width:.1f}]",
            f"  height bounds: [{self.min_height:.1f}, {self.max_height:.1f}]",
            f"",
            f"Leader Resolution:",
            f"  requested: {self.requested_position.name}",
            f"  provisional: {self.provisional_position.name}",
            f"  provisional frame: {self.provisional_frame_width:.1f} x {self.provisional_frame_height:.1f}",
            f"  horizontal check: {self.horizontal_check.name if self.horizontal_check else '-'}",
            f"  vertical check: {self.vertical_check.name if self.vertical_check else '-'}",
            f"  applied: {[m.name for m in self.applied_moves]}",
            f"  blocked: {[m.name for m in self.blocked_moves]}",
            f"  adjusted: {self.adjusted_position.name}",
            f"  path rebuilt: {self.path_rebuilt}",
            f"",
            f"Frame: origin ({x:.1f}, {y:.1f}) size {w:.1f} x {h:.1f}",
        ]

        if self.overflowing_edges:
            lines.append(f"  ❌ OVERFLOW: {', '.join(self.overflowing_edges)}")
        else:
            lines.append("  ✓ Fits viewport")

        return "\n".join(lines)


def find_overflowing_edges(
    frame_bounds: tuple,
    viewport: Viewport,
    edge_buffer: float = 0.0
) -> List[str]:
    """
    List the viewport edges a frame extends past.

    Args:
        frame_bounds: Frame as (x, y, width, height)
        viewport: Containing surface extent
        edge_buffer: Clearance kept from each edge

    Returns:
        Edge names among "left", "top", "right", "bottom"
    """
    x, y, w, h = frame_bounds
    edges = []
    if x < edge_buffer:
        edges.append("left")
    if y < edge_buffer:
        edges.append("top")
    if x + w > viewport.width - edge_buffer:
        edges.append("right")
    if y + h > viewport.height - edge_buffer:
        edges.append("bottom")
    return edges


def capture_placement_diagnostic(
    geometry: CalloutGeometry,
    size: CalloutSize,
    viewport: Viewport,
    resolution: LeaderResolution,
    provisional_position: LeaderPosition,
    provisional_frame: tuple,
    path_rebuilt: bool = False,
    edge_buffer: float = 0.0,
) -> PlacementDiagnostic:
    """
    Capture diagnostic information about a finished placement pass.

    Args:
        geometry: Final callout geometry
        size: Resolved size with its clamping bounds
        viewport: Containing surface extent
        resolution: Record of the leader resolution
        provisional_position: Position used for the provisional placement
        provisional_frame: Provisional (frame_width, frame_height)
        path_rebuilt: Whether the path was rebuilt after resolution
        edge_buffer: Clearance kept from each edge

    Returns:
        PlacementDiagnostic with captured information
    """
    return PlacementDiagnostic(
        anchor_x=geometry.anchor.x,
        anchor_y=geometry.anchor.y,
        viewport_width=viewport.width,
        viewport_height=viewport.height,
        rect_width=size.rect_width,
        rect_height=size.rect_height,
        min_width=size.min_width,
        max_width=size.max_width,
        min_height=size.min_height,
        max_height=size.max_height,
        provisional_frame_width=provisional_frame[0],
        provisional_frame_height=provisional_frame[1],
        requested_position=resolution.requested,
        provisional_position=provisional_position,
        adjusted_position=resolution.position,
        horizontal_check=resolution.horizontal_check,
        vertical_check=resolution.vertical_check,
        applied_moves=list(resolution.applied),
        blocked_moves=list(resolution.blocked),
        frame_bounds=geometry.frame_bounds,
        overflowing_edges=find_overflowing_edges(geometry.frame_bounds, viewport, edge_buffer),
        path_rebuilt=path_rebuilt,
    )
