"""
Callout placement pipeline.

Runs the four placement steps in one synchronous pass:

1. size the body box from the content and style
2. place a provisional frame using the requested (or default) position
3. resolve the leader position against the viewport
4. re-place the frame and rebuild the outline if the position changed,
   then commit the path for painting

Pure computation - no KiCad dependencies.
"""
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from .diagnostics import PlacementDiagnostic, capture_placement_diagnostic
from .leader_position import trace_leader_resolution, FALLBACK_LEADER_POSITION
from .models import (
    CalloutContent,
    CalloutGeometry,
    CalloutPath,
    CalloutStyle,
    LeaderPosition,
    Point,
    Viewport,
)
from .path_builder import build_callout_path
from .placement import frame_extent, place_frame
from .sizing import resolve_callout_size

DiagnosticHook = Callable[[PlacementDiagnostic], None]


@dataclass
class PlacementResult:
    """Output of one placement pass"""
    geometry: CalloutGeometry
    path: CalloutPath  # Surface coordinates
    diagnostic: PlacementDiagnostic


def _provisional_position(style: CalloutStyle) -> LeaderPosition:
    if style.leader_position.is_concrete:
        return style.leader_position
    if style.default_leader_position.is_concrete:
        return style.default_leader_position
    return FALLBACK_LEADER_POSITION


def run_placement(
    anchor: Point,
    viewport: Viewport,
    content: CalloutContent,
    style: CalloutStyle
) -> PlacementResult:
    """
    Run one complete placement pass.

    Args:
        anchor: Anchor point, screen offsets already applied
        viewport: Containing surface extent
        content: Natural content size
        style: Callout style

    Returns:
        PlacementResult with geometry, committed path and diagnostic
    """
    # Step 1: body size
    size = resolve_callout_size(content, style, viewport)

    # Step 2: provisional placement and outline
    provisional = _provisional_position(style)
    provisional_frame = frame_extent(size.rect_width, size.rect_height, style.leader_height, provisional)
    path = build_callout_path(
        size.rect_width, size.rect_height, style.corner_radius,
        style.leader_width, style.leader_height, provisional,
    )

    # Step 3: resolve the leader position against the provisional frame
    resolution = trace_leader_resolution(
        style.leader_position,
        anchor,
        provisional_frame[0],
        provisional_frame[1],
        viewport,
        default=style.default_leader_position,
        edge_buffer=style.edge_buffer,
    )
    adjusted = resolution.position

    # Step 4: final placement, rebuild the outline if the leader moved
    placement = place_frame(
        anchor, size.rect_width, size.rect_height,
        style.leader_width, style.leader_height, adjusted,
    )
    path_rebuilt = adjusted != provisional
    if path_rebuilt:
        path = build_callout_path(
            size.rect_width, size.rect_height, style.corner_radius,
            style.leader_width, style.leader_height, adjusted,
        )
    path.committed = True

    frame_width, frame_height = frame_extent(size.rect_width, size.rect_height, style.leader_height, adjusted)
    geometry = CalloutGeometry(
        anchor=anchor,
        rect_width=size.rect_width,
        rect_height=size.rect_height,
        origin_x=placement.origin_x,
        origin_y=placement.origin_y,
        frame_width=frame_width,
        frame_height=frame_height,
        requested_leader_position=style.leader_position,
        adjusted_leader_position=adjusted,
        left_margin=placement.left_margin,
    )

    diagnostic = capture_placement_diagnostic(
        geometry,
        size,
        viewport,
        resolution,
        provisional,
        provisional_frame,
        path_rebuilt=path_rebuilt,
        edge_buffer=style.edge_buffer,
    )

    return PlacementResult(
        geometry=geometry,
        path=path.translated(placement.origin_x, placement.origin_y),
        diagnostic=diagnostic,
    )


def compute_callout(
    anchor: Point,
    viewport: Viewport,
    content: Optional[CalloutContent] = None,
    style: Optional[CalloutStyle] = None
) -> Tuple[CalloutGeometry, CalloutPath]:
    """
    Compute callout geometry and outline as a pure function of its inputs.

    Args:
        anchor: Anchor point (screen offsets from the style are added)
        viewport: Containing surface extent
        content: Natural content size (unmeasured if None)
        style: Callout style (defaults if None)

    Returns:
        Tuple of (CalloutGeometry, committed CalloutPath in surface coordinates)
    """
    if content is None:
        content = CalloutContent()
    if style is None:
        style = CalloutStyle()

    shifted = anchor.offset(style.screen_offset_x, style.screen_offset_y)
    result = run_placement(shifted, viewport, content, style)
    return result.geometry, result.path


class Callout:
    """
    A single callout instance driven by the host UI.

    The host feeds anchor changes, show/dismiss signals, viewport size,
    content size and style. Every anchor change while visible, and every
    show(), runs a full placement pass. Style, viewport and content changes
    take effect on the next pass.
    """

    def __init__(
        self,
        style: Optional[CalloutStyle] = None,
        viewport: Optional[Viewport] = None,
        content: Optional[CalloutContent] = None,
        diagnostic_hook: Optional[DiagnosticHook] = None
    ) -> None:
        self.style = style if style is not None else CalloutStyle()
        self.viewport = viewport if viewport is not None else Viewport(0.0, 0.0)
        self.content = content if content is not None else CalloutContent()
        self.diagnostic_hook = diagnostic_hook

        self._anchor: Optional[Point] = None
        self._visible = False
        self._geometry: Optional[CalloutGeometry] = None
        self._path: Optional[CalloutPath] = None

    @property
    def visible(self) -> bool:
        return self._visible

    @property
    def anchor(self) -> Optional[Point]:
        """Anchor as last set by the host, without screen offsets"""
        return self._anchor

    @property
    def geometry(self) -> Optional[CalloutGeometry]:
        return self._geometry

    @property
    def path(self) -> Optional[CalloutPath]:
        return self._path

    @property
    def adjusted_leader_position(self) -> Optional[LeaderPosition]:
        if self._geometry is None:
            return None
        return self._geometry.adjusted_leader_position

    def set_viewport(self, width: float, height: float) -> None:
        self.viewport = Viewport(width, height)

    def set_content(self, content: CalloutContent) -> None:
        self.content = content

    def set_style(self, style: CalloutStyle) -> None:
        self.style = style

    def set_anchor(self, x: float, y: float) -> Optional[CalloutGeometry]:
        """
        Anchor-changed trigger.

        Args:
            x: Anchor x in surface coordinates
            y: Anchor y in surface coordinates

        Returns:
            New geometry if the callout is visible, otherwise None
        """
        self._anchor = Point(x, y)
        if not self._visible:
            return None
        return self.update()

    def show(self) -> Optional[CalloutGeometry]:
        """Make the callout visible. Calling it again while visible is a no-op."""
        if self._visible:
            return self._geometry
        self._visible = True
        return self.update()

    def dismiss(self) -> None:
        """Hide the callout and drop its transient geometry."""
        self._visible = False
        self._geometry = None
        self._path = None

    def update(self) -> Optional[CalloutGeometry]:
        """
        Run a placement pass with the current inputs.

        Returns:
            CalloutGeometry, or None while no anchor has been set
        """
        if self._anchor is None:
            return None

        shifted = self._anchor.offset(self.style.screen_offset_x, self.style.screen_offset_y)
        result = run_placement(shifted, self.viewport, self.content, self.style)

        self._geometry = result.geometry
        self._path = result.path

        if self.diagnostic_hook is not None:
            self.diagnostic_hook(result.diagnostic)

        return self._geometry
