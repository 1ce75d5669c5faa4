"""
Render callout outlines as KiCad graphics or SVG.
This is the adapter layer - converts our path models to KiCad primitives.
"""
from html import escape
from typing import TYPE_CHECKING, Optional, cast

from ..core.formatting import format_path_data
from ..core.models import (
    ArcTo,
    CalloutContent,
    CalloutGeometry,
    CalloutPath,
    CalloutStyle,
    LineTo,
    MoveTo,
    Point,
    Viewport,
)
from ..core.path_builder import body_offset

if TYPE_CHECKING:
    from kipy.board import Board
    from kipy.board_types import (
        FootprintInstance, BoardSegment, BoardArc, BoardLayer
    )
    from kipy.geometry import Vector2

try:
    from kipy.board import Board
    from kipy.board_types import (
        FootprintInstance, BoardSegment, BoardArc, BoardLayer
    )
    from kipy.geometry import Vector2
    from kipy.util import from_mm
    KICAD_AVAILABLE = True
except ImportError:
    KICAD_AVAILABLE = False
    Board = None  # type: ignore
    FootprintInstance = None  # type: ignore
    BoardSegment = None  # type: ignore
    BoardArc = None  # type: ignore
    BoardLayer = None  # type: ignore
    Vector2 = None  # type: ignore
    from_mm = None  # type: ignore

# Approximate text metrics for the SVG preview
SVG_TITLE_SIZE = 14.0
SVG_DETAIL_SIZE = 11.0
SVG_LINE_GAP = 4.0


def render_callout_to_board(
    board: 'Board',
    geometry: CalloutGeometry,
    path: CalloutPath,
    style: CalloutStyle = None,
    layer: 'BoardLayer' = None
) -> 'FootprintInstance':
    """
    Render a committed callout outline as a KiCad footprint.

    Surface coordinates are taken as millimeters.

    Args:
        board: KiCad Board instance
        geometry: Resolved callout geometry
        path: Committed callout path in surface coordinates
        style: Callout style (optional, for stroke width)
        layer: Target layer for graphics (defaults to Dwgs.User)

    Returns:
        Created FootprintInstance

    Raises:
        RuntimeError: If the path is not committed or rendering fails
    """
    if not KICAD_AVAILABLE:
        raise ImportError("kicad-python is not available")

    if not path.committed:
        raise RuntimeError("Callout path is provisional - run a full placement pass first")

    if style is None:
        style = CalloutStyle()

    if layer is None:
        layer = BoardLayer.BL_Dwgs_User

    try:
        # Create footprint instance
        fpi = FootprintInstance()
        fpi.layer = BoardLayer.BL_F_Cu
        fpi.reference_field.text.value = "CALLOUT"
        fpi.reference_field.visible = False
        fpi.value_field.visible = False
        fpi.attributes.not_in_schematic = True
        fpi.attributes.exclude_from_bill_of_materials = True
        fpi.attributes.exclude_from_position_files = True

        fp = fpi.definition

        _add_outline(fp, path, layer, style)

        # Create on board
        created = board.create_items(fpi)

        if not created or len(created) == 0:
            raise RuntimeError("Failed to create callout on board")

        return cast(FootprintInstance, created[0])

    except Exception as e:
        raise RuntimeError(f"Failed to render callout to board: {e}")


def _vector(point: Point) -> 'Vector2':
    return Vector2.from_xy(from_mm(point.x), from_mm(point.y))


def _add_outline(
    fp,
    path: CalloutPath,
    layer: 'BoardLayer',
    style: CalloutStyle
) -> None:
    """
    Add the callout outline to the footprint.

    Lines become BoardSegment items and corners become BoardArc items.

    Args:
        fp: Footprint definition
        path: Callout path in surface coordinates
        layer: Target layer
        style: Callout style
    """
    current: Optional[Point] = None

    for segment in path.segments:
        if isinstance(segment, MoveTo):
            current = segment.end
            continue

        if isinstance(segment, LineTo):
            line = BoardSegment()
            line.layer = layer
            line.start = _vector(current)
            line.end = _vector(segment.end)
            line.width = from_mm(style.border_width)
            fp.add_item(line)

        elif isinstance(segment, ArcTo):
            # Zero-radius corners are plain points
            if segment.radius > 0:
                arc = BoardArc()
                arc.layer = layer
                arc.start = _vector(current)
                arc.mid = _vector(segment.midpoint())
                arc.end = _vector(segment.end)
                try:
                    arc.attributes.stroke.width = from_mm(style.border_width)
                except Exception as e:
                    print(f"Warning: Could not set arc width: {e}")
                fp.add_item(arc)

        current = segment.end


def render_callout_to_svg(
    geometry: CalloutGeometry,
    path: CalloutPath,
    style: CalloutStyle = None,
    viewport: Viewport = None,
    content: CalloutContent = None
) -> str:
    """
    Render a callout as SVG (for testing or export).

    The outline is filled and stroked only when the path is committed;
    provisional paths are emitted unpainted.

    Args:
        geometry: Resolved callout geometry
        path: Callout path in surface coordinates
        style: Callout style (optional)
        viewport: Canvas extent (defaults to the frame bounds)
        content: Title and detail to draw inside the body (optional)

    Returns:
        SVG string
    """
    if style is None:
        style = CalloutStyle()

    if viewport is None:
        viewport = Viewport(
            geometry.origin_x + geometry.frame_width,
            geometry.origin_y + geometry.frame_height,
        )

    svg_parts = [
        f'<svg width="{viewport.width}" height="{viewport.height}" '
        f'viewBox="0 0 {viewport.width} {viewport.height}" '
        f'xmlns="http://www.w3.org/2000/svg">'
    ]

    if path.committed:
        paint = (
            f'fill="{style.background_color}" stroke="{style.border_color}" '
            f'stroke-width="{style.border_width}"'
        )
    else:
        paint = 'fill="none" stroke="none"'

    position = geometry.adjusted_leader_position.value
    svg_parts.append(
        f'  <path d="{format_path_data(path)}" {paint} data-leader="{position}"/>'
    )

    if content is not None and (content.title or content.detail):
        left, top = body_offset(style.leader_height, geometry.adjusted_leader_position)
        x = geometry.origin_x + left + style.corner_radius
        y = geometry.origin_y + top + style.corner_radius

        if content.title:
            y += SVG_TITLE_SIZE
            svg_parts.append(
                f'  <text x="{x}" y="{y}" font-size="{SVG_TITLE_SIZE}" '
                f'font-weight="bold">{escape(content.title)}</text>'
            )
        if content.detail:
            y += SVG_LINE_GAP + SVG_DETAIL_SIZE
            svg_parts.append(
                f'  <text x="{x}" y="{y}" font-size="{SVG_DETAIL_SIZE}">'
                f'{escape(content.detail)}</text>'
            )

    svg_parts.append('</svg>')

    return '\n'.join(svg_parts)
