"""
Command-line interface for the callout generator.
Computes callout geometry and optionally draws it on a KiCad board.
"""
import argparse
import json
import sys
from typing import Optional

from ..kicad_adapter.connection import connect_to_kicad, check_kicad_available
from ..kicad_adapter.extractor import extract_anchor_from_selection
from ..kicad_adapter.renderer import render_callout_to_board, render_callout_to_svg
from ..core.engine import Callout
from ..core.formatting import (
    format_length, format_point, format_position, parse_leader_position, format_path_data
)
from ..core.models import (
    CalloutContent, CalloutStyle, Platform, Point, Viewport,
    CONCRETE_POSITIONS,
    DEFAULT_CORNER_RADIUS, DEFAULT_LEADER_WIDTH, DEFAULT_LEADER_HEIGHT,
    DEFAULT_MIN_WIDTH, DEFAULT_MAX_WIDTH, DEFAULT_MIN_HEIGHT, DEFAULT_MAX_HEIGHT,
    DEFAULT_BORDER_WIDTH,
)
from ..core.sizing import scale_style


def create_parser() -> argparse.ArgumentParser:
    """
    Create argument parser for CLI.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        prog="callout-generator",
        description="Place a speech-bubble callout with an adaptive leader",
        epilog="Drawing on a board requires KiCad running with API server enabled"
    )

    # Placement inputs
    parser.add_argument(
        "--anchor",
        type=float,
        nargs=2,
        metavar=("X", "Y"),
        help="Anchor point the leader points at"
    )

    parser.add_argument(
        "--from-selection",
        action="store_true",
        help="Use the first selected board item as the anchor (mm)"
    )

    parser.add_argument(
        "--viewport",
        type=float,
        nargs=2,
        metavar=("WIDTH", "HEIGHT"),
        default=[400.0, 300.0],
        help="Size of the containing surface (default: 400 300)"
    )

    parser.add_argument(
        "--offset",
        type=float,
        nargs=2,
        metavar=("DX", "DY"),
        default=[0.0, 0.0],
        help="Screen-space offset added to the anchor (default: 0 0)"
    )

    position_names = ["automatic"] + [format_position(p) for p in CONCRETE_POSITIONS]
    parser.add_argument(
        "--position",
        choices=position_names,
        default="automatic",
        help="Leader position (default: automatic)"
    )

    parser.add_argument(
        "--default-position",
        choices=position_names[1:],
        default="bottom",
        help="Position used when automatic placement finds no move (default: bottom)"
    )

    # Content
    parser.add_argument("--title", default="", help="Callout title")
    parser.add_argument("--detail", default="", help="Callout detail text")
    parser.add_argument(
        "--content-size",
        type=float,
        nargs=2,
        metavar=("WIDTH", "HEIGHT"),
        default=[0.0, 0.0],
        help="Natural content size measured by the host (default: unmeasured)"
    )

    # Style
    parser.add_argument(
        "--platform",
        choices=[p.value for p in Platform],
        default=Platform.DESKTOP.value,
        help="Host platform, ios adds leader padding to the width (default: desktop)"
    )

    parser.add_argument(
        "--corner-radius",
        type=float,
        default=DEFAULT_CORNER_RADIUS,
        help=f"Corner radius (default: {DEFAULT_CORNER_RADIUS})"
    )

    parser.add_argument(
        "--border-width",
        type=float,
        default=DEFAULT_BORDER_WIDTH,
        help=f"Border width (default: {DEFAULT_BORDER_WIDTH})"
    )

    parser.add_argument(
        "--leader-size",
        type=float,
        nargs=2,
        metavar=("WIDTH", "HEIGHT"),
        default=[DEFAULT_LEADER_WIDTH, DEFAULT_LEADER_HEIGHT],
        help=f"Leader base width and length (default: {DEFAULT_LEADER_WIDTH} {DEFAULT_LEADER_HEIGHT})"
    )

    parser.add_argument(
        "--min-size",
        type=float,
        nargs=2,
        metavar=("WIDTH", "HEIGHT"),
        default=[DEFAULT_MIN_WIDTH, DEFAULT_MIN_HEIGHT],
        help=f"Minimum body size (default: {DEFAULT_MIN_WIDTH} {DEFAULT_MIN_HEIGHT})"
    )

    parser.add_argument(
        "--max-size",
        type=float,
        nargs=2,
        metavar=("WIDTH", "HEIGHT"),
        default=[DEFAULT_MAX_WIDTH, DEFAULT_MAX_HEIGHT],
        help=f"Maximum body size (default: {DEFAULT_MAX_WIDTH} {DEFAULT_MAX_HEIGHT})"
    )

    parser.add_argument(
        "--edge-buffer",
        type=float,
        default=0.0,
        help="Clearance kept from each viewport edge (default: 0)"
    )

    parser.add_argument(
        "--scale",
        type=float,
        default=None,
        help="Scale all style lengths by this factor (e.g. 0.1 for board mm)"
    )

    # Export options
    parser.add_argument(
        "--export-json",
        metavar="FILE",
        help="Export geometry and path to JSON file"
    )

    parser.add_argument(
        "--export-svg",
        metavar="FILE",
        help="Export callout as SVG file"
    )

    parser.add_argument(
        "--socket",
        metavar="PATH",
        help="KiCad API socket (default: KiCad's own)"
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Calculate and display geometry without drawing on the board"
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Print the placement diagnostic"
    )

    parser.add_argument(
        "--version",
        action="version",
        version="%(prog)s 0.1.0"
    )

    return parser


def build_style(args: argparse.Namespace) -> CalloutStyle:
    """
    Build a callout style from parsed arguments.

    Args:
        args: Parsed CLI arguments

    Returns:
        CalloutStyle
    """
    style = CalloutStyle(
        border_width=args.border_width,
        corner_radius=args.corner_radius,
        leader_width=args.leader_size[0],
        leader_height=args.leader_size[1],
        min_width=args.min_size[0],
        min_height=args.min_size[1],
        max_width=args.max_size[0],
        max_height=args.max_size[1],
        edge_buffer=args.edge_buffer,
        platform=Platform(args.platform),
        leader_position=parse_leader_position(args.position),
        default_leader_position=parse_leader_position(args.default_position),
        screen_offset_x=args.offset[0],
        screen_offset_y=args.offset[1],
    )

    if args.scale is not None:
        style = scale_style(style, args.scale)

    return style


def export_geometry_json(geometry, path, filename: str) -> None:
    """
    Export callout geometry and outline to a JSON file.

    Args:
        geometry: CalloutGeometry
        path: CalloutPath in surface coordinates
        filename: Output filename
    """
    def serialize_segment(segment):
        data = {"type": segment.kind, "x": segment.x, "y": segment.y}
        if segment.kind == "arc":
            data.update({
                "radius": segment.radius,
                "center": [segment.center_x, segment.center_y],
                "start_angle": segment.start_angle,
                "end_angle": segment.end_angle,
                "clockwise": segment.clockwise,
            })
        return data

    data = {
        "anchor": [geometry.anchor.x, geometry.anchor.y],
        "requested_position": geometry.requested_leader_position.value,
        "adjusted_position": geometry.adjusted_leader_position.value,
        "rect": {"width": geometry.rect_width, "height": geometry.rect_height},
        "frame": {
            "x": geometry.origin_x,
            "y": geometry.origin_y,
            "width": geometry.frame_width,
            "height": geometry.frame_height,
            "left_margin": geometry.left_margin,
        },
        "path": {
            "committed": path.committed,
            "closed": path.is_closed,
            "d": format_path_data(path),
            "segments": [serialize_segment(s) for s in path.segments],
        },
    }

    with open(filename, 'w') as f:
        json.dump(data, f, indent=2)

    print(f"✓ Exported callout geometry to {filename}")


def main(argv: Optional[list] = None):
    """
    Main CLI entry point.

    Args:
        argv: Command line arguments (for testing)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.anchor is None and not args.from_selection:
        parser.error("one of --anchor or --from-selection is required")

    needs_board = args.from_selection or not args.dry_run

    print(f"Callout Generator CLI ({args.position} leader)")
    print("-" * 40)

    if needs_board and not check_kicad_available():
        print("ERROR: kicad-python is not installed.")
        print("Install it with: pip install kicad-python>=0.2.0")
        print("Use --dry-run with --anchor to compute geometry without KiCad.")
        sys.exit(1)

    try:
        board = None
        if needs_board:
            print("Connecting to KiCad...")
            kicad, board = connect_to_kicad(socket_path=args.socket)
            print("✓ Connected successfully")

        # Resolve anchor
        if args.from_selection:
            print("\nReading anchor from selection...")
            anchor = extract_anchor_from_selection(board)
        else:
            anchor = Point(args.anchor[0], args.anchor[1])
        print(f"✓ Anchor: {format_point(anchor)}")

        style = build_style(args)
        content = CalloutContent(
            title=args.title,
            detail=args.detail,
            natural_width=args.content_size[0],
            natural_height=args.content_size[1],
        )

        diagnostics = []
        callout = Callout(
            style=style,
            viewport=Viewport(args.viewport[0], args.viewport[1]),
            content=content,
            diagnostic_hook=diagnostics.append,
        )

        # Placement pass
        print("\nCalculating callout placement...")
        callout.set_anchor(anchor.x, anchor.y)
        geometry = callout.show()
        path = callout.path
        print(f"✓ Body size: {format_length(geometry.rect_width)} × {format_length(geometry.rect_height)}")
        print(f"  - Leader: {format_position(geometry.requested_leader_position)}"
              f" → {format_position(geometry.adjusted_leader_position)}")
        print(f"  - Frame origin: {format_point(geometry.origin)}")
        print(f"  - Path segments: {len(path.segments)}")

        if args.verbose and diagnostics:
            print()
            print(diagnostics[-1].summary())

        if args.export_json:
            export_geometry_json(geometry, path, args.export_json)

        if args.export_svg:
            svg_content = render_callout_to_svg(
                geometry, path, style, callout.viewport, content
            )
            with open(args.export_svg, 'w') as f:
                f.write(svg_content)
            print(f"✓ Exported SVG to {args.export_svg}")

        if args.dry_run:
            print("\n✓ Dry run complete (no changes made to board)")
            return

        print("\nRendering callout to board...")
        footprint = render_callout_to_board(board, geometry, path, style)
        print(f"✓ Callout created successfully ({footprint.id})")

        print("\nDone!")

    except ImportError as e:
        print(f"\nERROR: {e}")
        sys.exit(1)

    except ConnectionError as e:
        print(f"\nCONNECTION ERROR: {e}")
        print("\nMake sure:")
        print("  1. KiCad is running")
        print("  2. A PCB file is open")
        print("  3. API server is enabled (Preferences > Plugins)")
        sys.exit(1)

    except RuntimeError as e:
        print(f"\nRUNTIME ERROR: {e}")
        sys.exit(1)

    except Exception as e:
        print(f"\nUNEXPECTED ERROR: {e}")
        import traceback
        traceback.print_exc()
        sys.exit(1)


if __name__ == '__main__':
    main()
