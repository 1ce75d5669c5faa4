#!/usr/bin/env python3
"""
KiCad Callout Generator Plugin

Entry point for both standalone and plugin execution.
Draws a callout pointing at the selected board item.
"""

import sys
from callout.kicad_adapter.connection import connect_to_kicad, check_kicad_available
from callout.kicad_adapter.extractor import extract_anchor_from_selection
from callout.kicad_adapter.renderer import render_callout_to_board
from callout.core.engine import Callout
from callout.core.formatting import format_length, format_point, format_position, px_to_mm
from callout.core.models import CalloutContent, CalloutStyle, Viewport
from callout.core.sizing import scale_style

# Drawing sheet extent in mm (A4 landscape)
SHEET_WIDTH_MM = 297.0
SHEET_HEIGHT_MM = 210.0


def board_style() -> CalloutStyle:
    """
    Default callout style converted from screen pixels to board millimeters.

    Returns:
        CalloutStyle with lengths in mm
    """
    return scale_style(CalloutStyle(), px_to_mm(1.0))


def main(title: str = "", detail: str = ""):
    """
    Main plugin execution.

    Args:
        title: Callout title
        detail: Callout detail text

    This function:
    1. Connects to KiCad via IPC
    2. Reads the anchor from the current selection
    3. Resolves the callout placement on the drawing sheet
    4. Renders the outline as a footprint on Dwgs.User
    """
    print("KiCad Callout Generator")
    print("-" * 40)

    # Check if kicad-python is available
    if not check_kicad_available():
        print("ERROR: kicad-python is not installed.")
        print("Install it with: pip install kicad-python>=0.2.0")
        sys.exit(1)

    try:
        # Step 1: Connect to KiCad
        print("Connecting to KiCad...")
        kicad, board = connect_to_kicad()
        print("✓ Connected successfully")

        # Step 2: Anchor from selection
        print("\nReading anchor from selection...")
        anchor = extract_anchor_from_selection(board)
        print(f"✓ Anchor: {format_point(anchor)}")

        # Step 3: Placement
        style = board_style()
        callout = Callout(
            style=style,
            viewport=Viewport(SHEET_WIDTH_MM, SHEET_HEIGHT_MM),
            content=CalloutContent(title=title, detail=detail),
        )

        print("\nCalculating callout placement...")
        callout.set_anchor(anchor.x, anchor.y)
        geometry = callout.show()
        print(f"✓ Body size: {format_length(geometry.rect_width, unit='mm')} × "
              f"{format_length(geometry.rect_height, unit='mm')}")
        print(f"  - Leader: {format_position(geometry.adjusted_leader_position)}")

        # Step 4: Render
        print("\nRendering callout to board...")
        render_callout_to_board(board, geometry, callout.path, style)
        print("✓ Callout created successfully")

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
