"""
Extract callout inputs from a KiCad Board.
This is the adapter layer - converts KiCad types to our models.
"""
from typing import TYPE_CHECKING, Optional

from ..core.models import Point

if TYPE_CHECKING:
    from kipy.board import Board

try:
    from kipy.board import Board
    from kipy.util import to_mm
    KICAD_AVAILABLE = True
except ImportError:
    KICAD_AVAILABLE = False
    Board = None  # type: ignore
    to_mm = None  # type: ignore


def extract_anchor_from_selection(board: 'Board') -> Point:
    """
    Use the first selected board item with a position as the callout anchor.

    Args:
        board: KiCad Board instance

    Returns:
        Anchor point in mm (board coordinates, y down)

    Raises:
        ImportError: If kicad-python is not installed
        RuntimeError: If nothing usable is selected
    """
    if not KICAD_AVAILABLE:
        raise ImportError("kicad-python is not available")

    try:
        selection = list(board.get_selection())
    except Exception as e:
        raise RuntimeError(f"Cannot read selection from board: {e}")

    for item in selection:
        anchor = _item_anchor(item)
        if anchor is not None:
            return anchor

    raise RuntimeError(
        "No anchor found. Select a footprint, pad or via to point the callout at."
    )


def _item_anchor(item) -> Optional[Point]:
    """
    Convert a selected item's position to an anchor point.

    Args:
        item: KiCad board item

    Returns:
        Point in mm, or None if the item has no position
    """
    position = getattr(item, 'position', None)
    if position is None:
        return None

    try:
        return Point(to_mm(position.x), to_mm(position.y))
    except (AttributeError, TypeError):
        return None

