"""
Text formatting and unit conversion utilities.
Pure functions - easily testable.
"""
from typing import List
from .models import ArcTo, CalloutPath, LeaderPosition, LineTo, MoveTo, Point

# CSS reference pixel
MM_PER_PX = 25.4 / 96.0


def format_length(value: float, precision: int = 1, unit: str = "px") -> str:
    """
    Format a length with its unit.

    Args:
        value: Length in surface units
        precision: Number of decimal places
        unit: Unit suffix ("px" or "mm")

    Returns:
        Formatted string with units
    """
    return f"{value:.{precision}f}{unit}"


def format_point(point: Point, precision: int = 1) -> str:
    """
    Format a point as "(x, y)".

    Args:
        point: Point to format
        precision: Number of decimal places

    Returns:
        Formatted string
    """
    return f"({point.x:.{precision}f}, {point.y:.{precision}f})"


def format_position(position: LeaderPosition) -> str:
    """
    Format a leader position the way the CLI spells it.

    Args:
        position: Leader position

    Returns:
        Hyphenated lowercase name, e.g. "upper-left"
    """
    return position.value.replace("_", "-")


def parse_leader_position(name: str) -> LeaderPosition:
    """
    Parse a CLI leader position name.

    Accepts "upper-left", "upper_left", "UpperLeft" and "auto" spellings.

    Args:
        name: Position name

    Returns:
        Matching LeaderPosition

    Raises:
        ValueError: If the name is not a known position
    """
    key = name.strip()
    if key.isupper():
        key = key.lower()
    # CamelCase -> snake_case
    key = "".join(
        ("_" + ch.lower()) if ch.isupper() and i > 0 and key[i - 1] not in "_-" else ch.lower()
        for i, ch in enumerate(key)
    )
    key = key.replace("-", "_")

    if key == "auto":
        return LeaderPosition.AUTOMATIC

    try:
        return LeaderPosition(key)
    except ValueError:
        raise ValueError(f"Unknown leader position: {name}")


def _num(value: float, precision: int) -> str:
    text = f"{value:.{precision}f}"
    # Trim trailing zeros to keep path data compact
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text == "-0":
        text = "0"
    return text


def format_path_data(path: CalloutPath, precision: int = 3) -> str:
    """
    Format a callout path as SVG path data.

    Args:
        path: Callout path
        precision: Maximum number of decimal places

    Returns:
        Path data string using M, L, A and a closing Z
    """
    commands: List[str] = []
    for segment in path.segments:
        x = _num(segment.x, precision)
        y = _num(segment.y, precision)
        if isinstance(segment, MoveTo):
            commands.append(f"M {x} {y}")
        elif isinstance(segment, LineTo):
            commands.append(f"L {x} {y}")
        elif isinstance(segment, ArcTo):
            r = _num(segment.radius, precision)
            sweep = 1 if segment.clockwise else 0
            commands.append(f"A {r} {r} 0 0 {sweep} {x} {y}")

    if path.is_closed:
        commands.append("Z")

    return " ".join(commands)


def px_to_mm(px: float) -> float:
    """
    Convert CSS pixels to millimeters.

    Args:
        px: Value in pixels

    Returns:
        Value in millimeters
    """
    return px * MM_PER_PX
