"""
KiCad IPC session setup for drawing callouts.
"""
from typing import Optional, Tuple

try:
    from kipy import KiCad
    from kipy.board import Board
    KICAD_AVAILABLE = True
except ImportError:
    KICAD_AVAILABLE = False
    KiCad = None  # type: ignore
    Board = None  # type: ignore

# Name reported to KiCad's API server
CLIENT_NAME = "callout-generator"

# IPC request timeout
DEFAULT_TIMEOUT_MS = 2000


def connect_to_kicad(
    socket_path: Optional[str] = None,
    timeout_ms: int = DEFAULT_TIMEOUT_MS
) -> Tuple['KiCad', 'Board']:
    """
    Open an IPC session with KiCad and fetch the board the callout is drawn on.

    Args:
        socket_path: API socket to use (KiCad's default when None)
        timeout_ms: Request timeout in milliseconds

    Returns:
        Tuple of (KiCad instance, Board instance)

    Raises:
        ImportError: If kicad-python is not installed
        ConnectionError: If the API server cannot be reached
        RuntimeError: If no board is open
    """
    if not KICAD_AVAILABLE:
        raise ImportError(
            "kicad-python is not installed. "
            "Install it with: pip install kicad-python>=0.2.0"
        )

    try:
        kicad = KiCad(socket_path=socket_path, client_name=CLIENT_NAME, timeout_ms=timeout_ms)
        version = kicad.get_version()
    except Exception as e:
        target = socket_path or "default API socket"
        raise ConnectionError(
            f"No KiCad API server answered on {target}.\n"
            f"(Preferences > Plugins > Enable API server)\n"
            f"Error: {e}"
        )

    print(f"Connected to KiCad {version}")
    return kicad, _open_board(kicad)


def _open_board(kicad: 'KiCad') -> 'Board':
    """
    Fetch the PCB currently open in the editor.

    Args:
        kicad: Connected KiCad instance

    Returns:
        Board instance

    Raises:
        RuntimeError: If the PCB editor has no board open
    """
    try:
        return kicad.get_board()
    except Exception as e:
        raise RuntimeError(
            f"Callouts are drawn on the open PCB, but none is open in KiCad.\n"
            f"Error: {e}"
        )


def check_kicad_available() -> bool:
    """
    Check if kicad-python is available.

    Returns:
        True if kicad-python can be imported
    """
    return KICAD_AVAILABLE
