from typing import Iterable, List

from .board import normalize_board, slot_cells
from .constants import UNICODE_GLYPHS, Glyphs
from .decoder import Bridge


def bridge_glyph(bridge: Bridge, glyphs: Glyphs = UNICODE_GLYPHS) -> str:
    if bridge.weight == 1:
        return glyphs.vertical if bridge.is_vertical else glyphs.horizontal
    if bridge.weight == 2:
        return glyphs.double_vertical if bridge.is_vertical else glyphs.double_horizontal
    raise ValueError(f"Bridge weight must be 1 or 2, got {bridge.weight}")


def render_grid(board, bridges: Iterable[Bridge], glyphs: Glyphs = UNICODE_GLYPHS) -> List[List[str]]:
    """
    Format a solution as a grid of symbols.
    Islands show their value; every cell under a bridge shows its glyph.
    """
    board = normalize_board(board)
    output = [[glyphs.empty if value is None else str(value) for value in row] for row in board]

    for bridge in bridges:
        symbol = bridge_glyph(bridge, glyphs)
        for row, col in slot_cells(bridge.src, bridge.dst):
            if output[row][col] == glyphs.empty:
                output[row][col] = symbol

    return output


def render_text(board, bridges: Iterable[Bridge], glyphs: Glyphs = UNICODE_GLYPHS) -> str:
    return '\n'.join(''.join(row) for row in render_grid(board, bridges, glyphs))
