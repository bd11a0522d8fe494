"""
Board model for the Hashiwokakero puzzle.
Handles grid validation, island detection and the geometric rules
(candidate bridges between neighbours, crossing bridges).
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, NamedTuple, Optional, Sequence, Set, Tuple, Union

import numpy as np

from .constants import MAX_ISLAND_VALUE, MIN_ISLAND_VALUE
from .errors import InvalidBoardError, LocalUnsatisfiable

logger = logging.getLogger(__name__)


class Coord(NamedTuple):
    row: int
    col: int


# A slot is identified by its two endpoints, lower (row, col) first
SlotId = Tuple[Coord, Coord]
Cell = Optional[int]
Board = Tuple[Tuple[Cell, ...], ...]


@dataclass
class Island:
    pos: Coord
    value: int
    # Incident slots: horizontal ones first (left to right), then vertical ones (top to bottom)
    bridges: List[SlotId] = field(default_factory=list)


@dataclass
class Slot:
    src: Coord
    dst: Coord
    is_vertical: bool
    overlaps: Set[SlotId] = field(default_factory=set)

    @property
    def id(self) -> SlotId:
        return (self.src, self.dst)


@dataclass
class ParsedBoard:
    height: int
    width: int
    islands: Dict[Coord, Island] = field(default_factory=dict)
    slots: Dict[SlotId, Slot] = field(default_factory=dict)

    @property
    def root(self) -> Optional[Coord]:
        """The first island found in row-major order."""
        return next(iter(self.islands), None)


def slot_id(a: Tuple[int, int], b: Tuple[int, int]) -> SlotId:
    """Canonical identifier of the slot between two islands."""
    a, b = Coord(*a), Coord(*b)
    if a > b:
        a, b = b, a
    return (a, b)


def slot_geometry(sid: SlotId) -> Tuple[Coord, Coord, bool]:
    """Recover (src, dst, is_vertical) from a slot identifier."""
    src, dst = sid
    if src.row != dst.row and src.col != dst.col:
        raise ValueError(f"Slot {sid} is not horizontal or vertical")
    return src, dst, src.col == dst.col


def slot_cells(src: Coord, dst: Coord) -> Iterator[Coord]:
    """Cells strictly between the two endpoints of a slot."""
    if src.row == dst.row:
        for col in range(min(src.col, dst.col) + 1, max(src.col, dst.col)):
            yield Coord(src.row, col)
    else:
        for row in range(min(src.row, dst.row) + 1, max(src.row, dst.row)):
            yield Coord(row, src.col)


def _normalize_cell(value, row: int, col: int) -> Cell:
    if value is None:
        return None
    # 2.0 from a float array is fine, 2.5 or nan is not
    if isinstance(value, (float, np.floating)) and float(value).is_integer():
        value = int(value)
    if isinstance(value, (bool, np.bool_)) or not isinstance(value, (int, np.integer)):
        raise InvalidBoardError(f"Cell ({row}, {col}) holds {value!r}, expected an integer or empty")
    value = int(value)
    if value == 0:
        return None
    if not MIN_ISLAND_VALUE <= value <= MAX_ISLAND_VALUE:
        raise InvalidBoardError(
            f"Cell ({row}, {col}) holds {value}, islands must be "
            f"between {MIN_ISLAND_VALUE} and {MAX_ISLAND_VALUE}")
    return value


def _is_row_sequence(value) -> bool:
    return isinstance(value, (Sequence, np.ndarray)) and not isinstance(value, (str, bytes))


def normalize_board(grid: Union[np.ndarray, Sequence[Sequence[Cell]]]) -> Board:
    """
    Validate a grid and convert it to a tuple of rows.
    grid: 2D numpy array or nested sequences; 0 or None = empty, 1-8 = island.
    Integral floats (2.0) count as integers.
    """
    if isinstance(grid, np.ndarray):
        if grid.size == 0 and grid.ndim == 1:
            return ()
        if grid.ndim != 2:
            raise InvalidBoardError(f"Expected a 2D grid, got an array with {grid.ndim} dimension(s)")
        grid = grid.tolist()

    if not _is_row_sequence(grid):
        raise InvalidBoardError(f"Expected a sequence of rows, got {type(grid).__name__}")
    rows = []
    for r, row in enumerate(grid):
        if not _is_row_sequence(row):
            raise InvalidBoardError(f"Row {r} is not a sequence of cells")
        rows.append(list(row))
    if not rows:
        return ()

    width = len(rows[0])
    for r, row in enumerate(rows):
        if len(row) != width:
            raise InvalidBoardError(f"Row {r} has {len(row)} cells, expected {width}")

    return tuple(
        tuple(_normalize_cell(value, r, c) for c, value in enumerate(row))
        for r, row in enumerate(rows)
    )


def parse_board(board: Board) -> ParsedBoard:
    """
    Find islands and candidate slots of a normalized board.
    Raises LocalUnsatisfiable if an island has no neighbour to connect to.
    """
    height = len(board)
    width = len(board[0]) if height else 0
    parsed = ParsedBoard(height=height, width=width)

    for row in range(height):
        for col in range(width):
            value = board[row][col]
            if value is not None:
                pos = Coord(row, col)
                parsed.islands[pos] = Island(pos=pos, value=value)

    def add_slot(a: Coord, b: Coord, is_vertical: bool) -> Slot:
        slot = Slot(src=a, dst=b, is_vertical=is_vertical)
        parsed.slots[slot.id] = slot
        parsed.islands[a].bridges.append(slot.id)
        parsed.islands[b].bridges.append(slot.id)
        return slot

    # Empty cells covered by a horizontal slot
    owner: Dict[Coord, SlotId] = {}

    # Horizontal slots
    for row in range(height):
        prev = None
        for col in range(width):
            if board[row][col] is None:
                continue
            if prev is not None:
                slot = add_slot(Coord(row, prev), Coord(row, col), False)
                for cell in slot_cells(slot.src, slot.dst):
                    owner[cell] = slot.id
            prev = col

    # Vertical slots, recording the horizontal ones they cross
    for col in range(width):
        prev = None
        for row in range(height):
            if board[row][col] is None:
                continue
            if prev is not None:
                slot = add_slot(Coord(prev, col), Coord(row, col), True)
                for cell in slot_cells(slot.src, slot.dst):
                    other = owner.get(cell)
                    if other is not None:
                        slot.overlaps.add(other)
                        parsed.slots[other].overlaps.add(slot.id)
            prev = row

    for island in parsed.islands.values():
        if not island.bridges:
            logger.debug("Island %s (value %d) has no neighbours", tuple(island.pos), island.value)
            raise LocalUnsatisfiable(f"Island at {tuple(island.pos)} has no island to connect to")

    logger.debug("Parsed %dx%d board: %d islands, %d slots",
                 height, width, len(parsed.islands), len(parsed.slots))
    return parsed
