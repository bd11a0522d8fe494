"""
Tests for board validation and parsing.

Core claims:
    - 0 and None are both empty; numpy arrays and nested lists give the same board
    - Ragged rows, rows that are not sequences and values outside 1-8 are
      rejected with InvalidBoardError; integral floats are accepted
    - Consecutive islands in a row/column form exactly one slot, lower (row, col) first
    - An island lists its horizontal slots first, then its vertical slots
    - Slots overlap iff their paths cross an empty cell; overlap is symmetric
    - An island with no slot makes the board locally unsatisfiable
"""

import numpy as np
import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from hashi_sat.board import (
    Coord, normalize_board, parse_board, slot_cells, slot_geometry, slot_id,
)
from hashi_sat.errors import InvalidBoardError, LocalUnsatisfiable


# ── Generators ────────────────────────────────────────────────────────────────

cells = st.sampled_from([None, None, None, 1, 2, 3, 4, 5, 6, 7, 8])


@st.composite
def boards(draw, max_side=6):
    height = draw(st.integers(1, max_side))
    width = draw(st.integers(1, max_side))
    return [[draw(cells) for _ in range(width)] for _ in range(height)]


def _parse_or_none(board):
    try:
        return parse_board(normalize_board(board))
    except LocalUnsatisfiable:
        return None


PLUS = [
    [None, 1, None],
    [1, None, 1],
    [None, 1, None],
]


# ── normalize_board ───────────────────────────────────────────────────────────

class TestNormalizeBoard:
    def test_zero_and_none_are_empty(self):
        assert normalize_board([[0, 1], [None, 2]]) == ((None, 1), (None, 2))

    def test_numpy_matches_lists(self):
        grid = np.array([[2, 0, 2], [0, 0, 0], [1, 0, 1]])
        assert normalize_board(grid) == normalize_board(grid.tolist())

    def test_numpy_values_become_int(self):
        board = normalize_board(np.array([[3, 0]]))
        assert type(board[0][0]) is int

    def test_empty_grid(self):
        assert normalize_board([]) == ()
        assert normalize_board(np.zeros((0, 0), dtype=int)) == ()

    def test_ragged_rows(self):
        with pytest.raises(InvalidBoardError):
            normalize_board([[1, 0], [1]])

    def test_value_too_large(self):
        with pytest.raises(InvalidBoardError):
            normalize_board([[9, 1]])

    def test_negative_value(self):
        with pytest.raises(InvalidBoardError):
            normalize_board([[-1, 1]])

    def test_non_integer_values(self):
        for bad in (1.5, "1", True):
            with pytest.raises(InvalidBoardError):
                normalize_board([[bad, 1]])

    def test_rows_must_be_sequences(self):
        for bad in ([1, 2], [[1, 1], None], ["11", "11"], None, 5):
            with pytest.raises(InvalidBoardError):
                normalize_board(bad)

    def test_integral_floats(self):
        assert normalize_board(np.array([[1.0, 0.0, 2.0]])) == ((1, None, 2),)
        with pytest.raises(InvalidBoardError):
            normalize_board(np.array([[1.0, np.nan]]))

    def test_three_dimensional_array(self):
        with pytest.raises(InvalidBoardError):
            normalize_board(np.zeros((2, 2, 2), dtype=int))

    def test_invalid_board_is_a_value_error(self):
        with pytest.raises(ValueError):
            normalize_board([[1, 2, 3], [4]])


# ── Slot helpers ──────────────────────────────────────────────────────────────

class TestSlotHelpers:
    def test_slot_id_orders_endpoints(self):
        assert slot_id((2, 1), (0, 1)) == (Coord(0, 1), Coord(2, 1))
        assert slot_id((0, 1), (2, 1)) == slot_id((2, 1), (0, 1))

    def test_geometry(self):
        assert slot_geometry(slot_id((0, 0), (0, 3))) == ((0, 0), (0, 3), False)
        assert slot_geometry(slot_id((4, 2), (1, 2))) == ((1, 2), (4, 2), True)

    def test_geometry_rejects_diagonal(self):
        with pytest.raises(ValueError):
            slot_geometry((Coord(0, 0), Coord(1, 1)))

    def test_cells_between(self):
        assert list(slot_cells(Coord(0, 0), Coord(0, 3))) == [(0, 1), (0, 2)]
        assert list(slot_cells(Coord(1, 2), Coord(4, 2))) == [(2, 2), (3, 2)]
        assert list(slot_cells(Coord(0, 0), Coord(0, 1))) == []

    @given(st.integers(0, 20), st.integers(0, 20), st.integers(1, 20), st.booleans())
    def test_round_trip(self, row, col, length, vertical):
        a = Coord(row, col)
        b = Coord(row + length, col) if vertical else Coord(row, col + length)
        for first, second in ((a, b), (b, a)):
            assert slot_geometry(slot_id(first, second)) == (a, b, vertical)


# ── parse_board ───────────────────────────────────────────────────────────────

class TestParseBoard:
    def test_two_adjacent_islands(self):
        parsed = parse_board(normalize_board([[1, 1]]))
        assert list(parsed.islands) == [(0, 0), (0, 1)]
        assert list(parsed.slots) == [((0, 0), (0, 1))]
        assert not parsed.slots[((0, 0), (0, 1))].is_vertical

    def test_only_nearest_neighbours(self):
        parsed = parse_board(normalize_board([[1, 0, 2, 0, 1]]))
        assert set(parsed.slots) == {((0, 0), (0, 2)), ((0, 2), (0, 4))}

    def test_vertical_slot(self):
        parsed = parse_board(normalize_board([[1], [0], [1]]))
        slot = parsed.slots[((0, 0), (2, 0))]
        assert slot.is_vertical
        assert slot.src == (0, 0) and slot.dst == (2, 0)

    def test_incident_order(self):
        parsed = parse_board(normalize_board([
            [None, 1, None],
            [1, 2, 1],
            [None, 1, None],
        ]))
        assert parsed.islands[(1, 1)].bridges == [
            ((1, 0), (1, 1)),
            ((1, 1), (1, 2)),
            ((0, 1), (1, 1)),
            ((1, 1), (2, 1)),
        ]

    def test_root_is_first_island(self):
        parsed = parse_board(normalize_board([[0, 1, 1], [1, 0, 1]]))
        assert parsed.root == (0, 1)

    def test_crossing_slots_overlap(self):
        parsed = parse_board(normalize_board(PLUS))
        vertical = ((0, 1), (2, 1))
        horizontal = ((1, 0), (1, 2))
        assert parsed.slots[vertical].overlaps == {horizontal}
        assert parsed.slots[horizontal].overlaps == {vertical}

    def test_touching_slots_do_not_overlap(self):
        parsed = parse_board(normalize_board([[1, 1], [1, 1]]))
        for slot in parsed.slots.values():
            assert slot.overlaps == set()

    def test_isolated_island(self):
        with pytest.raises(LocalUnsatisfiable):
            parse_board(normalize_board([[5]]))

    def test_island_without_neighbours(self):
        with pytest.raises(LocalUnsatisfiable):
            parse_board(normalize_board([[1, 1, 0], [0, 0, 0], [0, 0, 1]]))

    def test_no_islands(self):
        parsed = parse_board(normalize_board([[0, 0], [0, 0]]))
        assert parsed.islands == {}
        assert parsed.slots == {}
        assert parsed.root is None


# ── Properties ────────────────────────────────────────────────────────────────

class TestParseProperties:
    @settings(max_examples=100, deadline=None)
    @given(boards())
    def test_overlap_is_symmetric(self, board):
        parsed = _parse_or_none(board)
        if parsed is None:
            return
        for sid, slot in parsed.slots.items():
            for other in slot.overlaps:
                assert sid in parsed.slots[other].overlaps

    @settings(max_examples=100, deadline=None)
    @given(boards())
    def test_overlaps_share_a_cell(self, board):
        parsed = _parse_or_none(board)
        if parsed is None:
            return
        for sid, slot in parsed.slots.items():
            cells = set(slot_cells(slot.src, slot.dst))
            for other_id in slot.overlaps:
                other = parsed.slots[other_id]
                assert other.is_vertical != slot.is_vertical
                assert cells & set(slot_cells(other.src, other.dst))

    @settings(max_examples=100, deadline=None)
    @given(boards())
    def test_slots_are_canonical_and_clear(self, board):
        parsed = _parse_or_none(board)
        if parsed is None:
            return
        normalized = normalize_board(board)
        for (src, dst), slot in parsed.slots.items():
            assert src < dst
            assert slot_geometry((src, dst)) == (slot.src, slot.dst, slot.is_vertical)
            for row, col in slot_cells(src, dst):
                assert normalized[row][col] is None

    @settings(max_examples=100, deadline=None)
    @given(boards())
    def test_every_slot_listed_by_both_endpoints(self, board):
        parsed = _parse_or_none(board)
        if parsed is None:
            return
        for sid, slot in parsed.slots.items():
            assert sid in parsed.islands[slot.src].bridges
            assert sid in parsed.islands[slot.dst].bridges
        for island in parsed.islands.values():
            assert 1 <= len(island.bridges) <= 4
