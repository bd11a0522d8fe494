"""
Pre-computed bridge distributions.

BRIDGE_OPTIONS[(value, k)] lists every way an island with `value` required
bridges and `k` candidate slots can spread 0, 1 or 2 bridges over those
slots, position i of a tuple being the weight of the island's i-th slot.
"""

from itertools import product
from types import MappingProxyType
from typing import Dict, Mapping, Tuple

from .constants import MAX_ISLAND_VALUE, MAX_SLOTS_PER_ISLAND, MIN_ISLAND_VALUE, WEIGHTS

Distribution = Tuple[int, ...]


def enumerate_bridge_options(value: int, k: int) -> Tuple[Distribution, ...]:
    """All weight tuples of length k summing to value."""
    return tuple(assignment for assignment in product(WEIGHTS, repeat=k) if sum(assignment) == value)


def _build_table() -> Mapping[Tuple[int, int], Tuple[Distribution, ...]]:
    table: Dict[Tuple[int, int], Tuple[Distribution, ...]] = {}
    for value in range(MIN_ISLAND_VALUE, MAX_ISLAND_VALUE + 1):
        for k in range(1, MAX_SLOTS_PER_ISLAND + 1):
            table[(value, k)] = enumerate_bridge_options(value, k)
    return MappingProxyType(table)


BRIDGE_OPTIONS = _build_table()


def bridge_options(value: int, k: int) -> Tuple[Distribution, ...]:
    """Table lookup; pairs outside the table have no options."""
    return BRIDGE_OPTIONS.get((value, k), ())
