"""
CNF generation for a parsed board.

Variables (see registry.py):
  weight(slot, w)        slot carries w bridges, w in {0, 1, 2}
  direction(slot, d)     the bridge on slot points toward its dst (d=True) or src (d=False)
"""

import logging

from .board import ParsedBoard
from .constants import WEIGHTS
from .errors import LocalUnsatisfiable
from .oracle import SatOracle
from .tables import bridge_options

logger = logging.getLogger(__name__)


def encode_weights(parsed: ParsedBoard, oracle: SatOracle):
    """Each slot has exactly one weight."""
    registry = oracle.registry
    for sid in parsed.slots:
        oracle.require_exactly_one([registry.weight(sid, w) for w in WEIGHTS])


def encode_overlaps(parsed: ParsedBoard, oracle: SatOracle):
    """A slot and the slots crossing it cannot both carry bridges."""
    registry = oracle.registry
    for sid, slot in parsed.slots.items():
        if not slot.overlaps:
            continue
        this_used = oracle.negate(registry.weight(sid, 0))
        other_used = oracle.disjunction(
            [oracle.negate(registry.weight(other, 0)) for other in sorted(slot.overlaps)])
        oracle.require_at_most_one([other_used, this_used])


def encode_degrees(parsed: ParsedBoard, oracle: SatOracle):
    """
    Each island has exactly one legal spread of bridges over its slots.
    Raises LocalUnsatisfiable when an island has no legal spread at all.
    """
    registry = oracle.registry
    for pos, island in parsed.islands.items():
        options = bridge_options(island.value, len(island.bridges))
        if not options:
            logger.debug("Island %s: value %d cannot be reached with %d slot(s)",
                         tuple(pos), island.value, len(island.bridges))
            raise LocalUnsatisfiable(
                f"Island at {tuple(pos)} needs {island.value} bridges "
                f"but has only {len(island.bridges)} neighbour(s)")

        option_lits = []
        for option in options:
            option_lits.append(oracle.conjunction(
                [registry.weight(sid, w) for sid, w in zip(island.bridges, option)]))
        oracle.require_exactly_one(option_lits)


def encode_flow(parsed: ParsedBoard, oracle: SatOracle):
    """
    Orient every used slot and make every island except the root the target
    of at least one of them. Any connected solution can be oriented this way
    (along a spanning tree from the root), so no connected solution is lost;
    disconnected ones are only partly ruled out.
    """
    registry = oracle.registry
    for sid in parsed.slots:
        oracle.require_exactly_one([
            registry.weight(sid, 0),
            registry.direction(sid, True),
            registry.direction(sid, False),
        ])

    root = parsed.root
    for pos, island in parsed.islands.items():
        if pos == root:
            continue
        oracle.require_any([registry.pointing_into(sid, pos) for sid in island.bridges])


def encode(parsed: ParsedBoard, oracle: SatOracle, use_flow: bool = True):
    """Add all constraints of the board to the oracle."""
    encode_weights(parsed, oracle)
    encode_overlaps(parsed, oracle)
    encode_degrees(parsed, oracle)
    if use_flow:
        encode_flow(parsed, oracle)
    logger.debug("Encoded %d islands / %d slots: %d vars, %d clauses",
                 len(parsed.islands), len(parsed.slots), oracle.num_vars, oracle.num_clauses)
