from dataclasses import dataclass
from typing import Iterable, List

from .board import Coord, SlotId, slot_geometry, slot_id
from .registry import WeightAtom


@dataclass(frozen=True, order=True)
class Bridge:
    src: Coord
    dst: Coord
    is_vertical: bool
    weight: int

    def as_dict(self) -> dict:
        return {
            'src': {'row': self.src.row, 'col': self.src.col},
            'dst': {'row': self.dst.row, 'col': self.dst.col},
            'weight': self.weight,
        }


def bridge_slot(bridge: Bridge) -> SlotId:
    """Slot identifier a bridge was decoded from."""
    return slot_id(bridge.src, bridge.dst)


def decode(true_atoms: Iterable) -> List[Bridge]:
    """
    Convert the true atoms of a model to bridges.
    Only weight atoms with a nonzero weight produce a bridge; the result is
    sorted by (src, dst).
    """
    bridges = []
    for atom in true_atoms:
        if not isinstance(atom, WeightAtom) or atom.weight == 0:
            continue
        src, dst, is_vertical = slot_geometry(atom.slot)
        bridges.append(Bridge(src=src, dst=dst, is_vertical=is_vertical, weight=atom.weight))
    bridges.sort()
    return bridges
