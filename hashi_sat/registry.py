"""
Interning of structured propositions into SAT variable numbers.

Every proposition the encoder talks about is a small frozen object; the
registry hands out one positive integer per distinct object and can map a
number back to its object when reading a model.
"""

from dataclasses import dataclass
from itertools import count
from typing import Iterable, Optional, Union

from pysat.formula import IDPool

from .board import SlotId


@dataclass(frozen=True)
class WeightAtom:
    """Slot `slot` carries exactly `weight` bridges."""
    slot: SlotId
    weight: int


@dataclass(frozen=True)
class DirectionAtom:
    """Slot `slot` carries a bridge oriented toward its dst (or its src)."""
    slot: SlotId
    toward_dst: bool


@dataclass(frozen=True)
class AuxAtom:
    """Helper variable introduced when defining connectives."""
    index: int


Atom = Union[WeightAtom, DirectionAtom, AuxAtom]


class VariableRegistry:
    def __init__(self):
        self._pool = IDPool()
        self._aux = count()

    def var(self, atom: Atom) -> int:
        """Variable of any atom; used when enumerating models or inspecting them."""
        return self._pool.id(atom)

    def weight(self, slot: SlotId, weight: int) -> int:
        return self._pool.id(WeightAtom(slot, weight))

    def direction(self, slot: SlotId, toward_dst: bool) -> int:
        return self._pool.id(DirectionAtom(slot, toward_dst))

    def pointing_into(self, slot: SlotId, island) -> int:
        """Direction variable meaning "the bridge on slot points at island"."""
        src, dst = slot
        if island == dst:
            return self.direction(slot, True)
        if island == src:
            return self.direction(slot, False)
        raise ValueError(f"{tuple(island)} is not an endpoint of slot {slot}")

    def fresh(self) -> int:
        return self._pool.id(AuxAtom(next(self._aux)))

    def atom(self, var: int) -> Optional[Atom]:
        """Reverse lookup for debugging; None for variables created by cardinality encodings."""
        return self._pool.obj(abs(var))

    def true_atoms(self, model: Iterable[int]) -> frozenset:
        """Atoms assigned true in a solver model."""
        atoms = (self._pool.obj(lit) for lit in model if lit > 0)
        return frozenset(a for a in atoms if a is not None)

    @property
    def pool(self) -> IDPool:
        return self._pool

    @property
    def top(self) -> int:
        return self._pool.top
