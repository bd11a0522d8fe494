from typing import Dict, Iterable, List, Set

from .board import Coord, ParsedBoard, SlotId
from .decoder import Bridge


def connected_groups(islands: Iterable[Coord], bridges: Iterable[Bridge]) -> List[Set[Coord]]:
    """Groups of islands joined by bridges (union-find), in island order."""
    parent: Dict[Coord, Coord] = {Coord(*pos): Coord(*pos) for pos in islands}

    def find(x):
        path = []
        while parent[x] != x:
            path.append(x)
            x = parent[x]
        for p in path:
            parent[p] = x
        return x

    def union(a, b):
        ra, rb = find(a), find(b)
        if ra != rb:
            parent[rb] = ra

    for bridge in bridges:
        if bridge.weight > 0:
            union(bridge.src, bridge.dst)

    groups: Dict[Coord, Set[Coord]] = {}
    for pos in parent:
        groups.setdefault(find(pos), set()).add(pos)
    return list(groups.values())


def count_components(islands: Iterable[Coord], bridges: Iterable[Bridge]) -> int:
    return len(connected_groups(islands, bridges))


def is_connected(islands: Iterable[Coord], bridges: Iterable[Bridge]) -> bool:
    """True when every island is reachable from every other one (or there are none)."""
    return count_components(islands, bridges) <= 1


def cut_slots(parsed: ParsedBoard, group: Set[Coord]) -> List[SlotId]:
    """Slots with exactly one endpoint inside the group."""
    cut: List[SlotId] = []
    for sid, slot in parsed.slots.items():
        if (slot.src in group) != (slot.dst in group):
            cut.append(sid)
    return cut
