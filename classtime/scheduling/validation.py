from typing import Iterable, List, Sequence
import networkx as nx

from ..graph_build import clash_groups
from ..models import Demand, Entry, Room, TimeSlot, LECTURE


def faculty_ok(G: nx.Graph) -> bool:
    return not clash_groups(G, 'faculty')


def rooms_ok(G: nx.Graph) -> bool:
    return not clash_groups(G, 'room')


def hours_ok(demands: Iterable[Demand]) -> bool:
    return all(d.hours_scheduled == d.hours_needed for d in demands)


def references_ok(entries: Sequence[Entry], slots: Sequence[TimeSlot], rooms: Sequence[Room],
                  working_days: List[str]) -> bool:
    """Entries only sit in lecture slots of working days and in known rooms."""
    lecture_ids = {s.id for s in slots if s.kind == LECTURE}
    room_ids = {r.id for r in rooms}
    for e in entries:
        if e.day not in working_days or e.slot_id not in lecture_ids:
            return False
        if e.room_id not in room_ids:
            return False
    return True
