import logging
from collections import defaultdict
from typing import Dict, List, Optional, Sequence, Set, Tuple

from ..config import AllocatorSettings
from ..models import (Conflict, Demand, Entry, Room, TimeSlot, DEMAND_INCOMPLETE)

logger = logging.getLogger(__name__)

Cell = Tuple[str, str]


class AllocationCancelled(RuntimeError):
    pass


def entry_id(day: str, slot_id: str, subject_id: str) -> str:
    return f"entry-{day}-{slot_id}-{subject_id}".lower().replace(' ', '_')


def _first_free_room(pool: Sequence[Room], cell: Cell, room_busy: Dict[str, Set[Cell]]) -> Optional[Room]:
    for room in pool:
        if cell not in room_busy[room.id]:
            return room
    return None


def allocate(demands: List[Demand], rooms: Sequence[Room], slots: Sequence[TimeSlot],
             working_days: Sequence[str], settings: Optional[AllocatorSettings] = None,
             cancel=None) -> Tuple[List[Entry], List[Conflict]]:
    """Greedy round-robin placement of demands into day x lecture-slot cells.

    Demand order sets priority. Each day starts its scan at a rotated demand
    so consecutive days do not repeat the same subject pattern. Demands are
    updated in place (``hours_scheduled``). ``cancel`` may be any object with
    ``is_set()``; it is checked before each day.
    """
    if settings is None:
        settings = AllocatorSettings()
    entries: List[Entry] = []
    conflicts: List[Conflict] = []
    n = len(demands)
    if n == 0:
        return entries, conflicts

    lab_rooms = [r for r in rooms if r.kind == 'lab']
    general_rooms = [r for r in rooms if r.kind == 'classroom']
    faculty_busy: Dict[str, Set[Cell]] = defaultdict(set)
    room_busy: Dict[str, Set[Cell]] = defaultdict(set)
    remaining = sum(1 for d in demands if not d.satisfied)
    max_attempts = settings.attempt_factor * n

    logger.info("Allocating %d demands (%d hours) over %d days x %d slots, %d rooms",
                n, sum(d.hours_needed for d in demands), len(working_days), len(slots), len(rooms))

    for day_index, day in enumerate(working_days):
        if remaining == 0:
            break
        if cancel is not None and cancel.is_set():
            raise AllocationCancelled(f"Allocation cancelled before {day}")
        pointer = (settings.rotation_step * day_index) % n
        for slot in slots:
            if remaining == 0:
                break
            cell = (day, slot.id)
            for attempt in range(max_attempts):
                idx = (pointer + attempt) % n
                demand = demands[idx]
                if demand.satisfied or cell in faculty_busy[demand.faculty.id]:
                    continue
                pool = lab_rooms if demand.subject.lab_required else general_rooms
                room = _first_free_room(pool, cell, room_busy) or _first_free_room(rooms, cell, room_busy)
                if room is None:
                    continue
                faculty_busy[demand.faculty.id].add(cell)
                room_busy[room.id].add(cell)
                demand.hours_scheduled += 1
                if demand.satisfied:
                    remaining -= 1
                entries.append(Entry(id=entry_id(day, slot.id, demand.subject.id), day=day,
                                     slot_id=slot.id, subject_id=demand.subject.id,
                                     faculty_id=demand.faculty.id, room_id=room.id,
                                     scope=demand.scope))
                logger.debug("Scheduled %s on %s at %s in %s (%d/%d)", demand.subject.id, day,
                             slot.start, room.id, demand.hours_scheduled, demand.hours_needed)
                pointer = (idx + 1) % n
                break

    for demand in demands:
        if demand.satisfied:
            continue
        placed = next((e for e in entries if e.subject_id == demand.subject.id), None)
        name = demand.subject.name or demand.subject.id
        conflicts.append(Conflict(
            kind=DEMAND_INCOMPLETE,
            message=(f"Could not schedule all hours for {name}. "
                     f"Scheduled: {demand.hours_scheduled}/{demand.hours_needed}"),
            entries=[placed] if placed is not None else [],
            resource_id=demand.subject.id,
            hours_scheduled=demand.hours_scheduled,
            hours_needed=demand.hours_needed,
        ))
        logger.warning("%s: only %d/%d hours scheduled", name, demand.hours_scheduled, demand.hours_needed)

    logger.info("Placed %d entries; %d demands incomplete", len(entries), len(conflicts))
    return entries, conflicts
