import logging
from typing import List, Optional, Sequence

from ..config import FillerPolicy
from ..models import Entry, Room, Scope, TimeSlot
from .allocator import entry_id

logger = logging.getLogger(__name__)


def fill_idle_slots(entries: Sequence[Entry], slots: Sequence[TimeSlot], rooms: Sequence[Room],
                    working_days: Sequence[str], policy: Optional[FillerPolicy] = None,
                    scope: Optional[Scope] = None) -> List[Entry]:
    """Placeholder entries for the lecture slots left empty on ``policy.day``.

    Only room occupancy is consulted; the placeholder faculty is never
    treated as busy. Returns the new entries; ``entries`` is not modified.
    """
    if policy is None:
        policy = FillerPolicy()
    if not policy.enabled or policy.day not in working_days:
        return []
    day = policy.day
    taken = {}
    for e in entries:
        if e.day == day:
            taken.setdefault(e.slot_id, set()).add(e.room_id)

    fillers: List[Entry] = []
    for slot in slots:
        if slot.id in taken:
            continue
        room = next((r for r in rooms if r.id not in taken.get(slot.id, ())), None)
        if room is None:
            continue
        fillers.append(Entry(id=entry_id(day, slot.id, policy.subject_id), day=day, slot_id=slot.id,
                             subject_id=policy.subject_id, faculty_id=policy.faculty_id,
                             room_id=room.id, scope=scope or Scope()))
        taken.setdefault(slot.id, set()).add(room.id)
    if fillers:
        logger.info("Added %d %s entries on %s", len(fillers), policy.subject_name, day)
    return fillers
