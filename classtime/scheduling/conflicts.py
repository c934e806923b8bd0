import logging
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from ..config import FillerPolicy
from ..graph_build import build_clash_graph, clash_groups
from ..models import Conflict, Entry, FACULTY_DOUBLE_BOOKED, ROOM_DOUBLE_BOOKED

logger = logging.getLogger(__name__)

_KIND_ORDER = {'faculty': 0, 'room': 1}


def _message(kind: str, resource_id: str, group: List[Entry]) -> str:
    first = group[0]
    if kind == 'faculty':
        return (f"Faculty {resource_id} is assigned to {len(group)} classes "
                f"on {first.day} at {first.slot_id}")
    return f"Room {resource_id} is double-booked ({len(group)} classes) on {first.day} at {first.slot_id}"


def detect_conflicts(entries: Sequence[Entry],
                     exempt_faculty_ids: Optional[Iterable[str]] = None) -> List[Conflict]:
    """Flag every faculty or room used more than once in the same (day, slot).

    Works on any entry list, not only allocator output, so it also catches
    clashes introduced by manual edits. Each duplicate group is reported
    once with all of its entries. Faculty ids in ``exempt_faculty_ids``
    (default: the self-study placeholder) skip the faculty check.
    """
    entries = list(entries)
    if exempt_faculty_ids is None:
        exempt_faculty_ids = (FillerPolicy().faculty_id,)
    G = build_clash_graph(entries, exempt_faculty_ids)

    cell_rank: Dict[Tuple[str, str], int] = {}
    for i, e in enumerate(entries):
        cell_rank.setdefault(e.cell, i)

    found = []
    for kind in ('faculty', 'room'):
        for positions in clash_groups(G, kind):
            group = [entries[i] for i in positions]
            first = group[0]
            resource_id = first.faculty_id if kind == 'faculty' else first.room_id
            found.append(((cell_rank[first.cell], _KIND_ORDER[kind], positions[0]), Conflict(
                kind=FACULTY_DOUBLE_BOOKED if kind == 'faculty' else ROOM_DOUBLE_BOOKED,
                message=_message(kind, resource_id, group),
                entries=group,
                resource_id=resource_id,
                day=first.day,
                slot_id=first.slot_id,
            )))
    found.sort(key=lambda item: item[0])
    conflicts = [c for _, c in found]
    if conflicts:
        logger.info("Detected %d double bookings in %d entries", len(conflicts), len(entries))
    return conflicts
