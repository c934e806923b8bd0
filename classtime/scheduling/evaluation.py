from collections import Counter

from ..config import FillerPolicy
from ..graph_build import build_clash_graph
from ..models import TimetableResult, LECTURE
from .validation import faculty_ok, rooms_ok, hours_ok, references_ok


def utilization(result: TimetableResult, working_days, room_count: int) -> float:
    """Share of (day, lecture slot, room) capacity taken by entries."""
    lectures = sum(1 for s in result.slots if s.kind == LECTURE)
    capacity = len(working_days) * lectures * room_count
    if capacity == 0:
        return 0.0
    return len(result.entries) / capacity


def summary(result: TimetableResult, rooms, working_days, filler: FillerPolicy = None) -> str:
    if filler is None:
        filler = FillerPolicy()
    G = build_clash_graph(result.entries, (filler.faculty_id,))
    fillers = sum(1 for e in result.entries if e.faculty_id == filler.faculty_id)
    lectures = sum(1 for s in result.slots if s.kind == LECTURE)
    cells_used = len({e.cell for e in result.entries})
    kinds = Counter(c.kind for c in result.conflicts)
    satisfied = sum(1 for d in result.demands if d.satisfied)
    ok_fac = faculty_ok(G)
    ok_room = rooms_ok(G)
    ok_hours = hours_ok(result.demands)
    ok_refs = references_ok(result.entries, result.slots, rooms, list(working_days))
    conflicts_text = ", ".join(f"{k}={v}" for k, v in sorted(kinds.items())) or "none"
    warning = ""
    needed = sum(d.hours_needed for d in result.demands)
    if needed > len(working_days) * lectures:
        warning = (
            f"Warning: hours needed={needed} > cells={len(working_days) * lectures}; "
            f"a single-class week cannot hold every demand.\n"
        )
    return (
        f"Slots per day: {len(result.slots)}  Lecture slots: {lectures}  Days: {len(working_days)}\n"
        f"Entries: {len(result.entries)}  Filler: {fillers}  Cells used: {cells_used}\n"
        f"Demands satisfied: {satisfied}/{len(result.demands)}  Hours needed: {needed}\n"
        f"Room utilization: {utilization(result, working_days, len(rooms)):.1%}\n"
        f"Conflicts: {conflicts_text}\n"
        f"Valid (faculty): {ok_fac}  Valid (rooms): {ok_room}  Valid (hours): {ok_hours}  Valid (references): {ok_refs}\n"
        f"Dropped allocations: {len(result.warnings)}\n"
        f"{warning}"
    )
