import logging
from typing import Iterable, Optional

from ..config import AllocatorSettings, FillerPolicy
from ..models import AllocationRequest, Faculty, Room, Scope, Subject, TimeConfiguration, TimetableResult
from ..timegrid import build_time_slots, lecture_slots
from .allocator import allocate
from .conflicts import detect_conflicts
from .demand import normalize_demands, unresolved_requests
from .filler import fill_idle_slots

logger = logging.getLogger(__name__)


def generate_timetable(config: TimeConfiguration,
                       requests: Iterable[AllocationRequest],
                       subjects: Iterable[Subject],
                       faculty: Iterable[Faculty],
                       rooms: Iterable[Room],
                       settings: Optional[AllocatorSettings] = None,
                       filler: Optional[FillerPolicy] = None,
                       scope: Optional[Scope] = None,
                       cancel=None) -> TimetableResult:
    """Build the grid, allocate, fill idle slots and re-check the result.

    Conflicts are the allocator's incomplete demands followed by any double
    bookings found by the detector over the final entry list.
    """
    if filler is None:
        filler = FillerPolicy()
    requests = list(requests)
    subjects = {s.id: s for s in subjects}
    faculty = {f.id: f for f in faculty}
    rooms = list(rooms)

    slots = build_time_slots(config)
    teaching = lecture_slots(slots)
    demands = normalize_demands(requests, subjects, faculty)
    warnings = [reason for _, reason in unresolved_requests(requests, subjects, faculty)]

    entries, conflicts = allocate(demands, rooms, teaching, config.working_days,
                                  settings=settings, cancel=cancel)
    entries = entries + fill_idle_slots(entries, teaching, rooms, config.working_days,
                                        policy=filler, scope=scope)
    conflicts = conflicts + detect_conflicts(entries, exempt_faculty_ids=(filler.faculty_id,))
    logger.info("Generated %d entries, %d conflicts, %d warnings", len(entries), len(conflicts), len(warnings))
    return TimetableResult(slots=slots, entries=entries, conflicts=conflicts,
                           warnings=warnings, demands=demands)
