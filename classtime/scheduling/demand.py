import logging
from typing import Dict, Iterable, List, Tuple

from ..models import AllocationRequest, Demand, Faculty, Subject

logger = logging.getLogger(__name__)


def _index(records) -> Dict[str, object]:
    if isinstance(records, dict):
        return records
    return {r.id: r for r in records}


def normalize_demands(requests: Iterable[AllocationRequest],
                      subjects: Iterable[Subject],
                      faculty: Iterable[Faculty]) -> List[Demand]:
    """Join requests with the catalogs, keeping request order.

    Requests whose subject or faculty id does not resolve are dropped.
    """
    subject_by_id = _index(subjects)
    faculty_by_id = _index(faculty)
    demands: List[Demand] = []
    for req in requests:
        subject = subject_by_id.get(req.subject_id)
        member = faculty_by_id.get(req.faculty_id)
        if subject is None or member is None:
            continue
        demands.append(Demand(subject=subject, faculty=member, scope=req.scope,
                              hours_needed=subject.weekly_hours))
    return demands


def unresolved_requests(requests: Iterable[AllocationRequest],
                        subjects: Iterable[Subject],
                        faculty: Iterable[Faculty]) -> List[Tuple[AllocationRequest, str]]:
    subject_by_id = _index(subjects)
    faculty_by_id = _index(faculty)
    dropped = []
    for req in requests:
        missing = []
        if req.subject_id not in subject_by_id:
            missing.append(f"subject {req.subject_id}")
        if req.faculty_id not in faculty_by_id:
            missing.append(f"faculty {req.faculty_id}")
        if missing:
            reason = f"Allocation {req.id} dropped: unknown {' and '.join(missing)}"
            logger.warning(reason)
            dropped.append((req, reason))
    return dropped
