from typing import Dict, Optional, Sequence

import pandas as pd

from .models import Conflict, Entry, TimeSlot, LECTURE

ENTRY_COLUMNS = ['id', 'day', 'time_slot_id', 'subject_id', 'faculty_id', 'room_id',
                 'department_id', 'class_id', 'year', 'semester', 'is_locked']


def entries_frame(entries: Sequence[Entry]) -> pd.DataFrame:
    rows = [{
        'id': e.id,
        'day': e.day,
        'time_slot_id': e.slot_id,
        'subject_id': e.subject_id,
        'faculty_id': e.faculty_id,
        'room_id': e.room_id,
        'department_id': e.scope.department_id,
        'class_id': e.scope.class_id,
        'year': e.scope.year,
        'semester': e.scope.semester,
        'is_locked': e.is_locked,
    } for e in entries]
    return pd.DataFrame(rows, columns=ENTRY_COLUMNS)


def conflicts_frame(conflicts: Sequence[Conflict]) -> pd.DataFrame:
    rows = [{'kind': c.kind, 'message': c.message, 'entry_ids': ';'.join(c.entry_ids)} for c in conflicts]
    return pd.DataFrame(rows, columns=['kind', 'message', 'entry_ids'])


def weekly_grid(entries: Sequence[Entry], slots: Sequence[TimeSlot], working_days: Sequence[str],
                subject_names: Optional[Dict[str, str]] = None) -> pd.DataFrame:
    """Day x slot view: one row per slot (labelled HH:MM-HH:MM), one column per day.

    Lecture cells read ``subject / faculty / room`` (several entries in one
    cell are joined with `` | ``); break and lunch rows are labelled.
    """
    subject_names = subject_names or {}
    grid = pd.DataFrame('', index=[s.label for s in slots], columns=list(working_days))
    for s in slots:
        if s.kind != LECTURE:
            grid.loc[s.label, :] = s.kind.capitalize()
    label_of = {s.id: s.label for s in slots}
    for e in entries:
        if e.slot_id not in label_of or e.day not in grid.columns:
            continue
        text = f"{subject_names.get(e.subject_id, e.subject_id)} / {e.faculty_id} / {e.room_id}"
        current = grid.at[label_of[e.slot_id], e.day]
        grid.at[label_of[e.slot_id], e.day] = f"{current} | {text}" if current else text
    grid.index.name = 'slot'
    return grid
