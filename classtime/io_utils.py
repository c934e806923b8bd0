import csv
import io
import json
import os
from typing import Dict, List, Optional, Union, IO

from .grid import conflicts_frame, entries_frame
from .models import (AllocationRequest, BreakWindow, Conflict, Entry, Faculty, Room, Scope,
                     Subject, TimeConfiguration, ROOM_KINDS)

TextOrPath = Union[str, os.PathLike, IO]

_TRUE = {'1', 'true', 'yes', 'y', 't'}


def _open_text(src: TextOrPath):
    """Return a text-mode file handle and a flag indicating whether to close it.

    Accepts a filesystem path, a text IO object, or a BytesIO buffer.
    """
    if isinstance(src, (str, os.PathLike)):
        f = open(src, 'r', newline='', encoding='utf-8')
        return f, True
    if isinstance(src, io.BytesIO):
        src.seek(0)
        f = io.TextIOWrapper(src, encoding='utf-8', newline='')
        return f, True
    if hasattr(src, 'read'):
        if hasattr(src, 'seek'):
            src.seek(0)
        return src, False
    raise TypeError("Unsupported input type; expected path or file-like object")


def _rows(src: TextOrPath) -> List[Dict[str, str]]:
    f, should_close = _open_text(src)
    try:
        return [{k.strip(): (v or '').strip() for k, v in row.items() if k} for row in csv.DictReader(f)]
    finally:
        if should_close:
            f.close()


def _int(value: str, field: str, default: Optional[int] = None) -> Optional[int]:
    if value == '':
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"Column {field!r}: expected an integer, got {value!r}")


def _opt(value: str) -> Optional[str]:
    return value or None


def load_subjects(src: TextOrPath) -> List[Subject]:
    subjects = []
    for row in _rows(src):
        subjects.append(Subject(
            id=row['id'],
            name=row.get('name', ''),
            code=row.get('code', ''),
            weekly_hours=_int(row.get('weekly_hours', ''), 'weekly_hours', 0),
            lab_required=row.get('lab_required', '').lower() in _TRUE,
            type=row.get('type') or 'theory',
        ))
    return subjects


def load_faculty(src: TextOrPath) -> List[Faculty]:
    return [Faculty(id=row['id'], name=row.get('name', ''), department=row.get('department', ''))
            for row in _rows(src)]


def load_rooms(src: TextOrPath) -> List[Room]:
    rooms = []
    for row in _rows(src):
        kind = (row.get('type') or 'classroom').lower()
        if kind not in ROOM_KINDS:
            raise ValueError(f"Room {row['id']}: unknown type {kind!r}; expected one of {', '.join(ROOM_KINDS)}")
        rooms.append(Room(id=row['id'], room_number=row.get('room_number', ''), kind=kind,
                          capacity=_int(row.get('capacity', ''), 'capacity', 0)))
    return rooms


def load_allocations(src: TextOrPath) -> List[AllocationRequest]:
    requests = []
    for i, row in enumerate(_rows(src)):
        scope = Scope(
            department_id=_opt(row.get('department_id', '')),
            class_id=_opt(row.get('class_id', '')),
            year=_int(row.get('year', ''), 'year'),
            semester=_int(row.get('semester', ''), 'semester'),
        )
        requests.append(AllocationRequest(id=row.get('id') or f"alloc-{i + 1}", subject_id=row['subject_id'],
                                          faculty_id=row['faculty_id'], scope=scope))
    return requests


def _break(raw) -> Optional[BreakWindow]:
    if not raw:
        return None
    return BreakWindow(start=raw['start_time'], duration_min=int(raw['duration']))


def load_time_config(src: TextOrPath) -> TimeConfiguration:
    f, should_close = _open_text(src)
    try:
        raw = json.load(f)
    finally:
        if should_close:
            f.close()
    config = TimeConfiguration(
        start=raw['start_time'],
        end=raw['end_time'],
        lecture_duration_min=int(raw.get('lecture_duration', 60)),
        lab_duration_min=int(raw.get('lab_duration', 120)),
        short_break=_break(raw.get('short_break')),
        lunch_break=_break(raw.get('lunch_break')),
    )
    if raw.get('working_days'):
        config.working_days = list(raw['working_days'])
    return config


def save_entries_csv(path: str, entries: List[Entry]):
    entries_frame(entries).to_csv(path, index=False)


def save_conflicts_csv(path: str, conflicts: List[Conflict]):
    conflicts_frame(conflicts).to_csv(path, index=False)
