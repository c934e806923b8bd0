from dataclasses import dataclass, field
from typing import List, Optional

LECTURE = 'lecture'
BREAK = 'break'
LUNCH = 'lunch'

ROOM_KINDS = ('classroom', 'lab', 'auditorium', 'seminar')

FACULTY_DOUBLE_BOOKED = 'faculty-double-booked'
ROOM_DOUBLE_BOOKED = 'room-double-booked'
DEMAND_INCOMPLETE = 'demand-incomplete'


@dataclass
class BreakWindow:
    start: str  # HH:MM
    duration_min: int


@dataclass
class TimeConfiguration:
    start: str  # HH:MM, 24-hour clock
    end: str
    lecture_duration_min: int = 60
    lab_duration_min: int = 120
    short_break: Optional[BreakWindow] = None
    lunch_break: Optional[BreakWindow] = None
    working_days: List[str] = field(
        default_factory=lambda: ['Monday', 'Tuesday', 'Wednesday', 'Thursday', 'Friday'])


@dataclass(frozen=True)
class TimeSlot:
    id: str
    start: str
    end: str
    kind: str = LECTURE
    sequence: int = 0

    @property
    def label(self) -> str:
        return f"{self.start}-{self.end}"

    @property
    def duration_min(self) -> int:
        sh, sm = self.start.split(':')
        eh, em = self.end.split(':')
        return (int(eh) * 60 + int(em)) - (int(sh) * 60 + int(sm))


@dataclass(frozen=True)
class Subject:
    id: str
    name: str = ''
    code: str = ''
    weekly_hours: int = 0
    lab_required: bool = False
    type: str = 'theory'  # theory | lab | practical


@dataclass(frozen=True)
class Faculty:
    id: str
    name: str = ''
    department: str = ''


@dataclass(frozen=True)
class Room:
    id: str
    room_number: str = ''
    kind: str = 'classroom'
    capacity: int = 0


@dataclass(frozen=True)
class Scope:
    department_id: Optional[str] = None
    class_id: Optional[str] = None
    year: Optional[int] = None
    semester: Optional[int] = None


@dataclass
class AllocationRequest:
    id: str
    subject_id: str
    faculty_id: str
    scope: Scope = field(default_factory=Scope)


@dataclass
class Demand:
    subject: Subject
    faculty: Faculty
    scope: Scope = field(default_factory=Scope)
    hours_needed: int = 0
    hours_scheduled: int = 0

    @property
    def hours_left(self) -> int:
        return self.hours_needed - self.hours_scheduled

    @property
    def satisfied(self) -> bool:
        return self.hours_scheduled >= self.hours_needed


@dataclass(frozen=True)
class Entry:
    id: str
    day: str
    slot_id: str
    subject_id: str
    faculty_id: str
    room_id: str
    scope: Scope = field(default_factory=Scope)
    is_locked: bool = False

    @property
    def cell(self):
        return (self.day, self.slot_id)


@dataclass
class Conflict:
    kind: str
    message: str
    entries: List[Entry] = field(default_factory=list)
    # double bookings: the shared resource and cell
    resource_id: Optional[str] = None
    day: Optional[str] = None
    slot_id: Optional[str] = None
    # incomplete demands
    hours_scheduled: Optional[int] = None
    hours_needed: Optional[int] = None

    @property
    def entry_ids(self) -> List[str]:
        return [e.id for e in self.entries]


@dataclass
class TimetableResult:
    slots: List[TimeSlot] = field(default_factory=list)
    entries: List[Entry] = field(default_factory=list)
    conflicts: List[Conflict] = field(default_factory=list)
    # allocation requests dropped for unresolved references
    warnings: List[str] = field(default_factory=list)
    demands: List[Demand] = field(default_factory=list)
