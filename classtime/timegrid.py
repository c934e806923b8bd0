import logging
import re
from typing import List, Tuple

from .models import TimeConfiguration, TimeSlot, LECTURE, BREAK, LUNCH

logger = logging.getLogger(__name__)

_CLOCK_RE = re.compile(r'^(\d{1,2}):(\d{2})$')


class InvalidTimeConfiguration(ValueError):
    pass


def parse_clock(value: str) -> int:
    """Minutes since midnight for a 24-hour ``HH:MM`` string."""
    m = _CLOCK_RE.match(str(value).strip())
    if not m:
        raise InvalidTimeConfiguration(f"Invalid clock value {value!r}; expected HH:MM")
    hours, minutes = int(m.group(1)), int(m.group(2))
    if hours > 23 or minutes > 59:
        raise InvalidTimeConfiguration(f"Clock value out of range: {value!r}")
    return hours * 60 + minutes


def format_clock(minutes: int) -> str:
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def break_windows(config: TimeConfiguration) -> List[Tuple[int, int, str]]:
    """Validated (start, end, kind) windows sorted by start, in minutes.

    Raises InvalidTimeConfiguration when the day is empty, a window is not
    fully inside [start, end), or two windows overlap.
    """
    start = parse_clock(config.start)
    end = parse_clock(config.end)
    if start >= end:
        raise InvalidTimeConfiguration(f"Start time {config.start} must be before end time {config.end}")
    if config.lecture_duration_min <= 0:
        raise InvalidTimeConfiguration("Lecture duration must be positive")

    windows = []
    for kind, brk in ((BREAK, config.short_break), (LUNCH, config.lunch_break)):
        if brk is None:
            continue
        if brk.duration_min <= 0:
            raise InvalidTimeConfiguration(f"{kind} duration must be positive")
        w_start = parse_clock(brk.start)
        w_end = w_start + brk.duration_min
        if w_start < start or w_end > end:
            raise InvalidTimeConfiguration(
                f"{kind} window {brk.start}+{brk.duration_min}min falls outside {config.start}-{config.end}")
        windows.append((w_start, w_end, kind))
    windows.sort()
    for (a_start, a_end, a_kind), (b_start, _, b_kind) in zip(windows, windows[1:]):
        if b_start < a_end:
            raise InvalidTimeConfiguration(f"{a_kind} and {b_kind} windows overlap")
    return windows


def build_time_slots(config: TimeConfiguration) -> List[TimeSlot]:
    windows = break_windows(config)
    current = parse_clock(config.start)
    end = parse_clock(config.end)
    slots: List[TimeSlot] = []
    seq = 1
    while current < end:
        inside = next((w for w in windows if w[0] <= current < w[1]), None)
        if inside is not None:
            w_start, w_end, kind = inside
            slots.append(TimeSlot(id=f"{kind}-{seq}", start=format_clock(w_start),
                                  end=format_clock(w_end), kind=kind, sequence=seq))
            current = w_end
        else:
            boundary = min([w[0] for w in windows if w[0] > current] + [end])
            slot_end = min(current + config.lecture_duration_min, boundary)
            slots.append(TimeSlot(id=f"slot-{seq}", start=format_clock(current),
                                  end=format_clock(slot_end), kind=LECTURE, sequence=seq))
            current = slot_end
        seq += 1
    logger.debug("Built %d time slots (%d lecture) for %s-%s", len(slots),
                 sum(1 for s in slots if s.kind == LECTURE), config.start, config.end)
    return slots


def lecture_slots(slots: List[TimeSlot]) -> List[TimeSlot]:
    return [s for s in slots if s.kind == LECTURE]
