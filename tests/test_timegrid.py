"""
Unit tests for the daily time grid.
"""
import unittest

from classtime.models import BreakWindow, TimeConfiguration, LECTURE, BREAK, LUNCH
from classtime.timegrid import (
    InvalidTimeConfiguration,
    build_time_slots,
    format_clock,
    lecture_slots,
    parse_clock,
)


def assert_partition(test, config, slots):
    test.assertEqual(slots[0].start, config.start)
    test.assertEqual(slots[-1].end, config.end)
    for prev, cur in zip(slots, slots[1:]):
        test.assertEqual(prev.end, cur.start)
        test.assertEqual(cur.sequence, prev.sequence + 1)
    for s in slots:
        test.assertLess(parse_clock(s.start), parse_clock(s.end))


class TestClock(unittest.TestCase):

    def test_parse_and_format(self):
        self.assertEqual(parse_clock("09:30"), 570)
        self.assertEqual(parse_clock("7:05"), 425)
        self.assertEqual(format_clock(570), "09:30")
        self.assertEqual(format_clock(0), "00:00")

    def test_malformed_clock_rejected(self):
        for bad in ("9.30", "25:00", "12:60", "noon", ""):
            with self.assertRaises(InvalidTimeConfiguration):
                parse_clock(bad)


class TestBuildTimeSlots(unittest.TestCase):

    def test_truncated_final_slot(self):
        config = TimeConfiguration(start="09:00", end="11:00", lecture_duration_min=50)
        slots = build_time_slots(config)

        self.assertEqual([s.label for s in slots], ["09:00-09:50", "09:50-10:40", "10:40-11:00"])
        self.assertEqual([s.kind for s in slots], [LECTURE] * 3)
        self.assertEqual([s.sequence for s in slots], [1, 2, 3])
        self.assertEqual(slots[-1].duration_min, 20)

    def test_breaks_cut_lectures(self):
        config = TimeConfiguration(
            start="09:00", end="13:00", lecture_duration_min=60,
            short_break=BreakWindow("10:30", 15),
            lunch_break=BreakWindow("12:00", 30),
        )
        slots = build_time_slots(config)

        self.assertEqual(
            [(s.id, s.label) for s in slots],
            [
                ("slot-1", "09:00-10:00"),
                ("slot-2", "10:00-10:30"),
                ("break-3", "10:30-10:45"),
                ("slot-4", "10:45-11:45"),
                ("slot-5", "11:45-12:00"),
                ("lunch-6", "12:00-12:30"),
                ("slot-7", "12:30-13:00"),
            ],
        )
        assert_partition(self, config, slots)

    def test_no_lecture_overlaps_a_break(self):
        config = TimeConfiguration(
            start="08:00", end="17:00", lecture_duration_min=55,
            short_break=BreakWindow("10:20", 20),
            lunch_break=BreakWindow("13:00", 45),
        )
        slots = build_time_slots(config)
        windows = [(parse_clock(s.start), parse_clock(s.end)) for s in slots if s.kind != LECTURE]
        self.assertEqual(len(windows), 2)
        for s in lecture_slots(slots):
            start, end = parse_clock(s.start), parse_clock(s.end)
            for w_start, w_end in windows:
                self.assertTrue(end <= w_start or start >= w_end)
        assert_partition(self, config, slots)

    def test_break_at_day_start(self):
        config = TimeConfiguration(start="09:00", end="10:00", lecture_duration_min=30,
                                   short_break=BreakWindow("09:00", 10))
        slots = build_time_slots(config)

        self.assertEqual(slots[0].kind, BREAK)
        self.assertEqual(slots[0].id, "break-1")
        self.assertEqual([s.label for s in slots], ["09:00-09:10", "09:10-09:40", "09:40-10:00"])

    def test_adjacent_breaks(self):
        config = TimeConfiguration(start="09:00", end="11:00", lecture_duration_min=60,
                                   short_break=BreakWindow("10:00", 15),
                                   lunch_break=BreakWindow("10:15", 30))
        slots = build_time_slots(config)

        self.assertEqual([s.kind for s in slots], [LECTURE, BREAK, LUNCH, LECTURE])
        self.assertEqual(slots[-1].label, "10:45-11:00")

    def test_lecture_slots_filter(self):
        config = TimeConfiguration(start="09:00", end="12:00", lecture_duration_min=60,
                                   lunch_break=BreakWindow("10:00", 60))
        self.assertEqual([s.id for s in lecture_slots(build_time_slots(config))], ["slot-1", "slot-3"])


class TestInvalidConfiguration(unittest.TestCase):

    def test_start_not_before_end(self):
        with self.assertRaises(InvalidTimeConfiguration):
            build_time_slots(TimeConfiguration(start="12:00", end="12:00"))
        with self.assertRaises(InvalidTimeConfiguration):
            build_time_slots(TimeConfiguration(start="13:00", end="09:00"))

    def test_break_outside_day(self):
        config = TimeConfiguration(start="09:00", end="12:00", lunch_break=BreakWindow("13:00", 30))
        with self.assertRaises(InvalidTimeConfiguration):
            build_time_slots(config)

    def test_break_straddling_end(self):
        config = TimeConfiguration(start="09:00", end="12:00", lunch_break=BreakWindow("11:45", 30))
        with self.assertRaises(InvalidTimeConfiguration):
            build_time_slots(config)

    def test_overlapping_breaks(self):
        config = TimeConfiguration(start="09:00", end="14:00",
                                   short_break=BreakWindow("11:00", 30),
                                   lunch_break=BreakWindow("11:15", 45))
        with self.assertRaises(InvalidTimeConfiguration):
            build_time_slots(config)

    def test_non_positive_durations(self):
        with self.assertRaises(InvalidTimeConfiguration):
            build_time_slots(TimeConfiguration(start="09:00", end="12:00", lecture_duration_min=0))
        with self.assertRaises(InvalidTimeConfiguration):
            build_time_slots(TimeConfiguration(start="09:00", end="12:00",
                                               short_break=BreakWindow("10:00", 0)))

    def test_invalid_configuration_is_value_error(self):
        self.assertTrue(issubclass(InvalidTimeConfiguration, ValueError))


if __name__ == '__main__':
    unittest.main()
