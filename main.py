import argparse
import logging

from classtime.config import AllocatorSettings, FillerPolicy
from classtime.grid import weekly_grid
from classtime.io_utils import (
    load_time_config, load_subjects, load_faculty, load_rooms, load_allocations,
    save_entries_csv, save_conflicts_csv
)
from classtime.models import Scope
from classtime.scheduling.evaluation import summary
from classtime.scheduling.generate import generate_timetable
from classtime.timegrid import InvalidTimeConfiguration


def main(argv=None):
    p = argparse.ArgumentParser(description="ClassTime – Weekly Class Timetable Allocation")
    # Inputs
    p.add_argument('--time-config', type=str, required=True, help='JSON time configuration')
    p.add_argument('--subjects', type=str, required=True, help='subjects.csv with id,name,code,weekly_hours,lab_required,type')
    p.add_argument('--faculty', type=str, required=True, help='faculty.csv with id,name,department')
    p.add_argument('--rooms', type=str, required=True, help='rooms.csv with id,room_number,type,capacity')
    p.add_argument('--allocations', type=str, required=True,
                   help='allocations.csv with id,subject_id,faculty_id,department_id,class_id,year,semester')

    # Scope filter; also stamped on filler entries
    p.add_argument('--department', type=str, default=None)
    p.add_argument('--class-id', type=str, default=None)
    p.add_argument('--year', type=int, default=None)
    p.add_argument('--semester', type=int, default=None)

    # Allocator
    p.add_argument('--rotation-step', type=int, default=3)
    p.add_argument('--attempt-factor', type=int, default=2)

    # Filler
    p.add_argument('--fill-day', type=str, default='Friday')
    p.add_argument('--no-fill', action='store_true', help='Leave idle slots empty')
    p.add_argument('--fill-subject', type=str, default='library-hour')
    p.add_argument('--fill-faculty', type=str, default='self-study')

    # Output
    p.add_argument('--out-entries', type=str, default='entries.csv')
    p.add_argument('--out-conflicts', type=str, default='conflicts.csv')
    p.add_argument('--out-grid', type=str, default=None, help='Optional weekly grid CSV')
    p.add_argument('-v', '--verbose', action='count', default=0)
    args = p.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose > 1 else logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    try:
        config = load_time_config(args.time_config)
        subjects = load_subjects(args.subjects)
        faculty = load_faculty(args.faculty)
        rooms = load_rooms(args.rooms)
        requests = load_allocations(args.allocations)
    except (OSError, KeyError, ValueError) as e:
        raise SystemExit(f"Could not load inputs: {e}")

    scope = Scope(department_id=args.department, class_id=args.class_id, year=args.year, semester=args.semester)
    requests = [r for r in requests
                if all(want is None or got == want for want, got in (
                    (scope.department_id, r.scope.department_id),
                    (scope.class_id, r.scope.class_id),
                    (scope.year, r.scope.year),
                    (scope.semester, r.scope.semester)))]

    settings = AllocatorSettings(rotation_step=args.rotation_step, attempt_factor=args.attempt_factor)
    filler = FillerPolicy(enabled=not args.no_fill, day=args.fill_day,
                          subject_id=args.fill_subject, faculty_id=args.fill_faculty)
    try:
        result = generate_timetable(config, requests, subjects, faculty, rooms,
                                    settings=settings, filler=filler, scope=scope)
    except InvalidTimeConfiguration as e:
        raise SystemExit(f"Invalid time configuration: {e}")

    print(summary(result, rooms, config.working_days, filler))
    for w in result.warnings:
        print(w)
    for c in result.conflicts:
        print(f"[{c.kind}] {c.message}")

    save_entries_csv(args.out_entries, result.entries)
    save_conflicts_csv(args.out_conflicts, result.conflicts)
    saved = [args.out_entries, args.out_conflicts]
    if args.out_grid:
        names = {s.id: s.name or s.id for s in subjects}
        names[filler.subject_id] = filler.subject_name
        weekly_grid(result.entries, result.slots, config.working_days, names).to_csv(args.out_grid)
        saved.append(args.out_grid)
    print(f"Saved: {', '.join(saved)}")


if __name__ == '__main__':
    main()
