from dataclasses import dataclass


@dataclass
class AllocatorSettings:
    # the first demand tried on day d is (rotation_step * d) mod len(demands)
    rotation_step: int = 3
    # a slot scans at most attempt_factor * len(demands) demands
    attempt_factor: int = 2


@dataclass
class FillerPolicy:
    enabled: bool = True
    day: str = 'Friday'
    subject_id: str = 'library-hour'
    subject_name: str = 'Library / Self-Study'
    faculty_id: str = 'self-study'
    faculty_name: str = 'Self-Study'
