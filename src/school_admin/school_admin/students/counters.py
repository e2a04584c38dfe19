"""Update rules for the derived counters stored on each student.

The services turn an incoming event into a delta with these functions; the
repositories apply the delta atomically with the event insert.
"""
from __future__ import annotations

from ..core.enums import AttendanceStatus


def present_delta(status: AttendanceStatus) -> int:
    """Change to ``attendance_sessions_present`` caused by one new mark.

    Counters start at the all-present baseline, so only absences move them.
    """
    return 0 if status.counts_as_present else -1


def reaches_detention_threshold(behaviour_points: int, threshold: int) -> bool:
    return behaviour_points <= threshold
