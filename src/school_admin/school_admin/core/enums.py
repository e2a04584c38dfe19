from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Staff account roles."""

    ADMIN = "admin"
    TEACHER = "teacher"
    STAFF = "staff"


class AttendanceSession(str, Enum):
    AM = "AM"
    PM = "PM"


class AttendanceStatus(str, Enum):
    """Canonical attendance mark stored in the database."""

    PRESENT = "PRESENT"
    LATE = "LATE"
    ABSENT = "ABSENT"
    AUTH_ABSENT = "AUTH_ABSENT"
    UNAUTH_ABSENT = "UNAUTH_ABSENT"

    @classmethod
    def _missing_(cls, value):
        # Older producers wrote ABSENT_AUTH / ABSENT_UNAUTH.
        legacy = {"ABSENT_AUTH": cls.AUTH_ABSENT, "ABSENT_UNAUTH": cls.UNAUTH_ABSENT}
        if isinstance(value, str):
            return legacy.get(value.strip().upper())
        return None

    @property
    def counts_as_present(self) -> bool:
        return self in (AttendanceStatus.PRESENT, AttendanceStatus.LATE)

    @property
    def is_absence(self) -> bool:
        return not self.counts_as_present


class BehaviourType(str, Enum):
    POSITIVE = "POSITIVE"
    NEGATIVE = "NEGATIVE"


class DetentionType(str, Enum):
    LUNCH = "LUNCH"
    AFTER_SCHOOL = "AFTER_SCHOOL"


class DetentionStatus(str, Enum):
    """Lifecycle of a scheduled detention."""

    SCHEDULED = "SCHEDULED"
    ATTENDED = "ATTENDED"
    MISSED = "MISSED"
