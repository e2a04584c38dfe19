from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from typing import Optional

import pytest

from src.school_admin.school_admin.attendance.model import AttendanceRecord
from src.school_admin.school_admin.attendance.service import AttendanceService
from src.school_admin.school_admin.behaviour.model import BehaviourRecord
from src.school_admin.school_admin.behaviour.service import BehaviourService
from src.school_admin.school_admin.core.exceptions import ConsistencyError, RejectedError
from src.school_admin.school_admin.dashboard.service import DashboardService
from src.school_admin.school_admin.detentions.model import Detention
from src.school_admin.school_admin.detentions.service import DetentionService
from src.school_admin.school_admin.students.model import Student, StudentQuery
from src.school_admin.school_admin.students.service import StudentService
from src.school_admin.school_admin.timetables.model import Timetable
from src.school_admin.school_admin.timetables.service import TimetableService
from src.school_admin.school_admin.tutor_groups.model import TutorGroup
from src.school_admin.school_admin.tutor_groups.service import TutorGroupService
from src.school_admin.school_admin.users.model import User
from src.school_admin.school_admin.users.service import AuthService, UserService


@dataclass
class InMemorySchool:
    """Shared tables behind the in-memory repositories."""

    students: dict[int, Student] = field(default_factory=dict)
    attendance: list[AttendanceRecord] = field(default_factory=list)
    behaviour: list[BehaviourRecord] = field(default_factory=list)
    detentions: dict[int, Detention] = field(default_factory=dict)
    users: dict[int, User] = field(default_factory=dict)
    tutor_groups: dict[int, TutorGroup] = field(default_factory=dict)
    timetables: dict[int, Timetable] = field(default_factory=dict)
    _next_id: int = 0

    def next_id(self) -> int:
        self._next_id += 1
        return self._next_id


class InMemoryStudents:
    def __init__(self, db: InMemorySchool):
        self._db = db

    def get_by_id(self, student_id: int) -> Optional[Student]:
        return self._db.students.get(student_id)

    def list_all(self):
        return sorted(self._db.students.values(), key=lambda s: s.student_id, reverse=True)

    def count(self) -> int:
        return len(self._db.students)

    def search(self, query: StudentQuery):
        return [s for s in self.list_all() if query.matches(s)]

    def create(self, *, first_name, last_name, date_of_birth, year_group, tutor_group, admission_date) -> int:
        student_id = self._db.next_id()
        self._db.students[student_id] = Student(
            student_id=student_id,
            first_name=first_name,
            last_name=last_name,
            date_of_birth=date_of_birth,
            year_group=year_group,
            tutor_group=tutor_group,
            admission_date=admission_date,
        )
        return student_id

    def create_many(self, rows) -> int:
        for row in rows:
            self.create(**row)
        return len(rows)

    def delete_cascade(self, student_id: int) -> bool:
        if student_id not in self._db.students:
            return False
        self._db.attendance = [a for a in self._db.attendance if a.student_id != student_id]
        self._db.behaviour = [b for b in self._db.behaviour if b.student_id != student_id]
        self._db.detentions = {k: d for k, d in self._db.detentions.items() if d.student_id != student_id}
        del self._db.students[student_id]
        return True

    def set_present(self, student_id: int, present: int) -> None:
        """Test helper: seed a year-to-date present counter."""
        self._db.students[student_id] = replace(self._db.students[student_id], attendance_sessions_present=present)


class InMemoryAttendance:
    def __init__(self, db: InMemorySchool, *, fail_counter_update: bool = False):
        self._db = db
        self.fail_counter_update = fail_counter_update

    def insert_mark(self, *, student_id, work_date, session, status, recorded_at, present_delta):
        student = self._db.students.get(student_id)
        if not student:
            return None

        record = AttendanceRecord(
            attendance_id=self._db.next_id(),
            student_id=student_id,
            date=work_date,
            session=session,
            status=status,
            recorded_at=recorded_at,
        )
        if present_delta and self.fail_counter_update:
            # Nothing has been written yet, mirroring a rolled back transaction.
            raise ConsistencyError("counter update failed")

        present = max(0, min(student.attendance_sessions_possible, student.attendance_sessions_present + present_delta))
        self._db.attendance.append(record)
        self._db.students[student_id] = replace(student, attendance_sessions_present=present)
        return record

    def get_latest_for_student_on(self, student_id: int, day: date):
        marks = [a for a in self._db.attendance if a.student_id == student_id and a.date == day]
        if not marks:
            return None
        return max(marks, key=lambda a: (a.recorded_at, a.attendance_id))

    def list_for_student(self, student_id: int):
        marks = [a for a in self._db.attendance if a.student_id == student_id]
        return sorted(marks, key=lambda a: (a.date, a.attendance_id), reverse=True)

    def count_students_present_on(self, day: date) -> int:
        return len(
            {
                a.student_id
                for a in self._db.attendance
                if a.date == day and a.status.counts_as_present and a.student_id in self._db.students
            }
        )


class InMemoryBehaviour:
    def __init__(self, db: InMemorySchool):
        self._db = db

    def insert_and_add_points(self, *, student_id, type, category, points, notes, recorded_at, reject_if_absent_on=None):
        student = self._db.students.get(student_id)
        if not student:
            return None
        if reject_if_absent_on is not None:
            marks = [a for a in self._db.attendance if a.student_id == student_id and a.date == reject_if_absent_on]
            latest = max(marks, key=lambda a: (a.recorded_at, a.attendance_id), default=None)
            if latest and latest.status.is_absence:
                raise RejectedError(f"Student {student_id} is marked absent")
        record = BehaviourRecord(
            behaviour_id=self._db.next_id(),
            student_id=student_id,
            type=type,
            category=category,
            points=points,
            date=recorded_at,
            notes=notes,
        )
        total = student.behaviour_points + points
        self._db.behaviour.append(record)
        self._db.students[student_id] = replace(student, behaviour_points=total)
        return record, total

    def list_for_student(self, student_id: int):
        rows = [b for b in self._db.behaviour if b.student_id == student_id]
        return sorted(rows, key=lambda b: (b.date, b.behaviour_id), reverse=True)

    def sum_points_since(self, since: datetime) -> int:
        return sum(b.points for b in self._db.behaviour if b.date >= since)


class InMemoryDetentions:
    def __init__(self, db: InMemorySchool):
        self._db = db

    def get_by_id(self, detention_id: int):
        return self._db.detentions.get(detention_id)

    def list_all(self):
        return sorted(self._db.detentions.values(), key=lambda d: (d.date, d.detention_id), reverse=True)

    def list_for_student(self, student_id: int):
        return [d for d in self.list_all() if d.student_id == student_id]

    def create(self, *, student_id, type, date, time, location, status, reason=None) -> int:
        detention_id = self._db.next_id()
        self._db.detentions[detention_id] = Detention(
            detention_id=detention_id,
            student_id=student_id,
            type=type,
            date=date,
            time=time,
            location=location,
            status=status,
            reason=reason,
        )
        return detention_id

    def update(self, detention_id: int, changes) -> bool:
        current = self._db.detentions.get(detention_id)
        if not current:
            return False
        self._db.detentions[detention_id] = replace(current, **changes)
        return True

    def count_between(self, start: date, end: date) -> int:
        return sum(1 for d in self._db.detentions.values() if start <= d.date <= end)


class InMemoryUsers:
    def __init__(self, db: InMemorySchool):
        self._db = db

    def get_by_id(self, user_id: int):
        return self._db.users.get(user_id)

    def get_by_username(self, username: str):
        return next((u for u in self._db.users.values() if u.username == username), None)

    def list_all(self):
        return sorted(self._db.users.values(), key=lambda u: u.user_id)

    def create_user(self, *, username, password_hash, name, role) -> int:
        user_id = self._db.next_id()
        self._db.users[user_id] = User(user_id=user_id, username=username, password_hash=password_hash, name=name, role=role)
        return user_id

    def delete_by_id(self, user_id: int) -> bool:
        return self._db.users.pop(user_id, None) is not None


class InMemoryTutorGroups:
    def __init__(self, db: InMemorySchool):
        self._db = db

    def get_by_name(self, name: str):
        return next((g for g in self._db.tutor_groups.values() if g.name == name), None)

    def list_all(self):
        return sorted(self._db.tutor_groups.values(), key=lambda g: (g.year_group, g.name))

    def create(self, *, name: str, year_group: int) -> int:
        tutor_group_id = self._db.next_id()
        self._db.tutor_groups[tutor_group_id] = TutorGroup(tutor_group_id=tutor_group_id, name=name, year_group=year_group)
        return tutor_group_id


class InMemoryTimetables:
    def __init__(self, db: InMemorySchool):
        self._db = db

    def list_all(self, *, tutor_group=None):
        rows = [t for t in self._db.timetables.values() if tutor_group is None or t.tutor_group == tutor_group]
        return sorted(rows, key=lambda t: (t.tutor_group, t.day_of_week, t.period))

    def create(self, *, tutor_group, day_of_week, period, subject, room, teacher_id) -> int:
        timetable_id = self._db.next_id()
        self._db.timetables[timetable_id] = Timetable(
            timetable_id=timetable_id,
            tutor_group=tutor_group,
            day_of_week=day_of_week,
            period=period,
            subject=subject,
            room=room,
            teacher_id=teacher_id,
        )
        return timetable_id

    def delete(self, timetable_id: int) -> bool:
        return self._db.timetables.pop(timetable_id, None) is not None


@pytest.fixture
def fixed_now() -> datetime:
    # A Wednesday, mid-morning.
    return datetime(2026, 2, 4, 9, 30, 0)


@pytest.fixture
def db() -> InMemorySchool:
    return InMemorySchool()


@pytest.fixture
def students_repo(db):
    return InMemoryStudents(db)


@pytest.fixture
def attendance_repo(db):
    return InMemoryAttendance(db)


@pytest.fixture
def behaviour_repo(db):
    return InMemoryBehaviour(db)


@pytest.fixture
def detentions_repo(db):
    return InMemoryDetentions(db)


@pytest.fixture
def users_repo(db):
    return InMemoryUsers(db)


@pytest.fixture
def student_service(students_repo):
    return StudentService(students_repo)


@pytest.fixture
def attendance_service(attendance_repo):
    return AttendanceService(attendance_repo)


@pytest.fixture
def behaviour_service(behaviour_repo, students_repo):
    return BehaviourService(behaviour_repo, students_repo)


@pytest.fixture
def detention_service(detentions_repo, students_repo):
    return DetentionService(detentions_repo, students_repo)


@pytest.fixture
def dashboard_service(students_repo, attendance_repo, behaviour_repo, detentions_repo):
    return DashboardService(students_repo, attendance_repo, behaviour_repo, detentions_repo)


@pytest.fixture
def user_service(users_repo):
    return UserService(users_repo)


@pytest.fixture
def auth_service(users_repo):
    return AuthService(users_repo)


@pytest.fixture
def tutor_group_service(db):
    return TutorGroupService(InMemoryTutorGroups(db))


@pytest.fixture
def timetable_service(db, users_repo):
    return TimetableService(InMemoryTimetables(db), users_repo)


@pytest.fixture
def enrol(student_service):
    """Factory creating a student with sensible defaults."""

    def _enrol(first_name="Amy", last_name="Pond", *, year_group=7, tutor_group="7A") -> Student:
        return student_service.create_student(
            first_name=first_name,
            last_name=last_name,
            date_of_birth=date(2014, 5, 1),
            year_group=year_group,
            tutor_group=tutor_group,
            admission_date=date(2025, 9, 3),
        )

    return _enrol
