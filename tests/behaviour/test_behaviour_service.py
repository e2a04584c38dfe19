from __future__ import annotations

from datetime import timedelta
from itertools import permutations

import pytest

from src.school_admin.school_admin.behaviour.service import BehaviourService
from src.school_admin.school_admin.core.enums import BehaviourType
from src.school_admin.school_admin.core.exceptions import NotFoundError, RejectedError, ValidationError
from src.school_admin.school_admin.core.signals import detention_threshold_reached


def test_points_accumulate_on_student(enrol, behaviour_service, student_service, fixed_now):
    s = enrol()

    first = behaviour_service.create_behaviour(s.student_id, "POSITIVE", "ACHIEVEMENT", 3, now=fixed_now)
    second = behaviour_service.create_behaviour(s.student_id, "NEGATIVE", "HOMEWORK", -1, "  ", now=fixed_now)

    assert first.behaviour_points == 3
    assert second.behaviour_points == 2
    assert second.record.notes is None
    assert student_service.get_student(s.student_id).behaviour_points == 2


@pytest.mark.parametrize("order", list(permutations([5, -3, -4, 2])))
def test_total_change_is_independent_of_order(enrol, behaviour_service, student_service, fixed_now, order):
    s = enrol()

    for points in order:
        kind = BehaviourType.POSITIVE if points > 0 else BehaviourType.NEGATIVE
        behaviour_service.create_behaviour(s.student_id, kind, "MIXED", points, now=fixed_now)

    assert student_service.get_student(s.student_id).behaviour_points == 0


@pytest.mark.parametrize("status", ["ABSENT", "AUTH_ABSENT", "UNAUTH_ABSENT"])
def test_positive_award_rejected_when_absent_today(
    enrol, attendance_service, behaviour_service, student_service, fixed_now, status
):
    s = enrol()
    attendance_service.record_attendance(s.student_id, fixed_now.date(), "AM", status, now=fixed_now)

    with pytest.raises(RejectedError):
        behaviour_service.create_behaviour(s.student_id, "POSITIVE", "ACHIEVEMENT", 2, now=fixed_now)

    assert behaviour_service.get_student_behaviour(s.student_id) == []
    assert student_service.get_student(s.student_id).behaviour_points == 0


def test_guard_uses_latest_mark_of_the_day(enrol, attendance_service, behaviour_service, fixed_now):
    s = enrol()
    morning = fixed_now.replace(hour=8, minute=50)
    attendance_service.record_attendance(s.student_id, fixed_now.date(), "AM", "ABSENT", now=morning)
    attendance_service.record_attendance(s.student_id, fixed_now.date(), "PM", "LATE", now=fixed_now)

    outcome = behaviour_service.create_behaviour(s.student_id, "POSITIVE", "EXCELLENT_WORK", 1, now=fixed_now)

    assert outcome.behaviour_points == 1


def test_guard_ignores_absence_on_other_days(enrol, attendance_service, behaviour_service, fixed_now):
    s = enrol()
    yesterday = fixed_now - timedelta(days=1)
    attendance_service.record_attendance(s.student_id, yesterday.date(), "AM", "ABSENT", now=yesterday)

    outcome = behaviour_service.create_behaviour(s.student_id, "POSITIVE", "ACHIEVEMENT", 1, now=fixed_now)

    assert outcome.behaviour_points == 1


def test_negative_points_allowed_while_absent(enrol, attendance_service, behaviour_service, fixed_now):
    s = enrol()
    attendance_service.record_attendance(s.student_id, fixed_now.date(), "AM", "UNAUTH_ABSENT", now=fixed_now)

    outcome = behaviour_service.create_behaviour(s.student_id, "NEGATIVE", "WARNING", -1, now=fixed_now)

    assert outcome.behaviour_points == -1


def test_threshold_signal_raised_at_minus_ten(enrol, behaviour_service, student_service, fixed_now):
    s = enrol()
    received = []

    def receiver(sender, **kwargs):
        received.append((sender, kwargs))

    with detention_threshold_reached.connected_to(receiver):
        outcome = behaviour_service.create_behaviour(s.student_id, "NEGATIVE", "DISRUPTION", -10, now=fixed_now)

    assert outcome.detention_threshold_reached is True
    assert student_service.get_student(s.student_id).behaviour_points == -10
    assert received == [
        (
            behaviour_service,
            {"student_id": s.student_id, "behaviour_points": -10, "behaviour_id": outcome.record.behaviour_id},
        )
    ]


def test_threshold_not_reached_above_limit(enrol, behaviour_service, fixed_now):
    s = enrol()
    received = []

    def receiver(sender, **kwargs):
        received.append(kwargs)

    with detention_threshold_reached.connected_to(receiver):
        outcome = behaviour_service.create_behaviour(s.student_id, "NEGATIVE", "DISRUPTION", -9, now=fixed_now)

    assert outcome.detention_threshold_reached is False
    assert received == []


def test_custom_threshold(enrol, behaviour_repo, students_repo, fixed_now):
    s = enrol()
    svc = BehaviourService(behaviour_repo, students_repo, detention_threshold=-3)

    outcome = svc.create_behaviour(s.student_id, "NEGATIVE", "WARNING", -3, now=fixed_now)

    assert outcome.detention_threshold_reached is True


def test_missing_student_and_bad_input(behaviour_service, fixed_now):
    with pytest.raises(NotFoundError):
        behaviour_service.create_behaviour(404, "NEGATIVE", "WARNING", -1, now=fixed_now)
    with pytest.raises(ValidationError):
        behaviour_service.create_behaviour(404, "NEUTRAL", "WARNING", -1, now=fixed_now)
    with pytest.raises(ValidationError):
        behaviour_service.create_behaviour(404, "NEGATIVE", " ", -1, now=fixed_now)


def test_group_award_skips_absent_students(enrol, attendance_service, behaviour_service, student_service, fixed_now):
    amy = enrol("Amy", "Pond", tutor_group="7A")
    rory = enrol("Rory", "Williams", tutor_group="7A")
    clara = enrol("Clara", "Oswald", tutor_group="7B")
    attendance_service.record_attendance(rory.student_id, fixed_now.date(), "AM", "ABSENT", now=fixed_now)

    created = behaviour_service.award_tutor_group("7A", "POSITIVE", "ACHIEVEMENT", 2, now=fixed_now)

    assert created == 1
    assert student_service.get_student(amy.student_id).behaviour_points == 2
    assert student_service.get_student(rory.student_id).behaviour_points == 0
    assert student_service.get_student(clara.student_id).behaviour_points == 0


def test_group_award_on_empty_group(behaviour_service, fixed_now):
    assert behaviour_service.award_tutor_group("11Z", "NEGATIVE", "WARNING", -1, now=fixed_now) == 0


class MarkedAbsentOnWrite:
    """Behaviour repository that records an absence just as the award reaches the store."""

    def __init__(self, inner, attendance_service, now):
        self._inner = inner
        self._attendance_service = attendance_service
        self._now = now

    def insert_and_add_points(self, **kwargs):
        self._attendance_service.record_attendance(
            kwargs["student_id"], self._now.date(), "PM", "UNAUTH_ABSENT", now=self._now
        )
        return self._inner.insert_and_add_points(**kwargs)

    def __getattr__(self, name):
        return getattr(self._inner, name)


def test_absence_recorded_during_award_is_honoured(
    enrol, behaviour_repo, students_repo, attendance_service, student_service, fixed_now
):
    s = enrol()
    attendance_service.record_attendance(s.student_id, fixed_now.date(), "AM", "PRESENT", now=fixed_now)
    svc = BehaviourService(MarkedAbsentOnWrite(behaviour_repo, attendance_service, fixed_now), students_repo)

    with pytest.raises(RejectedError):
        svc.create_behaviour(s.student_id, "POSITIVE", "ACHIEVEMENT", 5, now=fixed_now)

    assert behaviour_repo.list_for_student(s.student_id) == []
    assert student_service.get_student(s.student_id).behaviour_points == 0
