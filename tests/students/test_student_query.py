from __future__ import annotations

from datetime import date

from src.school_admin.school_admin.students.model import Student, StudentQuery


def _student(**overrides) -> Student:
    data = dict(
        student_id=1,
        first_name="Amy",
        last_name="Pond",
        date_of_birth=date(2014, 5, 1),
        year_group=7,
        tutor_group="7A",
        admission_date=date(2025, 9, 3),
    )
    data.update(overrides)
    return Student(**data)


def test_build_drops_blank_filters():
    q = StudentQuery.build("  ", None, "")

    assert q.is_empty
    assert q.to_sql() == ([], [])


def test_to_sql_renders_each_filter_in_order():
    clauses, params = StudentQuery.build("Amy P", 7, "7A").to_sql()

    assert clauses == [
        "LOWER(CONCAT(first_name, ' ', last_name)) LIKE %s",
        "year_group=%s",
        "tutor_group=%s",
    ]
    assert params == ["%amy p%", 7, "7A"]


def test_to_sql_escapes_like_wildcards():
    _, params = StudentQuery.build("100%_done").to_sql()

    assert params == ["%100\\%\\_done%"]


def test_matches_applies_all_filters():
    s = _student()

    assert StudentQuery().matches(s)
    assert StudentQuery(text="y po").matches(s)
    assert not StudentQuery(text="y po", year_group=8).matches(s)
    assert not StudentQuery(tutor_group="7B").matches(s)


def test_year_group_zero_is_still_a_filter():
    q = StudentQuery.build(year_group=0)

    assert not q.is_empty
    assert not q.matches(_student())
