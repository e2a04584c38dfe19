from __future__ import annotations

from dataclasses import dataclass

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import AttendanceService
from .behaviour.mysql_behaviour_repository import MySQLBehaviourRepository
from .behaviour.service import BehaviourService
from .core.constants import DETENTION_POINTS_THRESHOLD, SESSIONS_PER_YEAR
from .dashboard.service import DashboardService
from .database.connection import DBConfig, DatabaseConnection
from .detentions.mysql_detention_repository import MySQLDetentionRepository
from .detentions.service import DetentionService
from .students.mysql_student_repository import MySQLStudentRepository
from .students.service import StudentService
from .timetables.mysql_timetable_repository import MySQLTimetableRepository
from .timetables.service import TimetableService
from .tutor_groups.mysql_tutor_group_repository import MySQLTutorGroupRepository
from .tutor_groups.service import TutorGroupService
from .users.mysql_user_repository import MySQLUserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    users_repo: MySQLUserRepository
    students_repo: MySQLStudentRepository
    tutor_groups_repo: MySQLTutorGroupRepository
    attendance_repo: MySQLAttendanceRepository
    behaviour_repo: MySQLBehaviourRepository
    detentions_repo: MySQLDetentionRepository
    timetables_repo: MySQLTimetableRepository

    auth_service: AuthService
    user_service: UserService
    student_service: StudentService
    tutor_group_service: TutorGroupService
    attendance_service: AttendanceService
    behaviour_service: BehaviourService
    detention_service: DetentionService
    timetable_service: TimetableService
    dashboard_service: DashboardService


def build_container(
    *,
    db_config: dict,
    detention_threshold: int = DETENTION_POINTS_THRESHOLD,
    sessions_per_year: int = SESSIONS_PER_YEAR,
) -> Container:
    config = DBConfig(
        host=str(db_config["host"]),
        port=int(db_config.get("port", 3306)),
        user=str(db_config["user"]),
        password=str(db_config["password"]),
        database=str(db_config["database"]),
    )
    conn = DatabaseConnection(config)

    users_repo = MySQLUserRepository(conn)
    students_repo = MySQLStudentRepository(conn)
    tutor_groups_repo = MySQLTutorGroupRepository(conn)
    attendance_repo = MySQLAttendanceRepository(conn)
    behaviour_repo = MySQLBehaviourRepository(conn)
    detentions_repo = MySQLDetentionRepository(conn)
    timetables_repo = MySQLTimetableRepository(conn)

    return Container(
        conn=conn,
        users_repo=users_repo,
        students_repo=students_repo,
        tutor_groups_repo=tutor_groups_repo,
        attendance_repo=attendance_repo,
        behaviour_repo=behaviour_repo,
        detentions_repo=detentions_repo,
        timetables_repo=timetables_repo,
        auth_service=AuthService(users_repo),
        user_service=UserService(users_repo),
        student_service=StudentService(students_repo),
        tutor_group_service=TutorGroupService(tutor_groups_repo),
        attendance_service=AttendanceService(attendance_repo),
        behaviour_service=BehaviourService(
            behaviour_repo,
            students_repo,
            detention_threshold=detention_threshold,
        ),
        detention_service=DetentionService(detentions_repo, students_repo),
        timetable_service=TimetableService(timetables_repo, users_repo),
        dashboard_service=DashboardService(
            students_repo,
            attendance_repo,
            behaviour_repo,
            detentions_repo,
            sessions_per_year=sessions_per_year,
        ),
    )
