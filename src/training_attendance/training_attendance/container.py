from __future__ import annotations

from dataclasses import dataclass

from .attendance.classifier import AttendanceStatusClassifier, TrainingHours
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import AttendanceService
from .common.messages import MessageCatalog
from .core.constants import DEFAULT_TRAINING_END_TIME, DEFAULT_TRAINING_START_TIME
from .courses.mysql_calendar_repository import MySQLCourseCalendarRepository
from .database.connection import DBConfig, DatabaseConnection


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection | None

    attendance_repo: MySQLAttendanceRepository
    calendar_repo: MySQLCourseCalendarRepository

    messages: MessageCatalog
    attendance_service: AttendanceService


def build_container(
    *,
    db_config: dict,
    training_start_time: str = DEFAULT_TRAINING_START_TIME,
    training_end_time: str = DEFAULT_TRAINING_END_TIME,
    locale: str = "en",
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    attendance_repo = MySQLAttendanceRepository(conn)
    calendar_repo = MySQLCourseCalendarRepository(conn)

    messages = MessageCatalog(locale)
    classifier = AttendanceStatusClassifier(TrainingHours.from_config(training_start_time, training_end_time))
    attendance_service = AttendanceService(attendance_repo, calendar_repo, messages, classifier)

    return Container(
        conn=conn,
        attendance_repo=attendance_repo,
        calendar_repo=calendar_repo,
        messages=messages,
        attendance_service=attendance_service,
    )
