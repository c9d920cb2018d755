from __future__ import annotations

from datetime import date

from ..database.connection import DatabaseConnection
from ..database.mysql_base import DB_FLG_FALSE, db_cursor, fetchone
from .repository import CourseCalendarRepository


class MySQLCourseCalendarRepository(CourseCalendarRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def is_work_day(self, course_id: int, training_date: date) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT COUNT(*) AS cnt
                FROM course_training_days
                WHERE course_id=%s AND training_date=%s AND delete_flg=%s
                """,
                (int(course_id), training_date, DB_FLG_FALSE),
            )
            r = fetchone(cur)
            return bool(r and int(r["cnt"]) > 0)
