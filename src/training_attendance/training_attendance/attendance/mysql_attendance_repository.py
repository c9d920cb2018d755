from __future__ import annotations

from datetime import date
from typing import Any, Dict, Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import DB_FLG_FALSE, db_cursor, fetchall, fetchone, to_db_flag
from .model import AttendanceManagementRow, DailyAttendanceRecord
from .repository import AttendanceRepository

_RECORD_COLUMNS = """
    attendance_id, student_id, training_date, training_start_time, training_end_time,
    blank_time, status, note, account_id, delete_flg,
    created_by, created_at, updated_by, updated_at
"""


def _to_record(r: Dict[str, Any]) -> DailyAttendanceRecord:
    return DailyAttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        student_id=int(r["student_id"]),
        training_date=r["training_date"],
        training_start_time=r.get("training_start_time") or "",
        training_end_time=r.get("training_end_time") or "",
        blank_time=r.get("blank_time"),
        status=AttendanceStatus.from_code(r["status"]),
        note=r.get("note") or "",
        account_id=r.get("account_id"),
        is_deleted=bool(r.get("delete_flg")),
        created_by=r.get("created_by"),
        created_at=r.get("created_at"),
        updated_by=r.get("updated_by"),
        updated_at=r.get("updated_at"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_student_and_date(self, student_id: int, training_date: date) -> Optional[DailyAttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_RECORD_COLUMNS}
                FROM student_attendance
                WHERE student_id=%s AND training_date=%s AND delete_flg=%s
                """,
                (int(student_id), training_date, DB_FLG_FALSE),
            )
            r = fetchone(cur)
            if not r:
                return None
            return _to_record(r)

    def list_active_for_student(self, student_id: int) -> Sequence[DailyAttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_RECORD_COLUMNS}
                FROM student_attendance
                WHERE student_id=%s AND delete_flg=%s
                ORDER BY training_date
                """,
                (int(student_id), DB_FLG_FALSE),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def count_unfilled_past(self, student_id: int, before_date: date) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT COUNT(*) AS cnt
                FROM student_attendance
                WHERE student_id=%s AND delete_flg=%s AND training_date < %s
                  AND (training_start_time = '' OR training_end_time = '')
                """,
                (int(student_id), DB_FLG_FALSE, before_date),
            )
            r = fetchone(cur)
            return int(r["cnt"]) if r else 0

    def get_attendance_management(
        self,
        *,
        course_id: int,
        student_id: int,
        today: date,
    ) -> Sequence[AttendanceManagementRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT
                    d.training_date, d.section_name,
                    a.attendance_id, a.training_start_time, a.training_end_time,
                    a.blank_time, a.status, a.note
                FROM course_training_days d
                LEFT JOIN student_attendance a
                    ON a.student_id=%s AND a.training_date=d.training_date AND a.delete_flg=%s
                WHERE d.course_id=%s AND d.delete_flg=%s
                ORDER BY d.training_date
                """,
                (int(student_id), DB_FLG_FALSE, int(course_id), DB_FLG_FALSE),
            )
            rows = fetchall(cur)
            return [
                AttendanceManagementRow(
                    training_date=r["training_date"],
                    section_name=r.get("section_name") or "",
                    is_today=r["training_date"] == today,
                    attendance_id=r.get("attendance_id"),
                    training_start_time=r.get("training_start_time") or "",
                    training_end_time=r.get("training_end_time") or "",
                    blank_time=r.get("blank_time"),
                    status=AttendanceStatus.from_code(r["status"]) if r.get("status") is not None else AttendanceStatus.NORMAL,
                    note=r.get("note") or "",
                )
                for r in rows
            ]

    def insert(self, record: DailyAttendanceRecord) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO student_attendance(
                    student_id, training_date, training_start_time, training_end_time,
                    blank_time, status, note, account_id, delete_flg,
                    created_by, created_at, updated_by, updated_at
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    record.student_id,
                    record.training_date,
                    record.training_start_time,
                    record.training_end_time,
                    record.blank_time,
                    record.status.code,
                    record.note,
                    record.account_id,
                    to_db_flag(record.is_deleted),
                    record.created_by,
                    record.created_at,
                    record.updated_by,
                    record.updated_at,
                ),
            )
            return int(cur.lastrowid)

    def update(self, record: DailyAttendanceRecord) -> bool:
        if record.attendance_id is None:
            raise ValueError("cannot update a record that has not been inserted")
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE student_attendance
                SET student_id=%s, training_start_time=%s, training_end_time=%s, blank_time=%s,
                    status=%s, note=%s, account_id=%s, delete_flg=%s, updated_by=%s, updated_at=%s
                WHERE attendance_id=%s
                """,
                (
                    record.student_id,
                    record.training_start_time,
                    record.training_end_time,
                    record.blank_time,
                    record.status.code,
                    record.note,
                    record.account_id,
                    to_db_flag(record.is_deleted),
                    record.updated_by,
                    record.updated_at,
                    int(record.attendance_id),
                ),
            )
            return cur.rowcount > 0
