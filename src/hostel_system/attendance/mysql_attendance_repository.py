from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..core.constants import DEFAULT_DB_READ_RETRIES
from ..core.enums import AttendanceStatus
from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, with_read_retry
from .model import AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = "attendance_id, student_id, attendance_date, status, check_in_time, check_out_time"


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        student_id=int(r["student_id"]),
        attendance_date=r["attendance_date"],
        status=AttendanceStatus(r["status"]),
        check_in_time=r.get("check_in_time"),
        check_out_time=r.get("check_out_time"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection, *, read_retries: int = DEFAULT_DB_READ_RETRIES):
        self._conn_factory = conn_factory
        self._read_retries = read_retries

    def get_for_student_and_date(self, student_id: int, attendance_date: date) -> Optional[AttendanceRecord]:
        def read():
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    f"SELECT {_COLUMNS} FROM attendance_records WHERE student_id=%s AND attendance_date=%s",
                    (int(student_id), attendance_date),
                )
                r = fetchone(cur)
                return _to_record(r) if r else None

        return with_read_retry(read, attempts=self._read_retries)

    def get_recent_for_student(self, student_id: int, limit: int) -> Sequence[AttendanceRecord]:
        def read():
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    f"""
                    SELECT {_COLUMNS}
                    FROM attendance_records
                    WHERE student_id=%s
                    ORDER BY attendance_date DESC
                    LIMIT %s
                    """,
                    (int(student_id), int(limit)),
                )
                return [_to_record(r) for r in fetchall(cur)]

        return with_read_retry(read, attempts=self._read_retries)

    def create(
        self,
        *,
        student_id: int,
        attendance_date: date,
        status: AttendanceStatus,
        check_in_time: Optional[datetime] = None,
    ) -> int:
        # A duplicate (student_id, attendance_date) surfaces as ConflictError from db_cursor.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_records(student_id, attendance_date, status, check_in_time)
                VALUES(%s,%s,%s,%s)
                """,
                (int(student_id), attendance_date, status.value, check_in_time),
            )
            return int(cur.lastrowid)

    def create_if_absent(self, *, student_id: int, attendance_date: date, status: AttendanceStatus) -> bool:
        # The unique key makes the insert itself the existence check.
        try:
            self.create(student_id=student_id, attendance_date=attendance_date, status=status)
        except ConflictError:
            return False
        return True

    def check_out(self, *, attendance_id: int, check_out_time: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET check_out_time=%s
                WHERE attendance_id=%s AND check_in_time IS NOT NULL AND check_out_time IS NULL
                """,
                (check_out_time, int(attendance_id)),
            )
            return cur.rowcount > 0

    def check_back_in(self, *, record: AttendanceRecord, check_in_time: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            # Guarded on the values we read; `<=>` matches NULLs.
            cur.execute(
                """
                UPDATE attendance_records
                SET status=%s, check_in_time=%s, check_out_time=NULL
                WHERE attendance_id=%s AND status=%s
                  AND check_in_time <=> %s AND check_out_time <=> %s
                """,
                (
                    AttendanceStatus.PRESENT.value,
                    check_in_time,
                    int(record.attendance_id),
                    record.status.value,
                    record.check_in_time,
                    record.check_out_time,
                ),
            )
            if cur.rowcount == 0:
                return False

            if record.status != AttendanceStatus.PRESENT:
                cur.execute(
                    """
                    INSERT INTO attendance_status_changes(attendance_id, previous_status, new_status, changed_at)
                    VALUES(%s,%s,%s,%s)
                    """,
                    (int(record.attendance_id), record.status.value, AttendanceStatus.PRESENT.value, check_in_time),
                )
            return True
