from __future__ import annotations

from typing import Optional, Sequence

from ..core.constants import DEFAULT_DB_READ_RETRIES
from ..core.enums import FeeStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause, with_read_retry
from .model import NewStudent, Student
from .repository import StudentRepository

_COLUMNS = """
    student_id, name, email, phone, course, department, year, joining_date,
    fee_status, payment_method, room_id, username, password_hash
"""


def _to_student(r: dict) -> Student:
    return Student(
        student_id=int(r["student_id"]),
        name=r["name"],
        room_id=int(r["room_id"]),
        username=r["username"],
        password_hash=r["password_hash"],
        joining_date=r["joining_date"],
        fee_status=FeeStatus(r["fee_status"]),
        email=r.get("email"),
        phone=r.get("phone"),
        course=r.get("course"),
        department=r.get("department"),
        year=r.get("year"),
        payment_method=r.get("payment_method"),
    )


class MySQLStudentRepository(StudentRepository):
    def __init__(self, conn_factory: DatabaseConnection, *, read_retries: int = DEFAULT_DB_READ_RETRIES):
        self._conn_factory = conn_factory
        self._read_retries = read_retries

    def _read(self, sql: str, params: tuple = ()) -> list[dict]:
        def read():
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(sql, params)
                return fetchall(cur)

        return with_read_retry(read, attempts=self._read_retries)

    def list_all_ids(self) -> Sequence[int]:
        return [int(r["student_id"]) for r in self._read("SELECT student_id FROM students ORDER BY student_id")]

    def get_by_id(self, student_id: int) -> Optional[Student]:
        rows = self._read(f"SELECT {_COLUMNS} FROM students WHERE student_id=%s", (int(student_id),))
        return _to_student(rows[0]) if rows else None

    def get_by_username(self, username: str) -> Optional[Student]:
        rows = self._read(f"SELECT {_COLUMNS} FROM students WHERE username=%s", (username,))
        return _to_student(rows[0]) if rows else None

    def list_by_room_ids(self, room_ids: Sequence[int]) -> Sequence[Student]:
        if not room_ids:
            return []
        rows = self._read(
            f"SELECT {_COLUMNS} FROM students WHERE room_id IN ({in_clause(room_ids)}) ORDER BY student_id",
            tuple(int(r) for r in room_ids),
        )
        return [_to_student(r) for r in rows]

    def count_in_room(self, room_id: int) -> int:
        def read():
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute("SELECT COUNT(*) AS n FROM students WHERE room_id=%s", (int(room_id),))
                r = fetchone(cur)
                return int(r["n"]) if r else 0

        return with_read_retry(read, attempts=self._read_retries)

    def create(self, student: NewStudent) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO students(
                    name, email, phone, course, department, year, joining_date,
                    fee_status, payment_method, room_id, username, password_hash
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    student.name,
                    student.email,
                    student.phone,
                    student.course,
                    student.department,
                    student.year,
                    student.joining_date,
                    student.fee_status.value,
                    student.payment_method,
                    int(student.room_id),
                    student.username,
                    student.password_hash,
                ),
            )
            return int(cur.lastrowid)

    def delete(self, student_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM students WHERE student_id=%s", (int(student_id),))
            return cur.rowcount > 0
