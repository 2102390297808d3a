from __future__ import annotations

from datetime import date, datetime

import pytest
from mysql.connector import errors as mysql_errors

from hostel_system.attendance.model import AttendanceRecord
from hostel_system.attendance.mysql_attendance_repository import MySQLAttendanceRepository
from hostel_system.core.enums import AttendanceStatus
from hostel_system.core.exceptions import ConflictError, StorageUnavailableError

DAY = date(2025, 10, 20)
NOW = datetime(2025, 10, 20, 9, 30, 0, 123456)


def _duplicate():
    return mysql_errors.IntegrityError(msg="Duplicate entry '5-2025-10-20' for key 'uq_attendance_student_date'", errno=1062)


class ScriptedCursor:
    """Each execute() consumes the next scripted outcome: an exception or a result dict."""

    def __init__(self, db):
        self._db = db
        self.rowcount = -1
        self.lastrowid = None
        self._rows = []

    def execute(self, sql, params=()):
        self._db.executed.append((" ".join(sql.split()), params))
        outcome = self._db.script.pop(0) if self._db.script else {}
        if isinstance(outcome, Exception):
            raise outcome
        self._rows = list(outcome.get("rows", []))
        self.rowcount = outcome.get("rowcount", len(self._rows))
        self.lastrowid = outcome.get("lastrowid")

    def fetchone(self):
        return self._rows[0] if self._rows else None

    def fetchall(self):
        return self._rows

    def close(self):
        pass


class ScriptedConnection:
    def __init__(self, db):
        self._db = db

    def cursor(self, dictionary=True):
        return ScriptedCursor(self._db)

    def commit(self):
        self._db.commits += 1

    def rollback(self):
        self._db.rollbacks += 1

    def close(self):
        pass


class ScriptedDatabase:
    def __init__(self, *script):
        self.script = list(script)
        self.executed = []
        self.commits = 0
        self.rollbacks = 0

    def connect(self):
        return ScriptedConnection(self)


def _repo(db, **kwargs):
    return MySQLAttendanceRepository(db, **kwargs)


def test_row_maps_to_record():
    row = {
        "attendance_id": 3,
        "student_id": 5,
        "attendance_date": DAY,
        "status": "Absent",
        "check_in_time": None,
        "check_out_time": None,
    }
    db = ScriptedDatabase({"rows": [row]})

    record = _repo(db).get_for_student_and_date(5, DAY)

    assert record == AttendanceRecord(3, 5, DAY, AttendanceStatus.ABSENT)
    assert db.executed[0][1] == (5, DAY)


def test_missing_row_is_none():
    assert _repo(ScriptedDatabase({"rows": []})).get_for_student_and_date(5, DAY) is None


def test_read_is_retried_when_storage_drops():
    db = ScriptedDatabase(mysql_errors.OperationalError(msg="Lost connection", errno=2013), {"rows": []})
    repo = _repo(db, read_retries=2)

    assert repo.get_for_student_and_date(5, DAY) is None
    assert len(db.executed) == 2


def test_create_returns_new_id():
    db = ScriptedDatabase({"lastrowid": 11, "rowcount": 1})

    new_id = _repo(db).create(
        student_id=5, attendance_date=DAY, status=AttendanceStatus.PRESENT, check_in_time=NOW
    )

    assert new_id == 11
    assert db.executed[0][1] == (5, DAY, "Present", NOW)
    assert db.commits == 1


def test_create_duplicate_raises_conflict():
    db = ScriptedDatabase(_duplicate())

    with pytest.raises(ConflictError):
        _repo(db).create(student_id=5, attendance_date=DAY, status=AttendanceStatus.PRESENT, check_in_time=NOW)
    assert db.rollbacks == 1
    assert db.commits == 0


def test_create_if_absent_inserts_timeless_record():
    db = ScriptedDatabase({"lastrowid": 12, "rowcount": 1})

    assert _repo(db).create_if_absent(student_id=5, attendance_date=DAY, status=AttendanceStatus.ABSENT) is True
    assert db.executed[0][1] == (5, DAY, "Absent", None)


def test_create_if_absent_returns_false_on_duplicate():
    db = ScriptedDatabase(_duplicate())
    assert _repo(db).create_if_absent(student_id=5, attendance_date=DAY, status=AttendanceStatus.ABSENT) is False


def test_create_if_absent_propagates_other_failures():
    db = ScriptedDatabase(mysql_errors.InterfaceError(msg="Can't connect", errno=2003))
    with pytest.raises(StorageUnavailableError):
        _repo(db).create_if_absent(student_id=5, attendance_date=DAY, status=AttendanceStatus.ABSENT)


def test_check_out_only_touches_open_records():
    db = ScriptedDatabase({"rowcount": 1}, {"rowcount": 0})
    repo = _repo(db)

    assert repo.check_out(attendance_id=3, check_out_time=NOW) is True
    assert repo.check_out(attendance_id=3, check_out_time=NOW) is False
    sql, params = db.executed[0]
    assert "check_out_time IS NULL" in sql
    assert params == (NOW, 3)


def test_check_back_in_over_absent_writes_audit_in_same_transaction():
    record = AttendanceRecord(3, 5, DAY, AttendanceStatus.ABSENT)
    db = ScriptedDatabase({"rowcount": 1}, {"rowcount": 1})

    assert _repo(db).check_back_in(record=record, check_in_time=NOW) is True

    (update_sql, update_params), (audit_sql, audit_params) = db.executed
    assert update_sql.startswith("UPDATE attendance_records")
    assert update_params == ("Present", NOW, 3, "Absent", None, None)
    assert audit_sql.startswith("INSERT INTO attendance_status_changes")
    assert audit_params == (3, "Absent", "Present", NOW)
    assert db.commits == 1


def test_check_back_in_rolls_back_when_audit_insert_fails():
    record = AttendanceRecord(3, 5, DAY, AttendanceStatus.ABSENT)
    db = ScriptedDatabase({"rowcount": 1}, mysql_errors.OperationalError(msg="Lost connection", errno=2013))

    with pytest.raises(StorageUnavailableError):
        _repo(db).check_back_in(record=record, check_in_time=NOW)

    assert db.commits == 0
    assert db.rollbacks == 1


def test_check_back_in_after_check_out_skips_audit():
    record = AttendanceRecord(
        3, 5, DAY, AttendanceStatus.PRESENT, check_in_time=datetime(2025, 10, 20, 8, 0), check_out_time=NOW
    )
    db = ScriptedDatabase({"rowcount": 1})

    assert _repo(db).check_back_in(record=record, check_in_time=NOW) is True
    assert len(db.executed) == 1


def test_check_back_in_on_changed_row_writes_nothing():
    record = AttendanceRecord(3, 5, DAY, AttendanceStatus.ABSENT)
    db = ScriptedDatabase({"rowcount": 0})

    assert _repo(db).check_back_in(record=record, check_in_time=NOW) is False
    assert len(db.executed) == 1
