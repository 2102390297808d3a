from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    """Daily attendance store.

    Implementations must enforce one record per (student_id, attendance_date).
    """

    def get_for_student_and_date(self, student_id: int, attendance_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_recent_for_student(self, student_id: int, limit: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def create(
        self,
        *,
        student_id: int,
        attendance_date: date,
        status: AttendanceStatus,
        check_in_time: Optional[datetime] = None,
    ) -> int:
        """Insert a new record. Raises ConflictError if one already exists for the day."""

        raise NotImplementedError

    def create_if_absent(self, *, student_id: int, attendance_date: date, status: AttendanceStatus) -> bool:
        """Atomically insert a time-less record unless one exists. Returns True if inserted."""

        raise NotImplementedError

    def check_out(self, *, attendance_id: int, check_out_time: datetime) -> bool:
        """Set the check-out time on a record that is still checked in.

        Returns False when the record is no longer checked in, i.e. another
        request got there first.
        """

        raise NotImplementedError

    def check_back_in(self, *, record: AttendanceRecord, check_in_time: datetime) -> bool:
        """Mark `record` Present with a fresh check-in and no check-out.

        When the stored status was not Present, the override is written to the
        status-change audit in the same transaction. Returns False (and changes
        nothing) when the stored row no longer matches `record`.
        """

        raise NotImplementedError
