from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Optional, Sequence

from ..common.datetime_utils import Clock
from ..common.validators import require_id
from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..core.enums import AttendanceStatus, PresenceLabel
from ..core.exceptions import ConflictError
from .model import AttendanceRecord, PresenceKind, PresenceState, StatusView, ToggleResult
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """Check-in / check-out toggling and the dashboard status card."""

    def __init__(self, attendance: AttendanceRepository, clock: Optional[Clock] = None):
        self._attendance = attendance
        self._clock = clock or Clock()

    def toggle(self, student_id: Any, *, now: Optional[datetime] = None) -> ToggleResult:
        """Check the student in if they are out (or absent), out if they are in.

        The student id is not looked up in the roster. If a concurrent request
        changes today's record between our read and our write, the read and
        branch is repeated once against what is stored now.
        """

        student_id = require_id(student_id, "Student ID")
        now = now or self._clock.now()

        try:
            return self._toggle_once(student_id, now)
        except ConflictError:
            logger.info("Concurrent toggle for student %s; re-reading today's record", student_id)
            return self._toggle_once(student_id, now)

    def _toggle_once(self, student_id: int, now: datetime) -> ToggleResult:
        today = now.date()
        record = self._attendance.get_for_student_and_date(student_id, today)
        state = PresenceState.of(record)

        if state.kind == PresenceKind.NO_RECORD:
            self._attendance.create(
                student_id=student_id,
                attendance_date=today,
                status=AttendanceStatus.PRESENT,
                check_in_time=now,
            )
            return ToggleResult(PresenceLabel.CHECKED_IN, now)

        if state.kind == PresenceKind.CHECKED_IN:
            if not self._attendance.check_out(attendance_id=record.attendance_id, check_out_time=now):
                raise ConflictError(f"Attendance record {record.attendance_id} changed while checking out")
            return ToggleResult(PresenceLabel.CHECKED_OUT, now)

        if state.kind in (PresenceKind.CHECKED_OUT, PresenceKind.MARKED_ABSENT):
            self._check_back_in(record, now)
            return ToggleResult(PresenceLabel.CHECKED_IN, now)

        raise AssertionError(f"Unhandled presence state: {state.kind}")

    def _check_back_in(self, record: AttendanceRecord, now: datetime) -> None:
        if not self._attendance.check_back_in(record=record, check_in_time=now):
            raise ConflictError(f"Attendance record {record.attendance_id} changed while checking in")
        if record.status != AttendanceStatus.PRESENT:
            logger.info(
                "Student %s checked in on %s; status %s overridden to Present",
                record.student_id,
                record.attendance_date,
                record.status.value,
            )

    def get_status(self, student_id: Any, *, now: Optional[datetime] = None) -> StatusView:
        student_id = require_id(student_id, "Student ID")
        now = now or self._clock.now()

        record = self._attendance.get_for_student_and_date(student_id, now.date())
        state = PresenceState.of(record)

        if state.kind == PresenceKind.NO_RECORD:
            return StatusView(PresenceLabel.CHECKED_OUT, None)
        if state.kind == PresenceKind.CHECKED_IN:
            return StatusView(PresenceLabel.CHECKED_IN, state.since, record.status)
        # CHECKED_OUT or MARKED_ABSENT. For a sweeper Absent record the time is None,
        # which reads the same as "no record"; record_status tells them apart.
        return StatusView(PresenceLabel.CHECKED_OUT, record.check_out_time, record.status)

    def get_history(self, student_id: Any, *, limit: int = DEFAULT_HISTORY_LIMIT) -> Sequence[AttendanceRecord]:
        student_id = require_id(student_id, "Student ID")
        return self._attendance.get_recent_for_student(student_id, int(limit))
