from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Optional

from ..core.enums import AttendanceStatus, PresenceLabel


@dataclass(frozen=True)
class AttendanceRecord:
    """One row per (student, calendar day)."""

    attendance_id: int
    student_id: int
    attendance_date: date
    status: AttendanceStatus
    check_in_time: Optional[datetime] = None
    check_out_time: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.attendance_id,
            "student": self.student_id,
            "date": self.attendance_date.isoformat(),
            "status": self.status.value,
            "checkInTime": self.check_in_time.isoformat() if self.check_in_time else None,
            "checkOutTime": self.check_out_time.isoformat() if self.check_out_time else None,
        }


class PresenceKind(str, Enum):
    NO_RECORD = "NO_RECORD"
    CHECKED_IN = "CHECKED_IN"
    CHECKED_OUT = "CHECKED_OUT"
    MARKED_ABSENT = "MARKED_ABSENT"


@dataclass(frozen=True)
class PresenceState:
    """Where a student stands today, derived once from the stored record.

    `since` is the check-in time for CHECKED_IN and the check-out time for
    CHECKED_OUT; it is None otherwise.
    """

    kind: PresenceKind
    since: Optional[datetime] = None

    @classmethod
    def of(cls, record: Optional[AttendanceRecord]) -> "PresenceState":
        if record is None:
            return cls(PresenceKind.NO_RECORD)
        if record.check_in_time is None:
            # Sweeper-created Absent (or a Leave entry): the student never checked in.
            return cls(PresenceKind.MARKED_ABSENT)
        if record.check_out_time is None:
            return cls(PresenceKind.CHECKED_IN, record.check_in_time)
        return cls(PresenceKind.CHECKED_OUT, record.check_out_time)


@dataclass(frozen=True)
class ToggleResult:
    new_status: PresenceLabel
    last_action_time: datetime


@dataclass(frozen=True)
class StatusView:
    status: PresenceLabel
    last_action_time: Optional[datetime]
    record_status: Optional[AttendanceStatus] = None


@dataclass(frozen=True)
class SweepReport:
    day: date
    examined: int = 0
    created: int = 0
    skipped: int = 0
    failed: int = 0

    def to_dict(self) -> dict:
        return {
            "date": self.day.isoformat(),
            "examined": self.examined,
            "created": self.created,
            "skipped": self.skipped,
            "failed": self.failed,
        }
