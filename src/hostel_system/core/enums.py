from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Login roles."""

    ADMIN = "admin"
    STUDENT = "student"


class AttendanceStatus(str, Enum):
    """Status stored on a daily attendance record."""

    PRESENT = "Present"
    ABSENT = "Absent"
    LEAVE = "Leave"


class PresenceLabel(str, Enum):
    """What the dashboard card shows."""

    CHECKED_IN = "Checked In"
    CHECKED_OUT = "Checked Out"


class FeeStatus(str, Enum):
    PAID = "Paid"
    PENDING = "Pending"
