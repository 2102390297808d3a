from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import FeeStatus


@dataclass(frozen=True)
class Student:
    student_id: int
    name: str
    room_id: int
    username: str
    password_hash: str
    joining_date: date
    fee_status: FeeStatus = FeeStatus.PENDING
    email: Optional[str] = None
    phone: Optional[str] = None
    course: Optional[str] = None
    department: Optional[str] = None
    year: Optional[str] = None
    payment_method: Optional[str] = None

    def to_public_dict(self) -> dict:
        """Everything except the password hash."""
        return {
            "id": self.student_id,
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "course": self.course,
            "department": self.department,
            "year": self.year,
            "joiningDate": self.joining_date.isoformat(),
            "feeStatus": self.fee_status.value,
            "paymentMethod": self.payment_method,
            "room": self.room_id,
            "username": self.username,
        }


@dataclass(frozen=True)
class NewStudent:
    name: str
    room_id: int
    username: str
    password_hash: str
    joining_date: date
    fee_status: FeeStatus = FeeStatus.PENDING
    email: Optional[str] = None
    phone: Optional[str] = None
    course: Optional[str] = None
    department: Optional[str] = None
    year: Optional[str] = None
    payment_method: Optional[str] = None
