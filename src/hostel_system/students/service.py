from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from werkzeug.security import generate_password_hash

from ..attendance.repository import AttendanceRepository
from ..blocks.repository import BlockRepository
from ..common.datetime_utils import Clock, parse_iso_date
from ..common.validators import require_id
from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..core.enums import FeeStatus
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..rooms.repository import RoomRepository
from .model import NewStudent, Student
from .repository import StudentRepository

logger = logging.getLogger(__name__)

_USERNAME_TAKEN = "This username is already taken. Please choose another."


def _optional_str(payload: Mapping[str, Any], key: str) -> Optional[str]:
    value = payload.get(key)
    if value is None:
        return None
    value = str(value).strip()
    return value or None


class StudentService:
    def __init__(
        self,
        students: StudentRepository,
        rooms: RoomRepository,
        blocks: BlockRepository,
        attendance: AttendanceRepository,
        clock: Optional[Clock] = None,
    ):
        self._students = students
        self._rooms = rooms
        self._blocks = blocks
        self._attendance = attendance
        self._clock = clock or Clock()

    def create_student(self, payload: Mapping[str, Any]) -> Student:
        """Enrol a student into a room.

        Expects the camelCase form fields: roomId, name, username, password and
        optionally email, phone, course, department, year, feeStatus,
        paymentMethod and joiningDate (YYYY-MM-DD).
        """

        room_id = payload.get("roomId")
        name = _optional_str(payload, "name")
        username = _optional_str(payload, "username")
        password = payload.get("password")
        if not room_id or not name or not username or not password:
            raise ValidationError("Room, Name, Username, and Password are required.")

        room_id = require_id(room_id, "Room ID")
        room = self._rooms.get_by_id(room_id)
        if room is None:
            raise NotFoundError("Room not found.")

        if self._students.count_in_room(room_id) >= room.capacity:
            raise ValidationError("This room is already full.")

        if self._students.get_by_username(username):
            raise ValidationError(_USERNAME_TAKEN)

        fee_status = payload.get("feeStatus") or FeeStatus.PENDING.value
        try:
            fee_status = FeeStatus(fee_status)
        except ValueError:
            raise ValidationError("Fee status must be Paid or Pending.") from None

        joining_date = payload.get("joiningDate")
        joining_date = parse_iso_date(joining_date, "Joining date") if joining_date else self._clock.today()

        new_student = NewStudent(
            name=name,
            room_id=room_id,
            username=username,
            password_hash=generate_password_hash(str(password)),
            joining_date=joining_date,
            fee_status=fee_status,
            email=_optional_str(payload, "email"),
            phone=_optional_str(payload, "phone"),
            course=_optional_str(payload, "course"),
            department=_optional_str(payload, "department"),
            year=_optional_str(payload, "year"),
            payment_method=_optional_str(payload, "paymentMethod"),
        )

        try:
            student_id = self._students.create(new_student)
        except ConflictError:
            raise ValidationError(_USERNAME_TAKEN) from None

        student = self._students.get_by_id(student_id)
        if student is None:
            raise NotFoundError("Student not found.")
        logger.info("Student %s (%s) added to room %s", student_id, username, room_id)
        return student

    def delete_student(self, student_id: Any) -> None:
        student_id = require_id(student_id, "Student ID")
        if not self._students.delete(student_id):
            raise NotFoundError("Student not found.")
        logger.info("Student %s removed", student_id)

    def get_profile(self, student_id: Any) -> dict:
        student_id = require_id(student_id, "Student ID")

        student = self._students.get_by_id(student_id)
        if student is None:
            raise NotFoundError("Student not found.")

        room = self._rooms.get_by_id(student.room_id)
        if room is None:
            raise NotFoundError("Room not found for student.")

        block = self._blocks.get_by_id(room.block_id)
        if block is None:
            raise NotFoundError("Block not found for room.")

        roommates = [
            s.to_public_dict()
            for s in self._students.list_by_room_ids([room.room_id])
            if s.student_id != student.student_id
        ]
        attendance = self._attendance.get_recent_for_student(student.student_id, DEFAULT_HISTORY_LIMIT)

        return {
            "student": student.to_public_dict(),
            "room": room.to_dict(),
            "block": block.to_dict(),
            "roommates": roommates,
            "attendance": [r.to_dict() for r in attendance],
        }
