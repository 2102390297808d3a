from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from werkzeug.security import check_password_hash

from ..core.enums import Role
from ..core.exceptions import AuthenticationError, ValidationError
from ..students.repository import StudentRepository
from .repository import UserRepository

REDIRECT_BY_ROLE = {
    Role.ADMIN: "/admin.html",
    Role.STUDENT: "/student.html",
}


@dataclass(frozen=True)
class SessionUser:
    """What we store into the Flask session after login."""

    user_id: int
    role: Role
    redirect: str
    student_id: Optional[int] = None


def _password_matches(password_hash: str, password: str) -> bool:
    try:
        return check_password_hash(password_hash, password)
    except ValueError:
        # Unknown hash method, e.g. a placeholder value.
        return False


class AuthService:
    """Use case: authenticate an admin or a student."""

    def __init__(self, users: UserRepository, students: StudentRepository):
        self._users = users
        self._students = students

    def authenticate(self, username: str, password: str, role: str) -> SessionUser:
        try:
            role = Role(role)
        except ValueError:
            raise ValidationError("Invalid role selected") from None

        username = (username or "").strip()
        password = password or ""

        if role == Role.ADMIN:
            user = self._users.get_by_username(username) if username else None
            if not user or user.role != Role.ADMIN or not _password_matches(user.password_hash, password):
                raise AuthenticationError("Invalid Admin credentials")
            return SessionUser(user_id=user.user_id, role=role, redirect=REDIRECT_BY_ROLE[role])

        student = self._students.get_by_username(username) if username else None
        if not student or not _password_matches(student.password_hash, password):
            raise AuthenticationError("Invalid Student credentials")
        return SessionUser(
            user_id=student.student_id,
            role=role,
            redirect=REDIRECT_BY_ROLE[role],
            student_id=student.student_id,
        )
