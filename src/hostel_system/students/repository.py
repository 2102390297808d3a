from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import NewStudent, Student


class StudentRepository(Protocol):
    def list_all_ids(self) -> Sequence[int]:
        """Every enrolled student id; the roster the nightly sweep walks."""

        raise NotImplementedError

    def get_by_id(self, student_id: int) -> Optional[Student]:
        raise NotImplementedError

    def get_by_username(self, username: str) -> Optional[Student]:
        raise NotImplementedError

    def list_by_room_ids(self, room_ids: Sequence[int]) -> Sequence[Student]:
        raise NotImplementedError

    def count_in_room(self, room_id: int) -> int:
        raise NotImplementedError

    def create(self, student: NewStudent) -> int:
        """Raises ConflictError if the username is taken."""

        raise NotImplementedError

    def delete(self, student_id: int) -> bool:
        raise NotImplementedError
