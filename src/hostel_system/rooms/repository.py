from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Room


class RoomRepository(Protocol):
    def get_by_id(self, room_id: int) -> Optional[Room]:
        raise NotImplementedError

    def list_by_block_ids(self, block_ids: Sequence[int]) -> Sequence[Room]:
        raise NotImplementedError

    def create(self, *, room_number: str, floor: str, capacity: int, block_id: int) -> int:
        raise NotImplementedError

    def delete_cascade(self, room_id: int) -> int:
        """Delete the room and its students in one transaction. Returns students deleted."""

        raise NotImplementedError
