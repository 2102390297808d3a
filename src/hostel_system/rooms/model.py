from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Room:
    room_id: int
    room_number: str
    floor: str
    capacity: int
    block_id: int

    def to_dict(self) -> dict:
        return {
            "id": self.room_id,
            "roomNumber": self.room_number,
            "floor": self.floor,
            "capacity": self.capacity,
            "block": self.block_id,
        }
