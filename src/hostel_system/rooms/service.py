from __future__ import annotations

import logging
from typing import Any

from ..blocks.repository import BlockRepository
from ..common.validators import require_id, require_non_empty, require_positive_int
from ..core.exceptions import NotFoundError, ValidationError
from .model import Room
from .repository import RoomRepository

logger = logging.getLogger(__name__)


class RoomService:
    def __init__(self, rooms: RoomRepository, blocks: BlockRepository):
        self._rooms = rooms
        self._blocks = blocks

    def create_room(self, *, room_number: Any, floor: Any, capacity: Any, block_key: Any) -> Room:
        if not room_number or not floor or not capacity or not block_key:
            raise ValidationError("Missing required fields.")

        block = self._blocks.get_by_key(require_non_empty(block_key, "Block key"))
        if block is None:
            raise NotFoundError("Block not found.")

        room_id = self._rooms.create(
            room_number=require_non_empty(room_number, "Room number"),
            floor=require_non_empty(floor, "Floor"),
            capacity=require_positive_int(capacity, "Capacity"),
            block_id=block.block_id,
        )
        room = self._rooms.get_by_id(room_id)
        if room is None:
            raise NotFoundError("Room not found.")
        return room

    def delete_room(self, room_id: Any) -> None:
        room_id = require_id(room_id, "Room ID")
        if not self._rooms.get_by_id(room_id):
            raise NotFoundError("Room not found.")

        students_deleted = self._rooms.delete_cascade(room_id)
        logger.info("Deleted room %s and %s students", room_id, students_deleted)
