from __future__ import annotations

import logging
from typing import Any

from ..common.validators import require_id, require_non_empty
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..rooms.repository import RoomRepository
from ..students.repository import StudentRepository
from .model import Block
from .repository import BlockRepository

logger = logging.getLogger(__name__)


class BlockService:
    """Use cases: list blocks with their rooms and students, add and delete blocks."""

    def __init__(self, blocks: BlockRepository, rooms: RoomRepository, students: StudentRepository):
        self._blocks = blocks
        self._rooms = rooms
        self._students = students

    def list_blocks(self) -> list[dict]:
        blocks = list(self._blocks.list_all())
        if not blocks:
            return []

        rooms = self._rooms.list_by_block_ids([b.block_id for b in blocks])
        students = self._students.list_by_room_ids([r.room_id for r in rooms]) if rooms else []

        students_by_room: dict[int, list[dict]] = {}
        for s in students:
            students_by_room.setdefault(s.room_id, []).append(s.to_public_dict())

        rooms_by_block: dict[int, list[dict]] = {}
        for r in rooms:
            rooms_by_block.setdefault(r.block_id, []).append(
                {**r.to_dict(), "students": students_by_room.get(r.room_id, [])}
            )

        return [{**b.to_dict(), "rooms": rooms_by_block.get(b.block_id, [])} for b in blocks]

    def create_block(self, *, block_name: Any, unique_key: Any, theme_color: Any) -> Block:
        if not block_name or not unique_key or not theme_color:
            raise ValidationError("All fields are required")

        block_name = require_non_empty(block_name, "Block name")
        block_key = require_non_empty(unique_key, "Block key")
        block_theme = require_non_empty(theme_color, "Theme color")

        if self._blocks.get_by_key(block_key):
            raise ValidationError("Block key already exists!")

        try:
            block_id = self._blocks.create(block_name=block_name, block_key=block_key, block_theme=block_theme)
        except ConflictError:
            raise ValidationError("Block key already exists!") from None

        block = self._blocks.get_by_id(block_id)
        if block is None:
            raise NotFoundError("Block not found.")
        return block

    def delete_block(self, block_id: Any) -> None:
        block_id = require_id(block_id, "Block ID")
        if not self._blocks.get_by_id(block_id):
            raise NotFoundError("Block not found.")

        rooms_deleted, students_deleted = self._blocks.delete_cascade(block_id)
        logger.info(
            "Deleted block %s with %s rooms and %s students", block_id, rooms_deleted, students_deleted
        )
