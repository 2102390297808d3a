from __future__ import annotations

from typing import Optional, Sequence

from ..core.constants import DEFAULT_DB_READ_RETRIES
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause, with_read_retry
from .model import Room
from .repository import RoomRepository

_COLUMNS = "room_id, room_number, floor, capacity, block_id"


def _to_room(r: dict) -> Room:
    return Room(
        room_id=int(r["room_id"]),
        room_number=r["room_number"],
        floor=r["floor"],
        capacity=int(r["capacity"]),
        block_id=int(r["block_id"]),
    )


class MySQLRoomRepository(RoomRepository):
    def __init__(self, conn_factory: DatabaseConnection, *, read_retries: int = DEFAULT_DB_READ_RETRIES):
        self._conn_factory = conn_factory
        self._read_retries = read_retries

    def get_by_id(self, room_id: int) -> Optional[Room]:
        def read():
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(f"SELECT {_COLUMNS} FROM rooms WHERE room_id=%s", (int(room_id),))
                r = fetchone(cur)
                return _to_room(r) if r else None

        return with_read_retry(read, attempts=self._read_retries)

    def list_by_block_ids(self, block_ids: Sequence[int]) -> Sequence[Room]:
        if not block_ids:
            return []

        def read():
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    f"SELECT {_COLUMNS} FROM rooms WHERE block_id IN ({in_clause(block_ids)}) ORDER BY room_id",
                    tuple(int(b) for b in block_ids),
                )
                return [_to_room(r) for r in fetchall(cur)]

        return with_read_retry(read, attempts=self._read_retries)

    def create(self, *, room_number: str, floor: str, capacity: int, block_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO rooms(room_number, floor, capacity, block_id) VALUES(%s,%s,%s,%s)",
                (room_number, floor, int(capacity), int(block_id)),
            )
            return int(cur.lastrowid)

    def delete_cascade(self, room_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM students WHERE room_id=%s", (int(room_id),))
            students_deleted = cur.rowcount
            cur.execute("DELETE FROM rooms WHERE room_id=%s", (int(room_id),))
            return students_deleted
