from __future__ import annotations

from typing import Optional, Sequence

from ..core.constants import DEFAULT_DB_READ_RETRIES
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, with_read_retry
from .model import Block
from .repository import BlockRepository

_COLUMNS = "block_id, block_name, block_key, block_theme, created_at"


def _to_block(r: dict) -> Block:
    return Block(
        block_id=int(r["block_id"]),
        block_name=r["block_name"],
        block_key=r["block_key"],
        block_theme=r["block_theme"],
        created_at=r.get("created_at"),
    )


class MySQLBlockRepository(BlockRepository):
    def __init__(self, conn_factory: DatabaseConnection, *, read_retries: int = DEFAULT_DB_READ_RETRIES):
        self._conn_factory = conn_factory
        self._read_retries = read_retries

    def _fetch_one(self, where: str, params: tuple) -> Optional[Block]:
        def read():
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(f"SELECT {_COLUMNS} FROM blocks WHERE {where}", params)
                r = fetchone(cur)
                return _to_block(r) if r else None

        return with_read_retry(read, attempts=self._read_retries)

    def get_by_id(self, block_id: int) -> Optional[Block]:
        return self._fetch_one("block_id=%s", (int(block_id),))

    def get_by_key(self, block_key: str) -> Optional[Block]:
        return self._fetch_one("block_key=%s", (block_key,))

    def list_all(self) -> Sequence[Block]:
        def read():
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(f"SELECT {_COLUMNS} FROM blocks ORDER BY created_at DESC, block_id DESC")
                return [_to_block(r) for r in fetchall(cur)]

        return with_read_retry(read, attempts=self._read_retries)

    def create(self, *, block_name: str, block_key: str, block_theme: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO blocks(block_name, block_key, block_theme) VALUES(%s,%s,%s)",
                (block_name, block_key, block_theme),
            )
            return int(cur.lastrowid)

    def delete_cascade(self, block_id: int) -> tuple[int, int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE s FROM students s JOIN rooms r ON r.room_id = s.room_id WHERE r.block_id=%s",
                (int(block_id),),
            )
            students_deleted = cur.rowcount
            cur.execute("DELETE FROM rooms WHERE block_id=%s", (int(block_id),))
            rooms_deleted = cur.rowcount
            cur.execute("DELETE FROM blocks WHERE block_id=%s", (int(block_id),))
            return rooms_deleted, students_deleted
