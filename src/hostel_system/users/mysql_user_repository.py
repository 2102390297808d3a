from __future__ import annotations

from typing import Optional

from ..core.constants import DEFAULT_DB_READ_RETRIES
from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, with_read_retry
from .model import User
from .repository import UserRepository


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection, *, read_retries: int = DEFAULT_DB_READ_RETRIES):
        self._conn_factory = conn_factory
        self._read_retries = read_retries

    def get_by_username(self, username: str) -> Optional[User]:
        def read():
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "SELECT user_id, username, password_hash, role FROM users WHERE username=%s",
                    (username,),
                )
                r = fetchone(cur)
                if not r:
                    return None
                return User(
                    user_id=int(r["user_id"]),
                    username=r["username"],
                    password_hash=r["password_hash"],
                    role=Role(r["role"]),
                )

        return with_read_retry(read, attempts=self._read_retries)
