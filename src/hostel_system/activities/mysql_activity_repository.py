from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.constants import DEFAULT_DB_READ_RETRIES
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, with_read_retry
from .model import ClubActivity
from .repository import ActivityRepository

_COLUMNS = "activity_id, title, activity_type, activity_date, description, image_url, created_at"


def _to_activity(r: dict) -> ClubActivity:
    return ClubActivity(
        activity_id=int(r["activity_id"]),
        title=r["title"],
        activity_type=r["activity_type"],
        activity_date=r["activity_date"],
        description=r.get("description"),
        image_url=r.get("image_url") or "",
        created_at=r.get("created_at"),
    )


class MySQLActivityRepository(ActivityRepository):
    def __init__(self, conn_factory: DatabaseConnection, *, read_retries: int = DEFAULT_DB_READ_RETRIES):
        self._conn_factory = conn_factory
        self._read_retries = read_retries

    def list_all(self) -> Sequence[ClubActivity]:
        def read():
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(f"SELECT {_COLUMNS} FROM club_activities ORDER BY created_at DESC, activity_id DESC")
                return [_to_activity(r) for r in fetchall(cur)]

        return with_read_retry(read, attempts=self._read_retries)

    def get_by_id(self, activity_id: int) -> Optional[ClubActivity]:
        def read():
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(f"SELECT {_COLUMNS} FROM club_activities WHERE activity_id=%s", (int(activity_id),))
                r = fetchone(cur)
                return _to_activity(r) if r else None

        return with_read_retry(read, attempts=self._read_retries)

    def create(
        self,
        *,
        title: str,
        activity_type: str,
        activity_date: date,
        description: Optional[str],
        image_url: str,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO club_activities(title, activity_type, activity_date, description, image_url)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (title, activity_type, activity_date, description, image_url),
            )
            return int(cur.lastrowid)

    def delete(self, activity_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM club_activities WHERE activity_id=%s", (int(activity_id),))
            return cur.rowcount > 0
