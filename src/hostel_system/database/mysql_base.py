from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from typing import Any, Callable, Dict, List, Optional, TypeVar

from mysql.connector import errors as mysql_errors

from ..core.constants import DEFAULT_DB_READ_RETRIES, MYSQL_DUPLICATE_ENTRY, READ_RETRY_BASE_DELAY_SECONDS
from ..core.exceptions import ConflictError, StorageUnavailableError
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)

T = TypeVar("T")

_UNAVAILABLE_ERRORS = (
    mysql_errors.InterfaceError,
    mysql_errors.OperationalError,
    mysql_errors.PoolError,
)


def translate_mysql_error(exc: Exception) -> Exception:
    """Map driver errors onto the domain taxonomy; unknown errors pass through."""

    if isinstance(exc, mysql_errors.IntegrityError) and getattr(exc, "errno", None) == MYSQL_DUPLICATE_ENTRY:
        return ConflictError(str(exc))
    if isinstance(exc, _UNAVAILABLE_ERRORS):
        return StorageUnavailableError(str(exc))
    return exc


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """One connection, one transaction: commit on success, rollback on error."""

    try:
        conn = conn_factory.connect()
    except mysql_errors.Error as exc:
        raise translate_mysql_error(exc) from exc

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql_errors.Error as exc:
        _safe_rollback(conn)
        translated = translate_mysql_error(exc)
        if translated is exc:
            raise
        raise translated from exc
    except Exception:
        _safe_rollback(conn)
        raise
    finally:
        conn.close()


def _safe_rollback(conn) -> None:
    try:
        conn.rollback()
    except mysql_errors.Error:
        # The connection is already gone; the first error is the one to raise.
        logger.debug("Rollback failed on a broken connection", exc_info=True)


def with_read_retry(
    read: Callable[[], T],
    *,
    attempts: int = DEFAULT_DB_READ_RETRIES,
    base_delay: float = READ_RETRY_BASE_DELAY_SECONDS,
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """Run an idempotent read, retrying StorageUnavailableError with exponential backoff."""

    attempts = max(1, int(attempts))
    for attempt in range(1, attempts + 1):
        try:
            return read()
        except StorageUnavailableError:
            if attempt == attempts:
                raise
            delay = base_delay * (2 ** (attempt - 1))
            logger.warning("Read failed (attempt %s/%s), retrying in %.2fs", attempt, attempts, delay)
            sleep(delay)
    raise AssertionError("unreachable")


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def in_clause(values) -> str:
    """Placeholders for `IN (...)`; callers must pass a non-empty sequence."""
    return ", ".join(["%s"] * len(values))
