from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional
from zoneinfo import ZoneInfo

from ..core.constants import DEFAULT_TIMEZONE
from ..core.exceptions import ValidationError


def parse_iso_date(value: str, field_name: str = "Date") -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(str(value).strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"{field_name} must be in YYYY-MM-DD format.") from None


def isoformat_or_none(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


@dataclass(frozen=True)
class Clock:
    """Wall clock pinned to one timezone.

    The toggle engine and the nightly sweep must agree on what "today" is, so
    both receive the same Clock. Times are naive local wall-clock values in
    `timezone`, which is what the DATETIME columns store.
    """

    timezone: str = DEFAULT_TIMEZONE

    @property
    def tzinfo(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)

    def now(self) -> datetime:
        return datetime.now(self.tzinfo).replace(tzinfo=None)

    def today(self) -> date:
        return self.now().date()
