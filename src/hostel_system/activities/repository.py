from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import ClubActivity


class ActivityRepository(Protocol):
    def list_all(self) -> Sequence[ClubActivity]:
        """Newest first."""

        raise NotImplementedError

    def get_by_id(self, activity_id: int) -> Optional[ClubActivity]:
        raise NotImplementedError

    def create(
        self,
        *,
        title: str,
        activity_type: str,
        activity_date: date,
        description: Optional[str],
        image_url: str,
    ) -> int:
        raise NotImplementedError

    def delete(self, activity_id: int) -> bool:
        raise NotImplementedError
