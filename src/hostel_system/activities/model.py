from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional


@dataclass(frozen=True)
class ClubActivity:
    activity_id: int
    title: str
    activity_type: str
    activity_date: date
    description: Optional[str] = None
    image_url: str = ""
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.activity_id,
            "title": self.title,
            "type": self.activity_type,
            "date": self.activity_date.isoformat(),
            "description": self.description,
            "imageUrl": self.image_url,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
