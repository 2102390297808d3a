from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Block:
    """A hostel block. Its rooms are the rooms whose block_id points here."""

    block_id: int
    block_name: str
    block_key: str
    block_theme: str
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.block_id,
            "blockName": self.block_name,
            "blockKey": self.block_key,
            "blockTheme": self.block_theme,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
