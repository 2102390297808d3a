from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Block


class BlockRepository(Protocol):
    def get_by_id(self, block_id: int) -> Optional[Block]:
        raise NotImplementedError

    def get_by_key(self, block_key: str) -> Optional[Block]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Block]:
        """Newest first."""

        raise NotImplementedError

    def create(self, *, block_name: str, block_key: str, block_theme: str) -> int:
        raise NotImplementedError

    def delete_cascade(self, block_id: int) -> tuple[int, int]:
        """Delete the block, its rooms and their students in one transaction.

        Returns (rooms_deleted, students_deleted).
        """

        raise NotImplementedError
