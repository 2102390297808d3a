from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Administrator account. Students log in with their own credentials."""

    user_id: int
    username: str
    password_hash: str
    role: Role = Role.ADMIN
