"""User repository protocol."""

from __future__ import annotations

from typing import Optional, Protocol

from ...models.user import User


class UserRepository(Protocol):
    """Credential store for registered users."""

    def get_by_id(self, user_id: int) -> Optional[User]:
        ...

    def get_by_username(self, username: str) -> Optional[User]:
        ...

    def create(self, username: str, password_hash: str) -> User:
        """Insert a user; raises ConflictError on a duplicate username."""
        ...
