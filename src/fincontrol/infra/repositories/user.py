"""SQLModel implementation of the credential store."""

from __future__ import annotations

from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import select

from ...errors import ConflictError
from ...models.user import User
from ..database import SessionFactory

DUPLICATE_MESSAGE = "El nombre de usuario ya existe."


class SQLModelUserRepository:
    """Users keyed by a unique username."""

    def __init__(self, session_factory: SessionFactory):
        self.session_factory = session_factory

    def get_by_id(self, user_id: int) -> Optional[User]:
        with self.session_factory() as session:
            user = session.get(User, user_id)
            if user:
                session.expunge(user)
            return user

    def get_by_username(self, username: str) -> Optional[User]:
        with self.session_factory() as session:
            user = session.exec(select(User).where(User.username == username)).first()
            if user:
                session.expunge(user)
            return user

    def create(self, username: str, password_hash: str) -> User:
        try:
            with self.session_factory() as session:
                existing = session.exec(select(User).where(User.username == username)).first()
                if existing:
                    raise ConflictError(DUPLICATE_MESSAGE)
                user = User(username=username, password_hash=password_hash)
                session.add(user)
                session.commit()
                session.refresh(user)
                session.expunge(user)
                return user
        except IntegrityError as exc:
            # Lost a race with a concurrent registration of the same name.
            raise ConflictError(DUPLICATE_MESSAGE) from exc
