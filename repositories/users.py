"""User persistence."""

from __future__ import annotations

from sqlalchemy import func, select

from models.user import User

from .base import SessionRepository


class UserRepository(SessionRepository):
    def find_by_email(self, email: str) -> User | None:
        """Case-insensitive lookup by email."""

        statement = select(User).where(func.lower(User.email) == email.lower())
        return self._session.execute(statement).scalars().first()

    def add(self, user: User) -> User:
        """Insert ``user``; a duplicate email surfaces as ``PersistenceError``."""

        self._session.add(user)
        self._commit()
        return user
