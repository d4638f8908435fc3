"""Shared repository plumbing."""

from __future__ import annotations

from sqlalchemy.exc import SQLAlchemyError


class PersistenceError(RuntimeError):
    """Raised when the database rejects or fails a write."""


class SessionRepository:
    """Base for repositories operating on a SQLAlchemy session.

    The session may be a ``scoped_session`` such as Flask-SQLAlchemy's
    ``db.session``; it is resolved per app context on every call.
    """

    def __init__(self, session) -> None:
        self._session = session

    def _commit(self) -> None:
        try:
            self._session.commit()
        except SQLAlchemyError as exc:
            self._session.rollback()
            raise PersistenceError(str(exc)) from exc
