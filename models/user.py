"""User model definition."""

from __future__ import annotations

import enum
from datetime import datetime, timezone

from security.passwords import hash_password, verify_password

from . import db


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Role(str, enum.Enum):
    """Access-control roles a user can hold."""

    ADMIN = "admin"
    STAFF = "staff"

    @classmethod
    def parse(cls, raw: object) -> "Role | None":
        """Return the matching role for ``raw`` or None when it is unknown."""

        if isinstance(raw, cls):
            return raw
        if not isinstance(raw, str):
            return None
        try:
            return cls(raw.strip().lower())
        except ValueError:
            return None


class User(db.Model):
    """Represents an account allowed to use the inventory API."""

    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), unique=True, nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    full_name = db.Column(db.String(255), nullable=False, default="")
    role = db.Column(
        db.Enum(
            Role,
            name="user_role_enum",
            values_callable=lambda roles: [role.value for role in roles],
        ),
        nullable=False,
        default=Role.STAFF,
    )
    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = db.Column(
        db.DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow
    )

    def set_password(self, password: str, method: str | None = None) -> None:
        """Hash and store the password.

        Raises ``PasswordHashError`` instead of storing an empty hash.
        """

        self.password_hash = hash_password(password, method=method)

    def check_password(self, password: str) -> bool:
        """Verify a password against the stored hash."""

        return verify_password(password, self.password_hash)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "email": self.email,
            "full_name": self.full_name,
            "role": self.role.value if self.role else None,
        }

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"<User {self.email}>"
