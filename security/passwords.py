"""Password hashing helpers built on Werkzeug's salted hashes."""

from __future__ import annotations

from functools import lru_cache

from flask import current_app, has_app_context
from werkzeug.security import check_password_hash, generate_password_hash

DEFAULT_HASH_METHOD = "pbkdf2:sha256:600000"
PLACEHOLDER_PASSWORD = "placeholder-password-for-unknown-accounts"


class PasswordHashError(RuntimeError):
    """Raised when a password cannot be hashed."""


def _configured_method() -> str:
    if has_app_context():
        return current_app.config.get("PASSWORD_HASH_METHOD") or DEFAULT_HASH_METHOD
    return DEFAULT_HASH_METHOD


def hash_password(password: str, method: str | None = None) -> str:
    """Return a salted hash of ``password``.

    ``method`` follows Werkzeug's ``"<algorithm>:<params>"`` format, where the
    params carry the work factor (iterations for pbkdf2, cost for scrypt).
    """

    method = method or _configured_method()
    try:
        digest = generate_password_hash(password, method=method)
    except (TypeError, ValueError) as exc:
        raise PasswordHashError(f"Unable to hash password with method {method!r}.") from exc

    if not digest:
        raise PasswordHashError("Password hashing produced an empty digest.")
    return digest


def verify_password(password: str, stored_hash: str | None) -> bool:
    """Return True when ``password`` matches ``stored_hash``."""

    if not stored_hash or password is None:
        return False
    try:
        return check_password_hash(stored_hash, password)
    except (TypeError, ValueError):
        # Unknown or corrupted hash formats never match.
        return False


@lru_cache(maxsize=8)
def _placeholder_hash(method: str) -> str:
    return generate_password_hash(PLACEHOLDER_PASSWORD, method=method)


def reject_password(password: str) -> bool:
    """Spend one hash check on ``password`` and return False.

    Used when no account matches, so the response time does not reveal
    whether an email is registered.
    """

    try:
        stored_hash = _placeholder_hash(_configured_method())
    except (TypeError, ValueError):
        return False
    verify_password(password, stored_hash)
    return False
