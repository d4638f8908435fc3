"""Issue and verify signed access tokens."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import jwt
from jwt.exceptions import InvalidSubjectError
from flask_jwt_extended import create_access_token, decode_token
from flask_jwt_extended.exceptions import JWTDecodeError

from models.user import Role

ROLE_CLAIM = "role"


class TokenError(Exception):
    """Raised when a token fails verification.

    ``reason`` is one of ``invalid``, ``expired`` or ``malformed``.
    """

    def __init__(self, reason: str, message: str) -> None:
        super().__init__(message)
        self.reason = reason


@dataclass(frozen=True)
class TokenClaims:
    email: str
    role: Role
    expires_at: datetime | None


def issue_token(email: str, role: Role, expires_delta: timedelta | None = None) -> str:
    """Create a signed access token carrying ``email`` and ``role``."""

    kwargs = {}
    if expires_delta is not None:
        kwargs["expires_delta"] = expires_delta
    return create_access_token(
        identity=email,
        additional_claims={ROLE_CLAIM: Role(role).value},
        **kwargs,
    )


def verify_token(token: str) -> TokenClaims:
    """Validate signature and expiration and return the embedded claims."""

    try:
        decoded = decode_token(token)
    except jwt.ExpiredSignatureError as exc:
        raise TokenError("expired", "Token has expired.") from exc
    except jwt.InvalidSignatureError as exc:
        raise TokenError("invalid", "Token signature is invalid.") from exc
    except (jwt.DecodeError, InvalidSubjectError, JWTDecodeError) as exc:
        raise TokenError("malformed", "Token could not be decoded.") from exc
    except jwt.InvalidTokenError as exc:
        raise TokenError("invalid", "Token is invalid.") from exc

    if decoded.get("type", "access") != "access":
        raise TokenError("invalid", "Only access tokens are accepted.")

    email = decoded.get("sub")
    role = Role.parse(decoded.get(ROLE_CLAIM))
    if not isinstance(email, str) or not email or role is None:
        raise TokenError("malformed", "Token is missing identity or role claims.")

    expires_at = None
    if decoded.get("exp") is not None:
        expires_at = datetime.fromtimestamp(decoded["exp"], tz=timezone.utc)

    return TokenClaims(email=email, role=role, expires_at=expires_at)
