"""Route decorator enforcing bearer-token authentication and role checks."""

from __future__ import annotations

from functools import wraps
from typing import Callable

from flask import current_app, g, request
from werkzeug.exceptions import Forbidden, Unauthorized

from models.user import Role
from security.tokens import TokenClaims, TokenError, verify_token


class TokenRejected(Unauthorized):
    """401 raised when the bearer token is missing or fails verification."""

    def __init__(self, reason: str, description: str) -> None:
        super().__init__(description)
        self.reason = reason


def _bearer_token() -> str:
    header = request.headers.get("Authorization")
    if not header:
        raise TokenRejected("missing", "Missing Authorization header.")

    scheme, _, token = header.partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        raise TokenRejected("malformed", "Authorization header must be 'Bearer <token>'.")
    return token


def authenticate_request() -> TokenClaims:
    """Verify the request's bearer token and return its claims."""

    try:
        return verify_token(_bearer_token())
    except TokenError as exc:
        current_app.logger.info(
            "Rejected token on %s %s: %s", request.method, request.path, exc.reason
        )
        raise TokenRejected(exc.reason, str(exc)) from exc


def roles_required(*roles: Role) -> Callable:
    """Only let requests through whose token role is in ``roles``."""

    allowed = frozenset(Role(role) for role in roles)
    if not allowed:
        raise ValueError("roles_required needs at least one role.")

    def decorator(view: Callable) -> Callable:
        @wraps(view)
        def wrapper(*args, **kwargs):
            claims = authenticate_request()
            if claims.role not in allowed:
                current_app.logger.info(
                    "Forbidden %s %s for %s (role %s)",
                    request.method,
                    request.path,
                    claims.email,
                    claims.role.value,
                )
                raise Forbidden("Your role is not allowed to access this resource.")
            g.token_claims = claims
            return view(*args, **kwargs)

        return wrapper

    return decorator
