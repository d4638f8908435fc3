"""Tests for access token issuance and verification."""

from __future__ import annotations

import base64
import hashlib
import hmac
import json
from datetime import timedelta

import jwt
import pytest

from models.user import Role
from security.tokens import TokenError, issue_token, verify_token


def _replace_claims(token: str, **changes) -> str:
    header, payload, signature = token.split(".")
    padded = payload + "=" * (-len(payload) % 4)
    claims = json.loads(base64.urlsafe_b64decode(padded))
    claims.update(changes)
    encoded = base64.urlsafe_b64encode(json.dumps(claims).encode()).rstrip(b"=").decode()
    return ".".join([header, encoded, signature])


def test_issued_token_round_trips_claims(app):
    with app.app_context():
        token = issue_token("admin@example.com", Role.ADMIN)
        claims = verify_token(token)

    assert claims.email == "admin@example.com"
    assert claims.role is Role.ADMIN
    assert claims.expires_at is not None


def test_expired_token_is_rejected(app):
    with app.app_context():
        token = issue_token("staff@example.com", Role.STAFF, expires_delta=timedelta(seconds=-5))
        with pytest.raises(TokenError) as excinfo:
            verify_token(token)
    assert excinfo.value.reason == "expired"


def test_tampered_claims_are_rejected(app):
    with app.app_context():
        token = issue_token("staff@example.com", Role.STAFF)
        forged = _replace_claims(token, role="admin")
        with pytest.raises(TokenError) as excinfo:
            verify_token(forged)
    assert excinfo.value.reason == "invalid"


def test_token_signed_with_other_key_is_rejected(app):
    foreign = jwt.encode(
        {"sub": "admin@example.com", "role": "admin", "type": "access"},
        "some-other-secret-that-is-long-enough",
        algorithm="HS256",
    )
    with app.app_context():
        with pytest.raises(TokenError) as excinfo:
            verify_token(foreign)
    assert excinfo.value.reason == "invalid"


@pytest.mark.parametrize("garbage", ["not-a-token", "a.b", "abc.def.ghi"])
def test_garbage_is_malformed(app, garbage):
    with app.app_context():
        with pytest.raises(TokenError) as excinfo:
            verify_token(garbage)
    assert excinfo.value.reason == "malformed"


def test_unknown_role_claim_is_malformed(app):
    secret = app.config["JWT_SECRET_KEY"]
    token = jwt.encode(
        {"sub": "someone@example.com", "role": "owner", "type": "access"},
        secret,
        algorithm="HS256",
    )
    with app.app_context():
        with pytest.raises(TokenError) as excinfo:
            verify_token(token)
    assert excinfo.value.reason == "malformed"


def _sign(claims: dict, secret: str) -> str:
    def _segment(data: dict) -> str:
        raw = json.dumps(data, separators=(",", ":")).encode()
        return base64.urlsafe_b64encode(raw).rstrip(b"=").decode()

    signing_input = f"{_segment({'alg': 'HS256', 'typ': 'JWT'})}.{_segment(claims)}"
    digest = hmac.new(secret.encode(), signing_input.encode(), hashlib.sha256).digest()
    signature = base64.urlsafe_b64encode(digest).rstrip(b"=").decode()
    return f"{signing_input}.{signature}"


@pytest.mark.parametrize("subject", [12345, None, ["admin@example.com"]])
def test_non_string_subject_is_malformed(app, subject):
    token = _sign(
        {"sub": subject, "role": "admin", "type": "access"},
        app.config["JWT_SECRET_KEY"],
    )
    with app.app_context():
        with pytest.raises(TokenError) as excinfo:
            verify_token(token)
    assert excinfo.value.reason == "malformed"
