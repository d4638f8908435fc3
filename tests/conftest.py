"""Shared pytest fixtures for the application tests."""

from __future__ import annotations

import base64
import json
import sys
from pathlib import Path

import pytest
from flask import Flask
from flask.testing import FlaskClient

ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from app import create_app  # noqa: E402
from config import Config  # noqa: E402
from models import db  # noqa: E402
from models.user import Role, User  # noqa: E402
from security.tokens import issue_token  # noqa: E402


class _BaseTestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    JWT_SECRET_KEY = "test-secret-key-with-enough-length-for-hs256"
    PASSWORD_HASH_METHOD = "pbkdf2:sha256:1000"
    RATE_LIMIT = "1000 per minute"


@pytest.fixture()
def app() -> Flask:
    """Create a Flask application instance for tests."""

    application = create_app(_BaseTestConfig)

    with application.app_context():
        db.create_all()

    yield application

    with application.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    """Return a test client for the Flask app."""

    return app.test_client()


@pytest.fixture()
def create_user(app: Flask):
    """Persist a user and return its email."""

    def _create(
        email: str = "staff@example.com",
        password: str = "StaffPass123",
        role: Role = Role.STAFF,
        full_name: str = "Test User",
    ) -> str:
        with app.app_context():
            user = User(email=email, full_name=full_name, role=role)
            user.set_password(password)
            db.session.add(user)
            db.session.commit()
            return user.email

    return _create


@pytest.fixture()
def auth_header(app: Flask):
    """Build an Authorization header for the given role."""

    def _header(role: Role = Role.ADMIN, email: str | None = None, **kwargs) -> dict[str, str]:
        email = email or f"{role.value}@example.com"
        with app.app_context():
            token = issue_token(email, role, **kwargs)
        return {"Authorization": f"Bearer {token}"}

    return _header


@pytest.fixture()
def forged_header(auth_header):
    """A staff token whose payload was edited to claim ``role=admin``."""

    token = auth_header(Role.STAFF)["Authorization"].split(" ", 1)[1]
    header, payload, signature = token.split(".")
    claims = json.loads(base64.urlsafe_b64decode(payload + "=" * (-len(payload) % 4)))
    claims["role"] = Role.ADMIN.value
    forged = base64.urlsafe_b64encode(json.dumps(claims).encode()).rstrip(b"=").decode()
    return {"Authorization": f"Bearer {header}.{forged}.{signature}"}
