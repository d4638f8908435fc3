"""Authentication blueprint providing register and login endpoints."""

from __future__ import annotations
from http import HTTPStatus

from flask import Blueprint, current_app, jsonify, request
from werkzeug.exceptions import BadRequest, InternalServerError, Unauthorized

from models.user import Role, User
from repositories import PersistenceError, get_repositories
from security.passwords import PasswordHashError, reject_password
from security.tokens import issue_token
from utils.request_validation import parse_request_payload

auth_bp = Blueprint("auth", __name__)


def _normalize_email(raw_email: str | None) -> str:
    """Normalize an email string by stripping whitespace and lowering case."""
    return str(raw_email or "").strip().lower()


def _extract_role(raw_role: str | None) -> Role:
    """Return the requested role, defaulting to staff."""
    if raw_role is None or not str(raw_role).strip():
        return Role.STAFF
    role = Role.parse(raw_role)
    if role is None:
        raise BadRequest("Role must be one of: admin, staff.")
    return role


@auth_bp.route("/register", methods=["POST"])
def register() -> tuple:
    """Register a new user and return an access token."""
    payload = parse_request_payload(
        request, required_keys=("email", "password", "full_name")
    )
    email = _normalize_email(payload.get("email"))
    password = str(payload["password"]).strip()
    full_name = str(payload["full_name"]).strip()
    role = _extract_role(payload.get("role"))

    user = User(email=email, full_name=full_name, role=role)
    try:
        user.set_password(password)
    except PasswordHashError as exc:
        current_app.logger.exception("Password hashing failed for %s", email)
        raise InternalServerError("Unable to process credentials.") from exc

    try:
        get_repositories().users.add(user)
    except PersistenceError as exc:
        current_app.logger.warning("Registration failed for %s: %s", email, exc)
        raise InternalServerError("Failed to register user.") from exc

    current_app.logger.info("Registered %s as %s", user.email, user.role.value)
    token = issue_token(user.email, user.role)
    return (
        jsonify(
            {
                "message": "User registered successfully.",
                "token": token,
                "user": user.to_dict(),
            }
        ),
        HTTPStatus.CREATED,
    )


@auth_bp.route("/login", methods=["POST"])
def login() -> tuple:
    """Authenticate a user and return an access token."""
    payload = parse_request_payload(request, required_keys=("email", "password"))
    email = _normalize_email(payload.get("email"))
    password = str(payload["password"]).strip()

    user = get_repositories().users.find_by_email(email)
    if user is None:
        # Same hashing cost as a wrong password for a known account
        reject_password(password)
        raise Unauthorized("Invalid email or password.")
    if not user.check_password(password):
        raise Unauthorized("Invalid email or password.")

    token = issue_token(user.email, user.role)
    return (
        jsonify({"token": token, "user": user.to_dict()}),
        HTTPStatus.OK,
    )
