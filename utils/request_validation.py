"""Utilities for validating incoming Flask requests."""

from __future__ import annotations

from typing import Iterable

from flask import Request
from werkzeug.exceptions import BadRequest

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


def _check_required(data: dict, required_keys: Iterable[str] | None) -> None:
    if not required_keys:
        return
    missing = [key for key in required_keys if not str(data.get(key) or "").strip()]
    if missing:
        raise BadRequest(
            "Missing required fields: {}.".format(", ".join(sorted(missing)))
        )


def parse_json_request(
    req: Request,
    *,
    required_keys: Iterable[str] | None = None,
) -> dict:
    """Return the parsed JSON body or raise a 400 error."""

    if not req.is_json:
        raise BadRequest("Request content type must be application/json.")

    data = req.get_json(silent=True)
    if data is None:
        raise BadRequest("Request JSON body is required.")

    if not isinstance(data, dict):
        raise BadRequest("Request JSON payload must be an object.")

    if not data:
        raise BadRequest("Request JSON body must not be empty.")

    _check_required(data, required_keys)
    return data


def parse_request_payload(
    req: Request,
    *,
    required_keys: Iterable[str] | None = None,
) -> dict:
    """Return the body of a JSON or form-encoded request as a dict."""

    if req.is_json:
        return parse_json_request(req, required_keys=required_keys)

    if req.mimetype not in FORM_CONTENT_TYPES:
        raise BadRequest(
            "Request content type must be application/json or form data."
        )

    data = req.form.to_dict()
    if not data:
        raise BadRequest("Request body must not be empty.")

    _check_required(data, required_keys)
    return data
