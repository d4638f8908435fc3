"""Product inventory blueprints.

``/products`` serves admins (and staff for reads); ``/staff/products``
exposes the read-only subset for staff accounts.
"""

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, current_app, g, jsonify, request
from werkzeug.exceptions import BadRequest, InternalServerError, NotFound

from models.product import Product
from models.user import Role
from repositories import PersistenceError, get_repositories
from security.authorization import roles_required
from utils.request_validation import parse_request_payload

products_bp = Blueprint("products", __name__)
staff_products_bp = Blueprint("staff_products", __name__)

READ_ROLES = (Role.ADMIN, Role.STAFF)
WRITE_ROLES = (Role.ADMIN,)

REQUIRED_FIELDS = ("name", "code")
TEXT_FIELDS = ("name", "code", "description", "status")

# Range of the 32-bit INTEGER stock column
STOCK_MIN = -(2**31)
STOCK_MAX = 2**31 - 1


def _parse_product_id(raw_id: str) -> int:
    try:
        return int(raw_id)
    except (TypeError, ValueError):
        raise BadRequest("Invalid product ID.") from None


def _get_product_or_404(product_id: int) -> Product:
    product = get_repositories().products.find_by_id(product_id)
    if product is None:
        raise NotFound("Product not found.")
    return product


def _parse_stock(value) -> int:
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool):
        raise BadRequest("stock must be an integer.")
    if isinstance(value, int):
        stock = value
    elif isinstance(value, str):
        try:
            stock = int(value.strip())
        except ValueError:
            raise BadRequest("stock must be an integer.") from None
    else:
        raise BadRequest("stock must be an integer.")

    if not STOCK_MIN <= stock <= STOCK_MAX:
        raise BadRequest(f"stock must be between {STOCK_MIN} and {STOCK_MAX}.")
    return stock


def _max_length(field: str) -> int | None:
    return getattr(Product.__table__.c[field].type, "length", None)


def _validate_product_payload(data: dict, partial: bool = False) -> dict:
    """Return the cleaned product fields from ``data``."""

    errors = []
    cleaned = {}

    if not partial:
        for field in REQUIRED_FIELDS:
            value = data.get(field)
            if not isinstance(value, str) or not value.strip():
                errors.append(f"{field} is required")

    for field in TEXT_FIELDS:
        if field not in data:
            continue
        value = data[field]
        if not isinstance(value, str):
            errors.append(f"{field} must be a string")
            continue
        if field in REQUIRED_FIELDS and not value.strip():
            if partial:
                errors.append(f"{field} must not be empty")
            continue
        value = value.strip() if field in REQUIRED_FIELDS else value
        limit = _max_length(field)
        if limit is not None and len(value) > limit:
            errors.append(f"{field} must be at most {limit} characters")
            continue
        cleaned[field] = value

    if errors:
        raise BadRequest("; ".join(dict.fromkeys(errors)))

    if "stock" in data:
        cleaned["stock"] = _parse_stock(data["stock"])

    return cleaned


def _actor() -> str:
    claims = g.get("token_claims")
    return claims.email if claims else "unknown"


@products_bp.route("", methods=["GET"])
@roles_required(*READ_ROLES)
def list_products():
    """Return every product that has not been deleted."""

    products = get_repositories().products.find_all()
    return jsonify(
        {"results": [product.to_dict() for product in products], "count": len(products)}
    )


@products_bp.route("/<product_id>", methods=["GET"])
@roles_required(*READ_ROLES)
def get_product(product_id: str):
    product = _get_product_or_404(_parse_product_id(product_id))
    return jsonify(product.to_dict())


@products_bp.route("", methods=["POST"])
@roles_required(*WRITE_ROLES)
def create_product():
    data = parse_request_payload(request)
    fields = _validate_product_payload(data)

    product = Product(**fields)
    try:
        get_repositories().products.insert(product)
    except PersistenceError as exc:
        current_app.logger.exception("Failed to create product %s", fields.get("code"))
        raise InternalServerError("Failed to create product.") from exc

    current_app.logger.info("Product %s created by %s", product.id, _actor())
    return jsonify(product.to_dict()), HTTPStatus.CREATED


@products_bp.route("/<product_id>", methods=["PUT"])
@roles_required(*WRITE_ROLES)
def update_product(product_id: str):
    product = _get_product_or_404(_parse_product_id(product_id))

    data = parse_request_payload(request)
    fields = _validate_product_payload(data, partial=True)
    for name, value in fields.items():
        setattr(product, name, value)

    try:
        get_repositories().products.update(product)
    except PersistenceError as exc:
        current_app.logger.exception("Failed to update product %s", product_id)
        raise InternalServerError("Failed to update product.") from exc

    current_app.logger.info("Product %s updated by %s", product.id, _actor())
    return jsonify(product.to_dict())


@products_bp.route("/<product_id>", methods=["DELETE"])
@roles_required(*WRITE_ROLES)
def delete_product(product_id: str):
    product = _get_product_or_404(_parse_product_id(product_id))

    try:
        get_repositories().products.delete(product)
    except PersistenceError as exc:
        current_app.logger.exception("Failed to delete product %s", product_id)
        raise InternalServerError("Failed to delete product.") from exc

    current_app.logger.info("Product %s deleted by %s", product.id, _actor())
    return "", HTTPStatus.NO_CONTENT


staff_products_bp.add_url_rule("", view_func=list_products, methods=["GET"])
staff_products_bp.add_url_rule("/<product_id>", view_func=get_product, methods=["GET"])
