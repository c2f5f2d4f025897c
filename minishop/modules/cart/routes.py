from __future__ import annotations

from flask import Blueprint, current_app, jsonify
from sqlalchemy.exc import SQLAlchemyError

from minishop.app.extensions import db
from minishop.app.common.auth import current_identity, login_required
from minishop.app.common.errors import StoreFailure
from minishop.app.common.validation import get_payload, positive_int, require_fields
from minishop.modules.cart import queries

bp = Blueprint("cart", __name__)

TEXT = {"Content-Type": "text/plain; charset=utf-8"}


@bp.post("/cart")
@login_required
def add_to_cart():
    """POST /api/cart - Add ``quantity`` of ``productId`` to the caller's cart."""
    data = get_payload()
    require_fields(data, ["productId", "quantity"], "Product and quantity are required.")
    product_id = positive_int(data["productId"], "productId")
    quantity = positive_int(data["quantity"], "quantity")

    try:
        queries.add_to_cart(current_identity().id, product_id, quantity)
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("Cart update error")
        raise StoreFailure("Failed to add to cart.")

    return "Added to cart", 200, TEXT


@bp.get("/cart")
@login_required
def get_cart():
    try:
        lines = queries.cart_lines(current_identity().id)
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("Cart load error")
        raise StoreFailure("Failed to load cart.")
    return jsonify(lines), 200


@bp.post("/checkout")
@login_required
def checkout():
    """POST /api/checkout - Empties the cart. No order, no payment."""
    identity = current_identity()
    try:
        removed = queries.clear_cart(identity.id)
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("Checkout error")
        raise StoreFailure("Checkout failed.")

    current_app.logger.info("Checkout for %s cleared %d lines", identity.username, removed)
    return "Order placed!", 200, TEXT
