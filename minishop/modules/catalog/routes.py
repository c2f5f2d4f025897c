from __future__ import annotations

from flask import Blueprint, current_app, jsonify
from sqlalchemy.exc import SQLAlchemyError

from minishop.app.extensions import db
from minishop.app.models import Product
from minishop.app.common.errors import StoreFailure

bp = Blueprint("catalog", __name__)


@bp.get("/products")
def list_products():
    """GET /api/products - Retrieve all products. No auth, no paging."""
    try:
        items = Product.query.order_by(Product.id.asc()).all()
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("Product load failed")
        raise StoreFailure("Failed to load products.")

    return jsonify([p.to_dict() for p in items]), 200
