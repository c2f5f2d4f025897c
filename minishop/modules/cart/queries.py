"""Cart statements.

Each operation here is exactly one SQL statement so concurrent requests
from the same user (two tabs) cannot lose an update.
"""

from __future__ import annotations

from typing import Any, Dict, List

from sqlalchemy import select
from sqlalchemy.dialects import mysql, postgresql, sqlite

from minishop.app.extensions import db
from minishop.app.models import CartLine, Product


def _upsert_statement(dialect: str, values: Dict[str, int]):
    if dialect in ("mysql", "mariadb"):
        stmt = mysql.insert(CartLine).values(**values)
        return stmt.on_duplicate_key_update(quantity=CartLine.quantity + stmt.inserted.quantity)

    if dialect == "postgresql":
        stmt = postgresql.insert(CartLine).values(**values)
    elif dialect == "sqlite":
        stmt = sqlite.insert(CartLine).values(**values)
    else:
        raise NotImplementedError(f"No cart upsert for dialect {dialect!r}")
    return stmt.on_conflict_do_update(
        index_elements=["user_id", "product_id"],
        set_={"quantity": CartLine.quantity + stmt.excluded.quantity},
    )


def add_to_cart(user_id: int, product_id: int, quantity: int) -> None:
    """Create the (user, product) line, or add ``quantity`` to the existing one."""
    values = {"user_id": user_id, "product_id": product_id, "quantity": quantity}
    db.session.execute(_upsert_statement(db.engine.dialect.name, values))
    db.session.commit()


def cart_lines(user_id: int) -> List[Dict[str, Any]]:
    stmt = (
        select(Product.id, Product.name, Product.price, CartLine.quantity)
        .select_from(CartLine)
        .join(Product, Product.id == CartLine.product_id)
        .where(CartLine.user_id == user_id)
        .order_by(Product.id.asc())
    )
    return [dict(row._mapping) for row in db.session.execute(stmt)]


def clear_cart(user_id: int) -> int:
    deleted = CartLine.query.filter_by(user_id=user_id).delete()
    db.session.commit()
    return deleted
