from __future__ import annotations

from decimal import Decimal

import click
from flask import Blueprint

from minishop.app.extensions import db
from minishop.app.models import Product

cli_bp = Blueprint("cli", __name__, cli_group=None)

DEMO_PRODUCTS = [
    ("Canvas Tote Bag", Decimal("14.99"), None),
    ("Ceramic Mug", Decimal("9.50"), None),
    ("Notebook (A5, dotted)", Decimal("6.25"), None),
    ("Desk Plant", Decimal("19.00"), None),
]


@cli_bp.cli.command("init-db")
def init_db() -> None:
    """Create tables."""
    db.create_all()
    click.echo("DB initialized (tables created).")


@cli_bp.cli.command("seed")
def seed_data() -> None:
    """Seed demo products.

    Safe to run multiple times; it will no-op if products exist.
    """
    db.create_all()
    if Product.query.count() > 0:
        click.echo("Products already exist, nothing to seed.")
        return

    db.session.add_all(
        [Product(name=name, price=price, image_url=image_url) for name, price, image_url in DEMO_PRODUCTS]
    )
    db.session.commit()
    click.echo(f"Seeded {len(DEMO_PRODUCTS)} products.")

