from decimal import Decimal

from minishop.app.extensions import db


def test_products_need_no_session(client):
    response = client.get("/api/products")

    assert response.status_code == 200
    assert [p["id"] for p in response.json] == [7, 8]


def test_product_shape(client):
    mug, tote = client.get("/api/products").json

    assert set(mug) == {"id", "name", "price", "image_url"}
    assert mug["name"] == "Ceramic Mug"
    assert Decimal(mug["price"]) == Decimal("9.50")
    assert mug["image_url"] is None
    assert tote["image_url"] == "/static/tote.png"


def test_products_store_failure(app, client):
    with app.app_context():
        db.session.execute(db.text("DROP TABLE products"))
        db.session.commit()

    response = client.get("/api/products")

    assert response.status_code == 500
    assert response.json["error"]["message"] == "Failed to load products."
