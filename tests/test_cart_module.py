from decimal import Decimal

import pytest
from sqlalchemy.exc import SQLAlchemyError

from minishop.app.models import CartLine
from minishop.modules.cart import queries
from conftest import login, register


def add(client, product_id, quantity):
    return client.post("/api/cart", json={"productId": product_id, "quantity": quantity})


def test_add_to_cart_acknowledges_in_plain_text(auth_client):
    response = add(auth_client, 7, 2)

    assert response.status_code == 200
    assert response.mimetype == "text/plain"
    assert response.get_data(as_text=True) == "Added to cart"


def test_get_empty_cart(auth_client):
    response = auth_client.get("/api/cart")

    assert response.status_code == 200
    assert response.json == []


def test_cart_lines_join_product_details(auth_client):
    add(auth_client, 8, 1)

    [line] = auth_client.get("/api/cart").json

    assert line["id"] == 8
    assert line["name"] == "Canvas Tote Bag"
    assert Decimal(line["price"]) == Decimal("14.99")
    assert line["quantity"] == 1


def test_adding_same_product_accumulates_on_one_line(app, auth_client):
    add(auth_client, 7, 2)
    add(auth_client, 7, 3)

    cart = auth_client.get("/api/cart").json
    assert len(cart) == 1
    assert cart[0]["quantity"] == 5

    with app.app_context():
        assert CartLine.query.count() == 1


def test_quantity_may_be_sent_as_digit_string(auth_client):
    response = auth_client.post("/api/cart", data={"productId": "7", "quantity": "4"})

    assert response.status_code == 200
    assert auth_client.get("/api/cart").json[0]["quantity"] == 4


@pytest.mark.parametrize(
    "payload",
    [
        {"quantity": 1},
        {"productId": 7},
        {"productId": 7, "quantity": 0},
        {"productId": 7, "quantity": -2},
        {"productId": 7, "quantity": 2.5},
        {"productId": 7, "quantity": "two"},
        {"productId": 7, "quantity": True},
        {"productId": "x", "quantity": 1},
        {"productId": None, "quantity": 1},
        {"productId": 7, "quantity": 10**20},
        {"productId": 7, "quantity": 2**31},
        {"productId": 10**20, "quantity": 1},
        {"productId": "99999999999", "quantity": 1},
    ],
)
def test_add_rejects_bad_input(auth_client, payload):
    response = auth_client.post("/api/cart", json=payload)

    assert response.status_code == 400
    assert response.json["error"]["code"] == "validation_error"
    assert auth_client.get("/api/cart").json == []


def test_malformed_json_is_a_validation_error(auth_client):
    response = auth_client.post("/api/cart", data="[1, 2", content_type="application/json")
    assert response.status_code == 400


def test_unknown_product_is_accepted_but_not_listed(app, auth_client):
    response = add(auth_client, 999, 1)

    assert response.status_code == 200
    assert auth_client.get("/api/cart").json == []
    with app.app_context():
        assert CartLine.query.filter_by(product_id=999).count() == 1


def test_checkout_empties_cart(auth_client):
    add(auth_client, 7, 1)
    add(auth_client, 8, 2)

    response = auth_client.post("/api/checkout")

    assert response.status_code == 200
    assert response.get_data(as_text=True) == "Order placed!"
    assert auth_client.get("/api/cart").json == []


def test_checkout_with_empty_cart_is_fine(auth_client):
    assert auth_client.post("/api/checkout").status_code == 200


def test_carts_are_per_user(app, auth_client):
    add(auth_client, 7, 2)

    bob = app.test_client()
    register(bob, username="bob", email="b@x.com", password="pw2")
    login(bob, username="bob", password="pw2")
    add(bob, 7, 1)
    bob.post("/api/checkout")
    assert bob.get("/api/cart").json == []

    cart = auth_client.get("/api/cart").json
    assert cart[0]["quantity"] == 2


def test_anonymous_cart_access_is_unauthorized(client):
    assert add(client, 7, 1).status_code == 401
    assert client.get("/api/cart").status_code == 401
    assert client.post("/api/checkout").status_code == 401


def test_store_failure_is_reported_generically(auth_client, monkeypatch):
    def boom(*args, **kwargs):
        raise SQLAlchemyError("connection lost to db-host:5432")

    monkeypatch.setattr(queries, "cart_lines", boom)
    monkeypatch.setattr(queries, "add_to_cart", boom)
    monkeypatch.setattr(queries, "clear_cart", boom)

    for response, message in [
        (auth_client.get("/api/cart"), "Failed to load cart."),
        (add(auth_client, 7, 1), "Failed to add to cart."),
        (auth_client.post("/api/checkout"), "Checkout failed."),
    ]:
        assert response.status_code == 500
        assert response.json["error"]["code"] == "store_failure"
        assert response.json["error"]["message"] == message


def test_shopping_scenario(client):
    assert register(client).status_code == 302
    response = login(client)
    assert response.status_code == 302
    assert "minishop_session=" in response.headers["Set-Cookie"]

    assert add(client, 7, 2).status_code == 200
    assert add(client, 7, 3).status_code == 200

    [line] = client.get("/api/cart").json
    assert line["id"] == 7
    assert line["quantity"] == 5

    assert client.post("/api/checkout").status_code == 200
    assert client.get("/api/cart").json == []
