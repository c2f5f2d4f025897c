from decimal import Decimal

import pytest

from minishop.app.config import Config
from minishop.app.extensions import db
from minishop.app.factory import create_app
from minishop.app.models import Product


class ConfigForTests(Config):
    TESTING = True
    SECRET_KEY = "test-secret"
    # Use SQLite in tests for simplicity.
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    # Cheap hashing keeps the suite fast; production cost comes from Config.
    PASSWORD_HASH_METHOD = "pbkdf2:sha256:1000"


@pytest.fixture()
def app():
    app = create_app(ConfigForTests)

    with app.app_context():
        db.create_all()
        db.session.add_all([
            Product(id=7, name="Ceramic Mug", price=Decimal("9.50")),
            Product(id=8, name="Canvas Tote Bag", price=Decimal("14.99"), image_url="/static/tote.png"),
        ])
        db.session.commit()

    yield app

    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    with app.test_client() as client:
        yield client


def register(client, username="alice", email="a@x.com", password="pw1"):
    return client.post("/register", data={"username": username, "email": email, "password": password})


def login(client, username="alice", password="pw1"):
    return client.post("/login", data={"username": username, "password": password})


@pytest.fixture()
def auth_client(client):
    """A client with a registered and logged-in ``alice``."""
    register(client)
    response = login(client)
    assert response.status_code == 302
    return client
