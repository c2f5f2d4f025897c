import pytest

from minishop.app.extensions import db
from minishop.app.factory import create_app
from minishop.app.models import Product
from conftest import ConfigForTests


def test_seed_skips_existing_catalog(app):
    result = app.test_cli_runner().invoke(args=["seed"])

    assert result.exit_code == 0
    assert "already exist" in result.output
    with app.app_context():
        assert Product.query.count() == 2


def test_seed_fills_empty_catalog(app):
    with app.app_context():
        Product.query.delete()
        db.session.commit()

    result = app.test_cli_runner().invoke(args=["seed"])

    assert result.exit_code == 0
    with app.app_context():
        assert Product.query.count() > 0
        assert all(p.price >= 0 for p in Product.query.all())


class UnreachableStoreConfig(ConfigForTests):
    SQLALCHEMY_DATABASE_URI = "sqlite:////nonexistent-dir/minishop.db"


def test_unreachable_store_at_startup_exits():
    with pytest.raises(SystemExit) as exc:
        create_app(UnreachableStoreConfig)
    assert exc.value.code == 1


def test_startup_check_can_be_disabled():
    class NoCheck(UnreachableStoreConfig):
        VERIFY_STORE_ON_STARTUP = False

    app = create_app(NoCheck)
    assert app.config["VERIFY_STORE_ON_STARTUP"] is False
