"""Static HTML pages.

The pages are served verbatim; all data arrives through the JSON API.
Pages behind the login redirect anonymous visitors to ``/login.html``.
"""

from pathlib import Path

from flask import Blueprint, redirect, send_from_directory

from minishop.app.common.auth import LOGIN_PAGE, page_login_required

PAGES_DIR = Path(__file__).resolve().parent / "pages"

ui_bp = Blueprint("ui", __name__)


def _page(name: str):
    return send_from_directory(PAGES_DIR, name, mimetype="text/html")


@ui_bp.get("/")
def index():
    return redirect(LOGIN_PAGE)

@ui_bp.get("/login.html")
def login_page():
    return _page("login.html")

@ui_bp.get("/register.html")
def register_page():
    return _page("register.html")

@ui_bp.get("/home.html")
@page_login_required
def home_page():
    return _page("home.html")

@ui_bp.get("/products.html")
@page_login_required
def products_page():
    return _page("products.html")

@ui_bp.get("/cart.html")
@page_login_required
def cart_page():
    return _page("cart.html")
