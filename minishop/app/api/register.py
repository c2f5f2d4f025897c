from flask import Flask

from minishop.modules.auth.routes import bp as auth_bp
from minishop.modules.catalog.routes import bp as catalog_bp
from minishop.modules.cart.routes import bp as cart_bp


def register_api_blueprints(app: Flask) -> None:
    # Auth owns both the form posts (/register, /login, /logout) and /api/me.
    app.register_blueprint(auth_bp)
    app.register_blueprint(catalog_bp, url_prefix="/api")
    app.register_blueprint(cart_bp, url_prefix="/api")

    # Root API document
    @app.get("/api")
    def api_index():
        return {
            "name": "minishop API",
            "version": "0.1.0",
            "endpoints": {
                "auth": ["/register", "/login", "/logout", "/api/me"],
                "catalog": ["/api/products"],
                "cart": ["/api/cart", "/api/checkout"],
            },
        }, 200
