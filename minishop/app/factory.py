from __future__ import annotations

import logging
from typing import Optional

from flask import Flask, g, jsonify
from werkzeug.exceptions import HTTPException

from minishop.app.config import Config
from minishop.app.extensions import db, migrate, cors, verify_store_connection
from minishop.app.common.auth import EXTENSION_KEY, load_identity
from minishop.app.common.errors import ApiError
from minishop.app.common.request_context import echo_request_id, init_request_id
from minishop.app.common.sessions import SessionManager, SessionStore
from minishop.app.api.register import register_api_blueprints
from minishop.app.cli import cli_bp
from minishop.app.ui import ui_bp


def create_app(
    config_object: type[Config] = Config,
    session_store: Optional[SessionStore] = None,
) -> Flask:
    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(config_object)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")

    # Extensions
    db.init_app(app)
    migrate.init_app(app, db)
    cors.init_app(app, resources={r"/api/*": {"origins": app.config.get("CORS_ORIGINS") or "*"}})

    app.extensions[EXTENSION_KEY] = SessionManager(
        store=session_store,
        lifetime_seconds=app.config["SESSION_LIFETIME_SECONDS"],
    )

    if app.config.get("VERIFY_STORE_ON_STARTUP", True):
        with app.app_context():
            verify_store_connection()

    # Request id first, then identity; guards read g.identity.
    @app.before_request
    def _before_request():
        init_request_id()
        load_identity()

    @app.after_request
    def _after_request(response):
        return echo_request_id(response)

    @app.get("/health")
    def health():
        return {"status": "ok"}, 200

    register_api_blueprints(app)
    app.register_blueprint(ui_bp)

    # CLI (flask init-db / seed / purge-sessions)
    app.register_blueprint(cli_bp)

    # Error handlers
    @app.errorhandler(ApiError)
    def handle_api_error(err: ApiError):
        return jsonify(err.to_dict(g.get("request_id"))), err.status_code

    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        # Normalize Werkzeug errors into our JSON shape
        payload = {
            "error": {
                "code": "http_error",
                "message": err.description,
                "details": {"name": err.name},
                "request_id": g.get("request_id"),
            }
        }
        return jsonify(payload), err.code or 500

    @app.errorhandler(Exception)
    def handle_unexpected(err: Exception):
        app.logger.exception("Unhandled exception")
        payload = {
            "error": {
                "code": "internal_error",
                "message": "Internal server error",
                "details": {},
                "request_id": g.get("request_id"),
            }
        }
        return jsonify(payload), 500

    return app
