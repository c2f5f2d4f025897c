"""Session-based access guard.

``load_identity`` runs before every request and puts the resolved
:class:`Identity` (or None) on ``g.identity``. The two decorators then
gate views: API views answer 401 JSON, page views redirect to the login
page.
"""

from functools import wraps
from typing import Callable, TypeVar, Any, Optional

from flask import Response, current_app, g, redirect, request

from minishop.app.common.errors import Unauthorized
from minishop.app.common.sessions import Identity, SessionManager

F = TypeVar("F", bound=Callable[..., Any])

EXTENSION_KEY = "minishop.sessions"
LOGIN_PAGE = "/login.html"
HOME_PAGE = "/home.html"


def get_session_manager() -> SessionManager:
    return current_app.extensions[EXTENSION_KEY]


def session_token() -> Optional[str]:
    return request.cookies.get(current_app.config["AUTH_COOKIE_NAME"])


def load_identity() -> None:
    g.identity = get_session_manager().resolve_session(session_token())


def current_identity() -> Optional[Identity]:
    return g.get("identity")


def set_session_cookie(response: Response, token: str) -> Response:
    config = current_app.config
    response.set_cookie(
        config["AUTH_COOKIE_NAME"],
        token,
        max_age=config["SESSION_LIFETIME_SECONDS"],
        httponly=True,
        samesite="Strict",
        secure=config["AUTH_COOKIE_SECURE"],
    )
    return response


def clear_session_cookie(response: Response) -> Response:
    config = current_app.config
    response.delete_cookie(
        config["AUTH_COOKIE_NAME"],
        httponly=True,
        samesite="Strict",
        secure=config["AUTH_COOKIE_SECURE"],
    )
    return response


def login_required(fn: F) -> F:
    @wraps(fn)
    def wrapper(*args, **kwargs):
        if current_identity() is None:
            current_app.logger.info("Access denied (api): %s", request.path)
            raise Unauthorized()
        return fn(*args, **kwargs)

    return wrapper  # type: ignore


def page_login_required(fn: F) -> F:
    @wraps(fn)
    def wrapper(*args, **kwargs):
        if current_identity() is None:
            current_app.logger.info("Access denied (page): %s", request.path)
            return redirect(LOGIN_PAGE)
        return fn(*args, **kwargs)

    return wrapper  # type: ignore
