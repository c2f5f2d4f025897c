from __future__ import annotations

from flask import Blueprint, current_app, redirect
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from minishop.app.extensions import db
from minishop.app.models import User
from minishop.app.common.auth import (
    HOME_PAGE,
    LOGIN_PAGE,
    clear_session_cookie,
    current_identity,
    get_session_manager,
    login_required,
    session_token,
    set_session_cookie,
)
from minishop.app.common.errors import Conflict, StoreFailure, Unauthorized
from minishop.app.common.passwords import hash_password, verify_password
from minishop.app.common.validation import get_payload, require_fields

bp = Blueprint("auth", __name__)

# One message for both unknown user and wrong password.
INVALID_CREDENTIALS = "Invalid username or password."
TAKEN = "Username or email is already taken."


@bp.post("/register")
def register():
    """POST /register - Create an account, then send the browser to login."""
    data = get_payload()
    username = str(data.get("username") or "").strip()
    email = str(data.get("email") or "").strip()
    password = str(data.get("password") or "")
    require_fields(
        {"username": username, "email": email, "password": password},
        ["username", "email", "password"],
        "All fields are required.",
    )

    try:
        taken = User.query.filter(or_(User.username == username, User.email == email)).first() is not None
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("Registration lookup failed")
        raise StoreFailure("Registration failed due to database error.")
    if taken:
        raise Conflict(TAKEN)

    try:
        db.session.add(User(username=username, email=email, password=hash_password(password)))
        db.session.commit()
    except ValueError:
        # PASSWORD_HASH_METHOD names a method Werkzeug does not know.
        db.session.rollback()
        current_app.logger.exception("Password hashing failed")
        raise StoreFailure("Registration failed.")
    except IntegrityError:
        # Lost a race with a concurrent registration of the same name or email.
        db.session.rollback()
        raise Conflict(TAKEN)
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("Registration insert failed")
        raise StoreFailure("Registration failed.")

    current_app.logger.info("Registered user %s", username)
    return redirect(LOGIN_PAGE)


@bp.post("/login")
def login():
    """POST /login - Check credentials and start a session."""
    data = get_payload()
    username = str(data.get("username") or "").strip()
    password = str(data.get("password") or "")
    require_fields(
        {"username": username, "password": password},
        ["username", "password"],
        "Username and password are required.",
    )

    try:
        user = User.query.filter_by(username=username).first()
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("Login lookup failed")
        raise StoreFailure("Login failed.")

    if user is None or not verify_password(user.password, password):
        current_app.logger.info("Failed login for %s", username)
        raise Unauthorized(INVALID_CREDENTIALS)

    sessions = get_session_manager()
    # Never reuse a token that existed before authentication.
    sessions.destroy_session(session_token())
    token = sessions.create_session(user)

    current_app.logger.info("User %s logged in", user.username)
    return set_session_cookie(redirect(HOME_PAGE), token)


@bp.get("/logout")
def logout():
    """GET /logout - Drop the session whether or not one exists."""
    identity = current_identity()
    get_session_manager().destroy_session(session_token())
    if identity is not None:
        current_app.logger.info("User %s logged out", identity.username)
    return clear_session_cookie(redirect(LOGIN_PAGE))


@bp.get("/api/me")
@login_required
def me():
    """GET /api/me - Identity captured at login."""
    return current_identity().to_dict(), 200
