"""Password hashing.

Digests are Werkzeug's self-describing ``method$salt$hash`` strings, so the
cost parameters travel with each stored value and can be raised later
without invalidating existing users.
"""

from __future__ import annotations

from flask import current_app
from werkzeug.security import check_password_hash, generate_password_hash

DEFAULT_METHOD = "scrypt:32768:8:1"
DEFAULT_SALT_LENGTH = 16


def hash_password(plain: str) -> str:
    if not plain:
        raise ValueError("Password must not be empty")
    method = current_app.config.get("PASSWORD_HASH_METHOD", DEFAULT_METHOD)
    salt_length = current_app.config.get("PASSWORD_SALT_LENGTH", DEFAULT_SALT_LENGTH)
    return generate_password_hash(plain, method=method, salt_length=salt_length)


def verify_password(digest: str, plain: str) -> bool:
    if not digest or not plain:
        return False
    try:
        return check_password_hash(digest, plain)
    except ValueError:
        # Unknown or corrupt method prefix in the stored digest
        return False
