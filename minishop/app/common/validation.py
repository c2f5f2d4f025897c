from __future__ import annotations

from typing import Any, Dict, Iterable
from flask import request

from minishop.app.common.errors import ValidationFailed


def get_payload() -> Dict[str, Any]:
    """Request body as a dict, whether posted as JSON or as a form.

    The browser client posts ``FormData`` to ``/login`` and JSON to the cart
    API, so both are accepted everywhere.
    """
    if request.is_json:
        data = request.get_json(silent=True)
        if data is None or not isinstance(data, dict):
            raise ValidationFailed("Malformed JSON body")
        return data
    return request.form.to_dict()


def require_fields(data: Dict[str, Any], fields: Iterable[str], message: str) -> None:
    # Empty strings and nulls count as missing.
    missing = [f for f in fields if data.get(f) in (None, "")]
    if missing:
        raise ValidationFailed(message, {"missing": missing})


# Upper bound of the Integer columns the values are stored in.
MAX_INT = 2**31 - 1


def positive_int(value: Any, field: str) -> int:
    """Accept ints and digit strings in 1..MAX_INT; nothing else."""
    if isinstance(value, bool):
        raise ValidationFailed(f"{field} must be a positive integer")
    if isinstance(value, int):
        number = value
    elif isinstance(value, str) and value.strip().isdecimal():
        number = int(value.strip())
    else:
        raise ValidationFailed(f"{field} must be a positive integer")
    if number <= 0 or number > MAX_INT:
        raise ValidationFailed(f"{field} must be a positive integer")
    return number
