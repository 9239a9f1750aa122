"""HTTP Basic gate for the admin panel. No sessions, credentials are checked on every request."""

import hmac
from typing import Optional

from flask import Response
from werkzeug.datastructures import Authorization


def _same(given: Optional[str], expected: str) -> bool:
    return hmac.compare_digest((given or "").encode(), expected.encode())


def check_basic_auth(auth: Optional[Authorization], username: str, password: str) -> bool:
    if auth is None or auth.type != "basic":
        return False
    # An unset password must never match an empty one
    if not username or not password:
        return False
    user_ok = _same(auth.username, username)
    pass_ok = _same(auth.password, password)
    return user_ok and pass_ok


def check_password(given: Optional[str], password: str) -> bool:
    """Second confirmation used by destructive admin actions."""
    return bool(password) and isinstance(given, str) and _same(given, password)


def unauthorized_response() -> Response:
    return Response(
        "Unauthorized",
        status=401,
        headers={"WWW-Authenticate": 'Basic realm="Admin Panel", charset="UTF-8"'},
    )
