from collections.abc import Callable
from functools import wraps
from typing import Any

from flask import current_app, request


class AuthorizationError(Exception):
    pass


def admin_password_matches(password: Any) -> bool:
    # Plain equality against the single configured secret.
    return isinstance(password, str) and password == current_app.config["ADMIN_PASSWORD"]


def require_admin_password(fn: Callable[..., Any]) -> Callable[..., Any]:
    """
    Reject the request unless the JSON body carries the admin password.
    The wrapped handler (and so the store) is never reached on failure.
    """

    @wraps(fn)
    def wrapped(*args: Any, **kwargs: Any):
        data = request.get_json(silent=True)
        password = data.get("password") if isinstance(data, dict) else None
        if not admin_password_matches(password):
            current_app.logger.warning(
                "Rejected admin request: endpoint=%s ip=%s", request.endpoint, request.remote_addr
            )
            raise AuthorizationError("Incorrect password")
        return fn(*args, **kwargs)

    return wrapped
