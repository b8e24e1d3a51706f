# Overview: Request decorators for API routes.

from functools import wraps
from flask import jsonify, g

from .services import session_service


def require_auth(f):
    """
    Require a logged-in principal on the session.

    Sets g.current_user to the session Principal. Returns 401 before any
    handler logic runs when the session has none.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        principal = session_service.current_principal()

        if principal is None:
            return jsonify({"error": "Unauthorized"}), 401

        g.current_user = principal
        return f(*args, **kwargs)

    return decorated_function
