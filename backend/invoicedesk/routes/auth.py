# Overview: Flask API routes for login/logout; parses input and returns JSON responses.

"""
Session login and logout.

A wrong username or password is not an HTTP error: the route answers 200
with {"success": false} and callers branch on the flag.
"""

from flask import Blueprint, request, jsonify, current_app

from ..services import auth_service
from ..services import session_service


auth_bp = Blueprint("auth", __name__, url_prefix="/api")


@auth_bp.post("/login")
def login_route():
    """
    Authenticate and attach the user to the session.

    Accepts {"username", "password"} and the older {"user", "pass"} keys.
    Anything that is not a pair of strings is a failed login.
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}
    username = data.get("username") or data.get("user")
    password = data.get("password")
    if password is None:
        password = data.get("pass")

    user = auth_service.authenticate(username, password)
    if not user:
        current_app.logger.info("Failed login for %r", username)
        return jsonify({"success": False})

    principal = session_service.attach_principal(user)
    return jsonify({
        "success": True,
        "role": principal.role,
        "username": principal.username,
        "permissions": principal.permissions,
    })


@auth_bp.post("/logout")
def logout_route():
    """Destroy the session unconditionally."""
    session_service.destroy_session()
    return jsonify({"success": True})
