# Overview: Flask API routes for user accounts; parses input and returns JSON responses.

"""
User management. Accounts are created and deleted; there is no update.
Listings never include password hashes.
"""

from flask import Blueprint, request, jsonify, g, current_app

from ..decorators import require_auth
from ..services import auth_service
from ..services.auth_service import UserError
from ..validation import ValidationError, parse_id


users_bp = Blueprint("users", __name__, url_prefix="/api/users")


@users_bp.get("")
@require_auth
def list_users_route():
    return jsonify(auth_service.list_users())


@users_bp.post("")
@require_auth
def create_user_route():
    """Create a user; false when the username is already taken."""
    try:
        auth_service.create_user(request.get_json(silent=True))
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    except UserError as e:
        current_app.logger.info("User not created: %s", e)
        return jsonify(False)
    return jsonify(True)


@users_bp.post("/delete")
@require_auth
def delete_user_route():
    data = request.get_json(silent=True) or {}
    try:
        user_id = parse_id(data.get("id"))
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    auth_service.delete_user(user_id, actor=g.current_user.username)
    return jsonify(True)
