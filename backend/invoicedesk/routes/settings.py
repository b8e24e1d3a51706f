# Overview: Flask API routes for company settings; parses input and returns JSON responses.

from flask import Blueprint, request, jsonify

from ..decorators import require_auth
from ..services import settings_service
from ..validation import ValidationError


settings_bp = Blueprint("settings", __name__, url_prefix="/api/settings")


@settings_bp.get("")
@require_auth
def get_settings_route():
    """The saved settings, or {} before the first save."""
    return jsonify(settings_service.get_settings())


@settings_bp.post("")
@require_auth
def replace_settings_route():
    try:
        settings_service.replace_settings(request.get_json(silent=True))
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    return jsonify(True)
