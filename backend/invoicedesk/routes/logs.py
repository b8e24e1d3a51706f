from flask import Blueprint, jsonify

from ..decorators import require_auth
from ..services import activity_service


logs_bp = Blueprint("logs", __name__, url_prefix="/api")


@logs_bp.get("/logs")
@require_auth
def list_logs_route():
    """Latest activity entries, newest first."""
    return jsonify(activity_service.list_entries())
