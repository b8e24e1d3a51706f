from flask import Blueprint, jsonify

from ..decorators import require_auth
from ..services import dashboard_service


dashboard_bp = Blueprint("dashboard", __name__, url_prefix="/api")


@dashboard_bp.get("/dashboard")
@require_auth
def dashboard_route():
    return jsonify(dashboard_service.summary())
