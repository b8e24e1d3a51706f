# Overview: Flask API routes for items; parses input and returns JSON responses.

from flask import Blueprint, request, jsonify, g

from ..decorators import require_auth
from ..services import item_service
from ..validation import ValidationError, parse_id


items_bp = Blueprint("items", __name__, url_prefix="/api/items")


@items_bp.get("")
@require_auth
def list_items_route():
    """All items, newest first."""
    return jsonify(item_service.list_items())


@items_bp.post("")
@require_auth
def create_item_route():
    """Create an item; returns {"id": <new id>}."""
    try:
        item = item_service.create_item(request.get_json(silent=True))
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    return jsonify({"id": item.id})


@items_bp.post("/update")
@require_auth
def update_item_route():
    """Overwrite an item's fields; body carries the id."""
    data = request.get_json(silent=True) or {}
    try:
        item_id = parse_id(data.get("id"))
        item_service.update_item(item_id, data)
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    return jsonify(True)


@items_bp.post("/delete")
@require_auth
def delete_item_route():
    """Delete an item; reports success even if the id did not exist."""
    data = request.get_json(silent=True) or {}
    try:
        item_id = parse_id(data.get("id"))
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    item_service.delete_item(item_id, actor=g.current_user.username)
    return jsonify(True)
