# Overview: Flask API routes for quotations; parses input and returns JSON responses.

from flask import Blueprint, request, jsonify, g

from ..decorators import require_auth
from ..services import document_service
from ..services.document_service import QUOTATIONS, DocumentError
from ..validation import ValidationError, parse_id


quotations_bp = Blueprint("quotations", __name__, url_prefix="/api/quotations")


@quotations_bp.get("")
@require_auth
def list_quotations_route():
    return jsonify(document_service.list_with_customer(QUOTATIONS))


@quotations_bp.get("/<quotation_id>")
@require_auth
def get_quotation_route(quotation_id: str):
    try:
        parsed_id = parse_id(quotation_id)
    except ValidationError:
        return jsonify(None)
    return jsonify(document_service.get_with_line_items(QUOTATIONS, parsed_id))


@quotations_bp.post("")
@require_auth
def create_quotation_route():
    """Create a quotation with its line items; stock is not touched."""
    try:
        document_service.create_document(
            QUOTATIONS, request.get_json(silent=True), actor=g.current_user.username
        )
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    except DocumentError:
        return jsonify(False)
    return jsonify(True)


@quotations_bp.post("/delete")
@require_auth
def delete_quotation_route():
    """Delete a quotation's line items, then the quotation."""
    data = request.get_json(silent=True) or {}
    try:
        quotation_id = parse_id(data.get("id"))
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    document_service.delete_document(QUOTATIONS, quotation_id)
    return jsonify(True)
