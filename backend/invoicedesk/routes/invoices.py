# Overview: Flask API routes for invoices; parses input and returns JSON responses.

"""
Invoice routes. Invoices are never updated or deleted once written.
"""

from flask import Blueprint, request, jsonify, g

from ..decorators import require_auth
from ..services import document_service
from ..services.document_service import INVOICES, DocumentError
from ..validation import ValidationError, parse_id


invoices_bp = Blueprint("invoices", __name__, url_prefix="/api")


@invoices_bp.get("/invoice/last")
@require_auth
def last_invoice_route():
    """Number of the newest invoice, so clients can propose the next one."""
    invoice_no = document_service.last_document_no(INVOICES)
    if invoice_no is None:
        return jsonify(None)
    return jsonify({"invoice_no": invoice_no})


@invoices_bp.get("/invoices")
@require_auth
def list_invoices_route():
    return jsonify(document_service.list_with_customer(INVOICES))


@invoices_bp.get("/invoices/<invoice_id>")
@require_auth
def get_invoice_route(invoice_id: str):
    """Invoice with customer contact and line items, or null (also for non-numeric ids)."""
    try:
        parsed_id = parse_id(invoice_id)
    except ValidationError:
        return jsonify(None)
    return jsonify(document_service.get_with_line_items(INVOICES, parsed_id))


@invoices_bp.post("/invoices")
@require_auth
def create_invoice_route():
    """
    Create an invoice with its line items and decrement stock.

    Returns true on success and false when the invoice number is taken
    or the write fails.
    """
    try:
        document_service.create_document(
            INVOICES, request.get_json(silent=True), actor=g.current_user.username
        )
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    except DocumentError:
        return jsonify(False)
    return jsonify(True)
