# Overview: Flask API routes for customers; parses input and returns JSON responses.

"""
Customer routes. There is no update route: customers are
created and deleted only.
"""

from flask import Blueprint, request, jsonify

from ..decorators import require_auth
from ..services import customer_service
from ..validation import ValidationError, parse_id


customers_bp = Blueprint("customers", __name__, url_prefix="/api/customers")


@customers_bp.get("")
@require_auth
def list_customers_route():
    return jsonify(customer_service.list_customers())


@customers_bp.post("")
@require_auth
def create_customer_route():
    try:
        customer = customer_service.create_customer(request.get_json(silent=True))
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    return jsonify({"id": customer.id})


@customers_bp.post("/delete")
@require_auth
def delete_customer_route():
    data = request.get_json(silent=True) or {}
    try:
        customer_id = parse_id(data.get("id"))
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    customer_service.delete_customer(customer_id)
    return jsonify(True)
