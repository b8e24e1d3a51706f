# Overview: Service-layer operations for customers; encapsulates business logic and database work.

from __future__ import annotations

from ..extensions import db
from ..models import Customer
from ..validation import ModelValidationPolicy, validate_payload


CUSTOMER_POLICY = ModelValidationPolicy(
    writable_fields=frozenset({"name", "phone", "email", "address"}),
)


def list_customers() -> list[dict]:
    """Newest customers first."""
    customers = db.session.query(Customer).order_by(Customer.id.desc()).all()
    return [c.to_dict() for c in customers]


def create_customer(payload: dict | None) -> Customer:
    data = validate_payload(model=Customer, payload=payload, policy=CUSTOMER_POLICY, partial=False)
    customer = Customer(**data)
    db.session.add(customer)
    db.session.commit()
    return customer


def delete_customer(customer_id) -> None:
    """
    Delete by id. No existence check and no activity entry.

    Documents keep their customer_id; list joins then report a null name.
    """
    db.session.query(Customer).filter(Customer.id == customer_id).delete()
    db.session.commit()
