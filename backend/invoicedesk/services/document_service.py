# Overview: Service-layer operations for invoices and quotations; header + line items as one unit.

"""
Invoices and quotations share one shape: a header row, a set of line rows
that point back at it, and a left join to the customer for display.

Creation writes the header, its lines and (invoices only) the stock
decrements inside one transaction. A duplicate document number fails the
header insert, the transaction rolls back, and no line or stock change is
left behind. The activity entry is written after the commit.
"""

from __future__ import annotations

from dataclasses import dataclass

from flask import current_app
from sqlalchemy import update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from ..errors import ErrorKind, ServiceError
from ..extensions import db
from ..models import Customer, Invoice, InvoiceItem, Item, Quotation, QuotationItem
from ..validation import ModelValidationPolicy, ValidationError, validate_payload
from . import activity_service


class DocumentError(ServiceError):
    """Raised when a document cannot be created or removed."""


@dataclass(frozen=True)
class DocumentKind:
    """Wiring for one document family."""
    name: str
    header: type
    line: type
    number_field: str
    parent_field: str
    adjusts_stock: bool
    create_action: str

    @property
    def parent_column(self):
        return getattr(self.line, self.parent_field)


INVOICES = DocumentKind(
    name="invoice",
    header=Invoice,
    line=InvoiceItem,
    number_field="invoice_no",
    parent_field="invoice_id",
    adjusts_stock=True,
    create_action="Create Invoice",
)

QUOTATIONS = DocumentKind(
    name="quotation",
    header=Quotation,
    line=QuotationItem,
    number_field="quotation_no",
    parent_field="quotation_id",
    adjusts_stock=False,
    create_action="Create Quotation",
)

_HEADER_FIELDS = frozenset({
    "customer_id", "date", "subtotal", "discount_percent", "discount_amount",
    "tax_percent", "service_charge", "grand_total",
})

_HEADER_ALIASES = {
    "tax": "tax_percent",
    "service": "service_charge",
}

LINE_POLICY = ModelValidationPolicy(
    writable_fields=frozenset({"item_name", "description", "qty", "price", "total"}),
    aliases={"name": "item_name", "desc": "description"},
)


def _header_policy(kind: DocumentKind) -> ModelValidationPolicy:
    return ModelValidationPolicy(
        writable_fields=_HEADER_FIELDS | {kind.number_field},
        aliases={**_HEADER_ALIASES, "document_no": kind.number_field},
        defaults={"tax_percent": 0.0, "service_charge": 0.0},
    )


def _line_item_ref(line: dict) -> int | None:
    """Item id a line points at ("item_id", or the legacy "id"), if any."""
    ref = line.get("item_id", line.get("id"))
    if ref in (None, "", 0, False):
        return None
    try:
        return int(ref)
    except (TypeError, ValueError):
        raise ValidationError("line item id must be an integer")


def list_with_customer(kind: DocumentKind) -> list[dict]:
    """All documents, newest first, with the customer's name (or None)."""
    header = kind.header
    rows = (
        db.session.query(header, Customer.name)
        .outerjoin(Customer, header.customer_id == Customer.id)
        .order_by(header.id.desc())
        .all()
    )
    result = []
    for doc, customer_name in rows:
        data = doc.to_dict()
        data["customer_name"] = customer_name
        result.append(data)
    return result


def get_with_line_items(kind: DocumentKind, document_id) -> dict | None:
    """
    Header joined to the customer's name, phone and address, plus its lines.

    Returns None when the header does not exist; lines are only fetched
    for an existing header.
    """
    header = kind.header
    row = (
        db.session.query(header, Customer.name, Customer.phone, Customer.address)
        .outerjoin(Customer, header.customer_id == Customer.id)
        .filter(header.id == document_id)
        .first()
    )
    if row is None:
        return None

    doc, customer_name, phone, address = row
    data = doc.to_dict()
    data.update({"customer_name": customer_name, "phone": phone, "address": address})

    lines = (
        db.session.query(kind.line)
        .filter(kind.parent_column == doc.id)
        .order_by(kind.line.id.asc())
        .all()
    )
    data["items"] = [line.to_dict() for line in lines]
    return data


def last_document_no(kind: DocumentKind) -> str | None:
    """Number of the most recently created document, if any."""
    header = kind.header
    row = (
        db.session.query(getattr(header, kind.number_field))
        .order_by(header.id.desc())
        .first()
    )
    return row[0] if row else None


def create_document(kind: DocumentKind, payload: dict | None, actor: str | None):
    """
    Create a document with its line items.

    Steps, all in one transaction:
    1. insert the header (duplicate number -> DocumentError, nothing written)
    2. insert each line pointing at the new header
    3. invoices only: stock -= qty for every line that references an item
       (no floor at zero, no existence re-check)
    Then an activity entry names the actor and the document number.

    Totals are stored exactly as supplied by the client.
    """
    header_data = validate_payload(
        model=kind.header, payload=payload, policy=_header_policy(kind), partial=False
    )
    raw_lines = (payload or {}).get("items") or []
    if not isinstance(raw_lines, list):
        raise ValidationError("items must be a list")

    lines = []
    for raw in raw_lines:
        if not isinstance(raw, dict):
            raise ValidationError("each line item must be an object")
        line_data = validate_payload(model=kind.line, payload=raw, policy=LINE_POLICY, partial=False)
        lines.append((line_data, _line_item_ref(raw)))

    try:
        doc = kind.header(**header_data)
        db.session.add(doc)
        try:
            db.session.flush()
        except IntegrityError:
            raise DocumentError(
                f"Duplicate {kind.name} number {header_data.get(kind.number_field)!r}",
                ErrorKind.CONSTRAINT_VIOLATION,
            )

        for line_data, item_id in lines:
            db.session.add(kind.line(**line_data, **{kind.parent_field: doc.id}))
            if kind.adjusts_stock and item_id is not None:
                db.session.execute(
                    update(Item)
                    .where(Item.id == item_id)
                    .values(stock=Item.stock - (line_data.get("qty") or 0))
                )

        db.session.commit()
    except DocumentError:
        db.session.rollback()
        raise
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("Failed to create %s", kind.name)
        raise DocumentError(f"Could not create {kind.name}", ErrorKind.CONSTRAINT_VIOLATION)

    activity_service.record(actor, kind.create_action, f"#{doc.document_no}")
    return doc


def delete_document(kind: DocumentKind, document_id) -> None:
    """
    Remove the line items first, then the header, as one unit.

    Only quotations are deletable; invoices stay for the audit trail.
    """
    if kind is not QUOTATIONS:
        raise DocumentError(f"{kind.name}s cannot be deleted", ErrorKind.VALIDATION)

    try:
        db.session.query(kind.line).filter(kind.parent_column == document_id).delete(
            synchronize_session=False
        )
        db.session.query(kind.header).filter(kind.header.id == document_id).delete(
            synchronize_session=False
        )
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        raise
