from __future__ import annotations

from sqlalchemy.orm import declared_attr

from ..extensions import db


class DocumentHeaderMixin:
    """
    Columns shared by invoices and quotations.

    All money fields are stored as sent by the client; nothing is
    recomputed server-side.
    """
    number_field = ""

    id = db.Column(db.Integer, primary_key=True)
    date = db.Column(db.Text)
    subtotal = db.Column(db.Float)
    discount_percent = db.Column(db.Float)
    discount_amount = db.Column(db.Float)
    tax_percent = db.Column(db.Float, server_default=db.text("0"))
    service_charge = db.Column(db.Float, server_default=db.text("0"))
    grand_total = db.Column(db.Float)

    @declared_attr
    def customer_id(cls):
        return db.Column(db.Integer, db.ForeignKey("customers.id"))

    @property
    def document_no(self) -> str | None:
        return getattr(self, self.number_field)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            self.number_field: self.document_no,
            "customer_id": self.customer_id,
            "date": self.date,
            "subtotal": self.subtotal,
            "discount_percent": self.discount_percent,
            "discount_amount": self.discount_amount,
            "tax_percent": self.tax_percent,
            "service_charge": self.service_charge,
            "grand_total": self.grand_total,
        }


class DocumentLineMixin:
    """
    Line columns shared by invoice and quotation lines.

    item_name is a copy taken at creation time, not a link to items, so
    renaming or deleting an item leaves history untouched.
    """
    parent_field = ""

    id = db.Column(db.Integer, primary_key=True)
    item_name = db.Column(db.Text)
    description = db.Column(db.Text)
    qty = db.Column(db.Integer)
    price = db.Column(db.Float)
    total = db.Column(db.Float)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            self.parent_field: getattr(self, self.parent_field),
            "item_name": self.item_name,
            "description": self.description,
            "qty": self.qty,
            "price": self.price,
            "total": self.total,
        }


class Invoice(DocumentHeaderMixin, db.Model):
    __tablename__ = "invoices"
    __table_args__ = {"sqlite_autoincrement": True}
    number_field = "invoice_no"

    invoice_no = db.Column(db.Text, unique=True)


class InvoiceItem(DocumentLineMixin, db.Model):
    __tablename__ = "invoice_items"
    __table_args__ = {"sqlite_autoincrement": True}
    parent_field = "invoice_id"

    invoice_id = db.Column(db.Integer, db.ForeignKey("invoices.id"), index=True)


class Quotation(DocumentHeaderMixin, db.Model):
    __tablename__ = "quotations"
    __table_args__ = {"sqlite_autoincrement": True}
    number_field = "quotation_no"

    quotation_no = db.Column(db.Text, unique=True)


class QuotationItem(DocumentLineMixin, db.Model):
    __tablename__ = "quotation_items"
    __table_args__ = {"sqlite_autoincrement": True}
    parent_field = "quotation_id"

    quotation_id = db.Column(db.Integer, db.ForeignKey("quotations.id"), index=True)
