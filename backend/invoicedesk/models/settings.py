from __future__ import annotations

from ..extensions import db


class CompanySettings(db.Model):
    """
    Company letterhead shown on printed documents.

    Singleton by convention: writes replace the whole table, so at most one
    row exists.
    """
    __tablename__ = "company_settings"
    __table_args__ = {"sqlite_autoincrement": True}

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.Text)
    address = db.Column(db.Text)
    phone = db.Column(db.Text)
    email = db.Column(db.Text)
    logo = db.Column(db.Text)  # data URL or path, stored opaque
    prevent_negative = db.Column(db.Boolean, server_default=db.text("0"))

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "address": self.address,
            "phone": self.phone,
            "email": self.email,
            "logo": self.logo,
            "prevent_negative": bool(self.prevent_negative),
        }
