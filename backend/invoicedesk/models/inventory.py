from __future__ import annotations

from ..extensions import db


class Item(db.Model):
    """
    Sellable item with a running stock count.

    Stock only moves when an invoice is created and is never clamped at
    zero; overselling shows up as a negative count.
    """
    __tablename__ = "items"
    __table_args__ = {"sqlite_autoincrement": True}

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.Text)
    description = db.Column(db.Text)
    unit = db.Column(db.Text)
    price = db.Column(db.Float)
    stock = db.Column(db.Integer)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "unit": self.unit,
            "price": self.price,
            "stock": self.stock,
        }
