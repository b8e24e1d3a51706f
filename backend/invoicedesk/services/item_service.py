# Overview: Service-layer operations for items; encapsulates business logic and database work.

from __future__ import annotations

from ..extensions import db
from ..models import Item
from ..validation import ModelValidationPolicy, validate_payload
from . import activity_service


ITEM_MUTABLE_FIELDS = frozenset({"name", "description", "unit", "price", "stock"})

ITEM_POLICY = ModelValidationPolicy(
    writable_fields=ITEM_MUTABLE_FIELDS,
    aliases={"desc": "description"},
)


def list_items() -> list[dict]:
    """Newest items first."""
    items = db.session.query(Item).order_by(Item.id.desc()).all()
    return [i.to_dict() for i in items]


def create_item(payload: dict | None) -> Item:
    data = validate_payload(model=Item, payload=payload, policy=ITEM_POLICY, partial=False)
    item = Item(**data)
    db.session.add(item)
    db.session.commit()
    return item


def update_item(item_id, payload: dict | None) -> None:
    """
    Overwrite every editable field of the item.

    Fields missing from the payload are written as NULL, the same as a full
    form resubmission. Updating an unknown id is a no-op.
    """
    data = validate_payload(model=Item, payload=payload, policy=ITEM_POLICY, partial=True)
    values = {key: data.get(key) for key in ITEM_MUTABLE_FIELDS}
    db.session.query(Item).filter(Item.id == item_id).update(values, synchronize_session=False)
    db.session.commit()


def delete_item(item_id, actor: str | None) -> None:
    """Delete by id without an existence check, then log the actor."""
    db.session.query(Item).filter(Item.id == item_id).delete()
    db.session.commit()
    activity_service.record(actor, "Delete Item", f"ID: {item_id}")
