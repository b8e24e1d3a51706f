# Overview: Service-layer operations for company settings (singleton row).

from __future__ import annotations

from ..extensions import db
from ..models import CompanySettings
from ..validation import ModelValidationPolicy, validate_payload


SETTINGS_POLICY = ModelValidationPolicy(
    writable_fields=frozenset({"name", "address", "phone", "email", "logo", "prevent_negative"}),
    defaults={"prevent_negative": False},
)


def get_settings() -> dict:
    """The settings row, or {} when none has been saved yet."""
    row = db.session.query(CompanySettings).order_by(CompanySettings.id.asc()).first()
    return row.to_dict() if row else {}


def replace_settings(payload: dict | None) -> CompanySettings:
    """
    Replace the singleton: delete every row and insert one, in a single
    transaction so readers never see an empty table.
    """
    data = validate_payload(model=CompanySettings, payload=payload, policy=SETTINGS_POLICY, partial=False)
    try:
        db.session.query(CompanySettings).delete()
        row = CompanySettings(**data)
        db.session.add(row)
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise
    return row
