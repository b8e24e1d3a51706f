from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from sqlalchemy import Boolean, Float, Integer, String, Text
from sqlalchemy.orm import DeclarativeMeta

from .errors import ErrorKind, ServiceError


class ValidationError(ServiceError):
    """400-level input problem."""
    kind = ErrorKind.VALIDATION


@dataclass(frozen=True)
class ModelValidationPolicy:
    """
    Central policy layer:
    - writable_fields: what clients are allowed to set (security boundary)
    - required_on_create: fields required for POST
    - aliases: legacy payload keys mapped onto column names ("desc" -> "description")
    - defaults: values applied on create when the client omits a field

    Keys outside the policy are ignored, not rejected: clients post whole
    form objects and the server keeps only what it stores.
    """
    writable_fields: frozenset[str]
    required_on_create: frozenset[str] = frozenset()
    aliases: dict[str, str] = field(default_factory=dict)
    defaults: dict[str, Any] = field(default_factory=dict)


def _columns_by_key(model: DeclarativeMeta) -> dict[str, Any]:
    mapper = model.__mapper__
    return {c.key: c for c in mapper.columns}


def _coerce_number(col, value: Any, cast):
    if isinstance(value, bool):
        raise ValidationError(f"{col.key} must be a number")
    if isinstance(value, (int, float)):
        number = value
    elif isinstance(value, str):
        stripped = value.strip()
        if not stripped:
            return None
        try:
            number = float(stripped)
        except ValueError:
            raise ValidationError(f"{col.key} must be a number")
    else:
        raise ValidationError(f"{col.key} must be a number")

    if cast is int:
        if isinstance(number, float) and not number.is_integer():
            raise ValidationError(f"{col.key} must be an integer (no decimals)")
        return int(number)
    return float(number)


def _coerce_value(col, value: Any):
    coltype = col.type

    if value is None:
        return None

    # Booleans first: Boolean is stored as an integer on SQLite
    if isinstance(coltype, Boolean):
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            return value.strip().lower() in ("1", "true", "yes", "on")
        return bool(value)

    if isinstance(coltype, Integer):
        return _coerce_number(col, value, int)

    if isinstance(coltype, Float):
        return _coerce_number(col, value, float)

    if isinstance(coltype, (String, Text)):
        if isinstance(value, (dict, list)):
            raise ValidationError(f"{col.key} must be text")
        return str(value).strip()

    return value


def validate_payload(
    *,
    model: DeclarativeMeta,
    payload: dict | None,
    policy: ModelValidationPolicy,
    partial: bool,
) -> dict:
    """
    Validates + normalizes incoming JSON against SQLAlchemy column metadata
    and the policy allowlist. Returns a cleaned dict of column values.

    partial=False: create semantics (required fields, defaults)
    partial=True: patch semantics (only provided keys)
    """
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise ValidationError("Invalid JSON payload")

    cols = _columns_by_key(model)

    # Full column names win over legacy aliases when both are sent
    raw: dict = {}
    for key, value in payload.items():
        target = policy.aliases.get(key)
        if target is not None and target not in payload:
            raw[target] = value
        elif key in policy.writable_fields:
            raw[key] = value

    if not partial:
        missing = sorted(
            f for f in policy.required_on_create
            if raw.get(f) is None or (isinstance(raw.get(f), str) and not raw[f].strip())
        )
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")

    patch: dict = {}
    for key, value in raw.items():
        col = cols.get(key)
        if col is None:
            # Policy field that is not a column (handled by the caller)
            patch[key] = value
            continue
        patch[key] = _coerce_value(col, value)

    if not partial:
        for key, default in policy.defaults.items():
            if patch.get(key) is None:
                patch[key] = default

    return patch


def parse_id(value: Any, field_name: str = "id") -> int:
    """Record id from a JSON body; digits-only strings are accepted."""
    if isinstance(value, bool) or value is None:
        raise ValidationError(f"{field_name} is required")
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    raise ValidationError(f"{field_name} must be an integer")
