from __future__ import annotations

import json

from ..extensions import db


def parse_permissions(raw: str | None) -> list[str]:
    """
    Decode the stored permission set.

    Absent or malformed text yields an empty set; duplicates are dropped
    while keeping the stored order.
    """
    if not raw:
        return []
    try:
        value = json.loads(raw)
    except (TypeError, ValueError):
        return []
    if not isinstance(value, list):
        return []
    seen: list[str] = []
    for item in value:
        if isinstance(item, str) and item not in seen:
            seen.append(item)
    return seen


class User(db.Model):
    """
    Back-office login account.

    The "password" column keeps its historical name but holds a bcrypt
    hash. Rows restored from older backups may still carry plaintext; those
    are re-hashed on their first successful login.
    """
    __tablename__ = "users"
    __table_args__ = {"sqlite_autoincrement": True}

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.Text, unique=True)
    password_hash = db.Column("password", db.Text)
    role = db.Column(db.Text, server_default="operator")
    permissions = db.Column(db.Text, server_default="[]")

    @property
    def permission_set(self) -> list[str]:
        return parse_permissions(self.permissions)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "username": self.username,
            "role": self.role,
            "permissions": self.permission_set,
        }
