from __future__ import annotations

from ..extensions import db
from ..time_utils import to_utc_z


class LogEntry(db.Model):
    """
    Activity log of mutating actions.

    IMMUTABLE: Never update or delete. Append-only.
    """
    __tablename__ = "logs"
    __table_args__ = {"sqlite_autoincrement": True}

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.Text)
    action = db.Column(db.Text)
    details = db.Column(db.Text)
    timestamp = db.Column(db.DateTime, server_default=db.func.current_timestamp())

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "username": self.username,
            "action": self.action,
            "details": self.details,
            "timestamp": to_utc_z(self.timestamp),
        }
