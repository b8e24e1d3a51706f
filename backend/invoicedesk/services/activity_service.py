# Overview: Service-layer operations for the activity log; append and read back.

from __future__ import annotations

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from ..extensions import db
from ..models import LogEntry


def record(username: str | None, action: str, details: str | None = None) -> LogEntry | None:
    """
    Append an activity entry.

    Fire-and-forget: a failed write is logged and swallowed so the action
    being audited still reports its own outcome. The timestamp is filled by
    the database at insert time.
    """
    entry = LogEntry(username=username, action=action, details=details)
    try:
        db.session.add(entry)
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("Failed to record activity %r for %r", action, username)
        return None
    return entry


def list_entries(limit: int | None = None) -> list[dict]:
    """Newest entries first, capped at LOG_LIMIT."""
    if limit is None:
        limit = current_app.config.get("LOG_LIMIT", 100)
    rows = (
        db.session.query(LogEntry)
        .order_by(LogEntry.id.desc())
        .limit(limit)
        .all()
    )
    return [row.to_dict() for row in rows]
