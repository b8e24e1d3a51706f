# Overview: Idempotent schema bootstrap and default admin seeding.

from __future__ import annotations

from flask import current_app
from sqlalchemy import inspect

from ..extensions import db
from ..models import SCHEMA_ORDER
from . import auth_service


def ensure_schema() -> dict:
    """
    Create any missing table, in dependency order, then seed the admin user.

    Safe to run on every start: existing tables are left alone and the admin
    row is only inserted when no "admin" username exists.
    """
    created = []
    inspector = inspect(db.engine)
    existing = set(inspector.get_table_names())

    for model in SCHEMA_ORDER:
        table = model.__table__
        if table.name not in existing:
            table.create(bind=db.engine, checkfirst=True)
            created.append(table.name)

    seeded = auth_service.ensure_default_admin()

    if created:
        current_app.logger.info("Created tables: %s", ", ".join(created))
    if seeded:
        current_app.logger.info("Seeded default admin account")

    return {"created_tables": created, "admin_seeded": seeded}


def reset_schema() -> dict:
    """Drop every table and bootstrap again. Deletes all data."""
    db.session.remove()
    for model in reversed(SCHEMA_ORDER):
        model.__table__.drop(bind=db.engine, checkfirst=True)
    return ensure_schema()
