# Overview: Service-layer operations for the dashboard summary.

from __future__ import annotations

from flask import current_app
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError

from ..extensions import db
from ..models import Customer, Invoice, Item


def _safe(label: str, fn, default):
    """Run one sub-query; a failure is logged and reported as `default`."""
    try:
        value = fn()
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("Dashboard query %s failed", label)
        return default
    return default if value is None else value


def monthly_sales(limit: int) -> list[dict]:
    """
    Invoice totals per "MM-YYYY", most recent month first.

    Dates are stored as client text; rows whose date SQLite cannot parse
    fall into a single null month.
    """
    month = func.strftime("%m-%Y", Invoice.date).label("month")
    rows = (
        db.session.query(month, func.sum(Invoice.grand_total).label("total"))
        .group_by(month)
        .order_by(func.max(Invoice.date).desc())
        .limit(limit)
        .all()
    )
    return [{"month": row.month, "total": row.total or 0} for row in rows]


def summary() -> dict:
    """
    Counts, sales total, low-stock count and the monthly series.

    Each value is computed on its own, so one failing query does not hide
    the others.
    """
    threshold = current_app.config.get("LOW_STOCK_THRESHOLD", 10)
    months = current_app.config.get("DASHBOARD_MONTHS", 6)

    return {
        "customers": _safe("customers", lambda: db.session.query(func.count(Customer.id)).scalar(), 0),
        "items": _safe("items", lambda: db.session.query(func.count(Item.id)).scalar(), 0),
        "invoices": _safe("invoices", lambda: db.session.query(func.count(Invoice.id)).scalar(), 0),
        "sales": _safe("sales", lambda: db.session.query(func.sum(Invoice.grand_total)).scalar(), 0),
        "lowStock": _safe(
            "lowStock",
            lambda: db.session.query(func.count(Item.id)).filter(Item.stock <= threshold).scalar(),
            0,
        ),
        "chartData": _safe("chartData", lambda: monthly_sales(months), []),
    }
