# Overview: Service-layer operations for backup, restore and CSV export.

from __future__ import annotations

import csv
import io
import os
import shutil
import tempfile

from flask import current_app

from ..errors import ErrorKind, ServiceError
from ..extensions import db
from ..models import Customer, Invoice
from .concurrency import store_guard


BACKUP_DOWNLOAD_NAME = "invoice_backup.db"
EXPORT_DOWNLOAD_NAME = "invoices.csv"
EXPORT_HEADER = ["InvoiceNo", "Date", "Customer", "Subtotal", "GrandTotal"]


class BackupError(ServiceError):
    """Raised when a backup or restore cannot proceed."""


def database_path() -> str:
    """Absolute path of the live SQLite file."""
    return current_app.config["DATABASE_PATH"]


def backup_to(destination: str) -> str:
    """Copy the live store file to `destination` (CLI helper)."""
    shutil.copyfile(database_path(), destination)
    return destination


def restore_from_upload(upload) -> None:
    """
    Replace the live store with the uploaded file's bytes.

    The upload is spooled to a temporary file beside the store and moved
    into place with os.replace() while the StoreGuard holds every
    connection closed, so the live path never points at a half-written
    file. The bytes are not checked: a file that is not a database of this
    schema leaves the store unusable until a good backup is restored.
    """
    if upload is None or not getattr(upload, "filename", ""):
        raise BackupError("No backup file uploaded", ErrorKind.UPLOAD_INVALID)

    target = database_path()
    fd, tmp_path = tempfile.mkstemp(prefix=".restore-", suffix=".db", dir=os.path.dirname(target))
    os.close(fd)
    try:
        upload.save(tmp_path)
        timeout = current_app.config.get("RESTORE_DRAIN_TIMEOUT", 10.0)
        with store_guard.exclusive(timeout=timeout):
            os.replace(tmp_path, target)
    finally:
        if os.path.exists(tmp_path):
            os.unlink(tmp_path)

    current_app.logger.warning("Database restored from upload %r", upload.filename)


def export_invoices_csv() -> str:
    """
    Every invoice as CSV: number, date, customer name, subtotal, grand total.

    Fields are quoted per RFC 4180 when they contain commas, quotes or
    newlines; missing values are empty.
    """
    rows = (
        db.session.query(
            Invoice.invoice_no, Invoice.date, Customer.name, Invoice.subtotal, Invoice.grand_total
        )
        .outerjoin(Customer, Invoice.customer_id == Customer.id)
        .order_by(Invoice.id.asc())
        .all()
    )

    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(EXPORT_HEADER)
    for row in rows:
        writer.writerow(["" if value is None else value for value in row])
    return buffer.getvalue()
