# Overview: Flask API routes for health, backup, restore and CSV export.

"""
System endpoints.

Backup and restore operate on the whole SQLite file. A restore holds every
other request off with 503 until the copy finishes.
"""

import time

from flask import Blueprint, Response, current_app, jsonify, request, send_file
from sqlalchemy import text

from ..decorators import require_auth
from ..extensions import db
from ..services import backup_service
from ..services.backup_service import BackupError
from ..time_utils import utcnow


system_bp = Blueprint("system", __name__, url_prefix="/api")


def check_database_health() -> dict:
    """Round-trip a trivial query against the store."""
    start_time = time.time()
    try:
        db.session.execute(text("SELECT 1"))
        elapsed_ms = (time.time() - start_time) * 1000
        return {"status": "healthy", "latency_ms": round(elapsed_ms, 2)}
    except Exception:
        elapsed_ms = (time.time() - start_time) * 1000
        current_app.logger.exception("Database health check failed")
        return {
            "status": "unhealthy",
            "latency_ms": round(elapsed_ms, 2),
            "error": "Database error",
        }


@system_bp.get("/health")
def health():
    """
    Liveness check; needs no session.

    Returns:
    - 200: database reachable
    - 503: database unreachable
    """
    database_health = check_database_health()
    http_status = 200 if database_health["status"] == "healthy" else 503

    response = {
        "status": database_health["status"],
        "timestamp": utcnow().isoformat() + "Z",
        "checks": {"database": database_health},
    }
    return response, http_status


@system_bp.get("/backup")
@require_auth
def backup_route():
    """Download the live store file."""
    return send_file(
        backup_service.database_path(),
        as_attachment=True,
        download_name=backup_service.BACKUP_DOWNLOAD_NAME,
        mimetype="application/octet-stream",
        max_age=0,
    )


@system_bp.post("/restore")
@require_auth
def restore_route():
    """
    Replace the store with the uploaded "dbfile".

    Returns true once the file is in place, false when nothing was uploaded
    or the copy failed.
    """
    try:
        backup_service.restore_from_upload(request.files.get("dbfile"))
    except BackupError as e:
        current_app.logger.info("Restore rejected: %s", e)
        return jsonify(False)
    except OSError:
        current_app.logger.exception("Restore failed")
        return jsonify(False)
    return jsonify(True)


@system_bp.get("/export")
@require_auth
def export_route():
    """All invoices as a CSV attachment."""
    body = backup_service.export_invoices_csv()
    return Response(
        body,
        mimetype="text/csv",
        headers={
            "Content-Disposition": f"attachment; filename={backup_service.EXPORT_DOWNLOAD_NAME}"
        },
    )
