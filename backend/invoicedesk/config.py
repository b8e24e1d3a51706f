# backend/invoicedesk/config.py
from __future__ import annotations
import os


def _env_flag(name: str, default: str) -> bool:
    return os.environ.get(name, default).lower() in ("1", "true", "yes")


class Config:
    # Optional "SECRET_KEY", with default dev key
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key-change-me")

    # SQLite store file; relative paths land in the Flask instance folder
    DATABASE_PATH = os.environ.get("DATABASE_PATH", "invoice_system_web.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Create tables and seed the admin account at startup
    AUTO_INIT_SCHEMA = _env_flag("AUTO_INIT_SCHEMA", "true")

    HOST = os.environ.get("HOST", "0.0.0.0")
    PORT = int(os.environ.get("PORT", "3000"))

    # Session cookie
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = os.environ.get("SESSION_COOKIE_SAMESITE", "Lax")
    SESSION_COOKIE_SECURE = _env_flag("SESSION_COOKIE_SECURE", "false")

    # JSON bodies carry base64 logos
    MAX_CONTENT_LENGTH = int(os.environ.get("MAX_CONTENT_LENGTH", str(50 * 1024 * 1024)))

    BCRYPT_ROUNDS = int(os.environ.get("BCRYPT_ROUNDS", "12"))

    LOW_STOCK_THRESHOLD = int(os.environ.get("LOW_STOCK_THRESHOLD", "10"))
    DASHBOARD_MONTHS = int(os.environ.get("DASHBOARD_MONTHS", "6"))
    LOG_LIMIT = int(os.environ.get("LOG_LIMIT", "100"))

    # Seconds a restore waits for running requests before giving up
    RESTORE_DRAIN_TIMEOUT = float(os.environ.get("RESTORE_DRAIN_TIMEOUT", "10"))

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
