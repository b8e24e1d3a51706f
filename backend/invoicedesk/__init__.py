# backend/invoicedesk/__init__.py
import os

from flask import Flask, jsonify
from sqlalchemy.exc import DatabaseError, IntegrityError
from werkzeug.exceptions import HTTPException

from .config import Config
from .errors import StoreUnavailableError
from .extensions import db, migrate
from .validation import ValidationError


MIGRATIONS_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "migrations")


def _resolve_database_path(app: Flask) -> str:
    path = app.config["DATABASE_PATH"]
    if not os.path.isabs(path):
        os.makedirs(app.instance_path, exist_ok=True)
        path = os.path.join(app.instance_path, path)
    return path


def create_app(test_config: dict | None = None) -> Flask:
    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(Config)
    if test_config:
        app.config.update(test_config)

    # Engines are built at init_app, so the URI must be final before it
    database_path = _resolve_database_path(app)
    app.config["DATABASE_PATH"] = database_path
    app.config["SQLALCHEMY_DATABASE_URI"] = f"sqlite:///{database_path}"

    app.logger.setLevel(app.config["LOG_LEVEL"])

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db, directory=MIGRATIONS_DIR)

    from .services import session_service
    session_service.init_app(app)

    # Import models so Alembic can discover metadata reliably
    from . import models  # noqa: F401

    # Register blueprints
    from .routes.system import system_bp
    from .routes.auth import auth_bp
    from .routes.dashboard import dashboard_bp
    from .routes.customers import customers_bp
    from .routes.items import items_bp
    from .routes.invoices import invoices_bp
    from .routes.quotations import quotations_bp
    from .routes.settings import settings_bp
    from .routes.users import users_bp
    from .routes.logs import logs_bp

    app.register_blueprint(system_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(dashboard_bp)
    app.register_blueprint(customers_bp)
    app.register_blueprint(items_bp)
    app.register_blueprint(invoices_bp)
    app.register_blueprint(quotations_bp)
    app.register_blueprint(settings_bp)
    app.register_blueprint(users_bp)
    app.register_blueprint(logs_bp)

    from .services.concurrency import store_guard

    @app.before_request
    def hold_during_restore():
        store_guard.enter()

    @app.teardown_request
    def release_store(exc):
        store_guard.leave()

    @app.errorhandler(StoreUnavailableError)
    def handle_store_unavailable(e):
        app.logger.warning("Request refused: %s", e)
        return jsonify({"error": "Store temporarily unavailable"}), 503

    @app.errorhandler(DatabaseError)
    def handle_database_error(e):
        if isinstance(e, IntegrityError):
            return handle_unexpected_error(e)
        db.session.rollback()
        app.logger.exception("Database unavailable")
        return jsonify({"error": "Store temporarily unavailable"}), 503

    @app.errorhandler(ValidationError)
    def handle_validation_error(e):
        return jsonify({"error": str(e)}), 400

    @app.errorhandler(Exception)
    def handle_unexpected_error(e):
        if isinstance(e, HTTPException):
            return e
        db.session.rollback()
        app.logger.exception("Unhandled error")
        return jsonify({"error": "Internal server error"}), 500

    if app.config.get("AUTO_INIT_SCHEMA"):
        from .services.schema_service import ensure_schema
        with app.app_context():
            ensure_schema()

    # Register CLI commands
    from .cli import register_commands
    register_commands(app)

    return app
