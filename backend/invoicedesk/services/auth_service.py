# Overview: Service-layer operations for auth; encapsulates business logic and database work.

"""
Authentication and user accounts.

SECURITY NOTES:
- Passwords hashed with bcrypt (cost from BCRYPT_ROUNDS, default 12)
- Rows restored from plaintext-era backups are compared once in constant
  time and re-hashed on that successful login
- Failed logins are a normal result (None), never an exception
"""

from __future__ import annotations

import hmac
import json

import bcrypt
from flask import current_app
from sqlalchemy.exc import IntegrityError

from ..extensions import db
from ..models import User
from ..validation import ModelValidationPolicy, ValidationError, validate_payload
from ..errors import ErrorKind, ServiceError
from . import activity_service


DEFAULT_ADMIN_USERNAME = "admin"
DEFAULT_ADMIN_PASSWORD = "admin123"
ALL_PERMISSIONS = ["all"]
ROLES = ("admin", "operator")
USER_POLICY = ModelValidationPolicy(
    writable_fields=frozenset({"username", "password", "role"}),
    required_on_create=frozenset({"username", "password"}),
    defaults={"role": "operator"},
)


class UserError(ServiceError):
    """Raised when a user account cannot be written."""


def _is_bcrypt_hash(value: str) -> bool:
    return value.startswith(("$2a$", "$2b$", "$2y$"))


def hash_password(password: str) -> str:
    """Hash password using bcrypt; rounds come from app config."""
    rounds = current_app.config.get("BCRYPT_ROUNDS", 12)
    salt = bcrypt.gensalt(rounds=rounds)
    hashed = bcrypt.hashpw(password.encode('utf-8'), salt)
    return hashed.decode('utf-8')  # Store as string in database


def verify_password(password: str, password_hash: str | None) -> bool:
    """
    Verify password against the stored value.

    bcrypt hashes go through bcrypt.checkpw(); anything else is a legacy
    plaintext row and is compared with hmac.compare_digest().
    """
    if not password_hash or not isinstance(password, str):
        return False

    if not _is_bcrypt_hash(password_hash):
        return hmac.compare_digest(password.encode('utf-8'), password_hash.encode('utf-8'))

    try:
        return bcrypt.checkpw(password.encode('utf-8'), password_hash.encode('utf-8'))
    except ValueError:
        return False


def authenticate(username: str | None, password: str | None) -> User | None:
    """
    Authenticate user with username and password.

    Returns User if credentials valid, None otherwise. Legacy plaintext
    passwords are upgraded to bcrypt on success.
    """
    if not isinstance(username, str) or not isinstance(password, str) or not username:
        return None

    user = db.session.query(User).filter_by(username=username).first()
    if not user:
        return None

    if not verify_password(password, user.password_hash):
        return None

    if not _is_bcrypt_hash(user.password_hash):
        user.password_hash = hash_password(password)
        db.session.commit()
        current_app.logger.info("Upgraded legacy password storage for user %s", user.username)

    return user


def ensure_default_admin() -> bool:
    """
    Seed the admin account if no row named "admin" exists.

    Returns True when a row was inserted. Not atomic against concurrent
    first boots (single process).
    """
    existing = db.session.query(User.id).filter_by(username=DEFAULT_ADMIN_USERNAME).first()
    if existing:
        return False

    admin = User(
        username=DEFAULT_ADMIN_USERNAME,
        password_hash=hash_password(DEFAULT_ADMIN_PASSWORD),
        role="admin",
        permissions=json.dumps(ALL_PERMISSIONS),
    )
    db.session.add(admin)
    db.session.commit()
    return True


def list_users() -> list[dict]:
    users = db.session.query(User).all()
    return [user.to_dict() for user in users]


def create_user(payload: dict | None) -> User:
    """
    Create a user from a client payload.

    Raises ValidationError on missing fields and UserError when the
    username is already taken.
    """
    data = validate_payload(model=User, payload=payload, policy=USER_POLICY, partial=False)
    if data["role"] not in ROLES:
        raise ValidationError(f"role must be one of: {', '.join(ROLES)}")

    # Stored as JSON text; the column type would reject a list
    permissions = payload.get("permissions")
    if not isinstance(permissions, list):
        permissions = []

    user = User(
        username=data["username"],
        password_hash=hash_password(str(data["password"])),
        role=data["role"],
        permissions=json.dumps([str(p) for p in permissions]),
    )
    db.session.add(user)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise UserError("Username already exists", ErrorKind.CONSTRAINT_VIOLATION)
    return user


def delete_user(user_id, actor: str | None) -> None:
    """Delete by id without an existence check, then log the actor."""
    db.session.query(User).filter(User.id == user_id).delete()
    db.session.commit()
    activity_service.record(actor, "Delete User", f"ID: {user_id}")
