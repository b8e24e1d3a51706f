# Overview: Service-layer operations for session; binds the logged-in principal to a server-held session.

"""
Session principal management.

The principal is a snapshot of the user row taken at login (id, username,
role, parsed permission set). It is held server-side in a per-application
registry for the lifetime of the process; the signed cookie only carries an
opaque random token.

SECURITY FEATURES:
- Cryptographically secure random tokens (32 bytes)
- Tokens hashed with SHA-256 before they are used as registry keys
- Revoked on logout: a cookie captured earlier no longer resolves
- The password hash is never copied into the session
"""

from __future__ import annotations

import hashlib
import secrets
import threading
from dataclasses import asdict, dataclass, field

from flask import current_app, session

from ..models import User


SESSION_TOKEN_KEY = "sid"
REGISTRY_EXTENSION_KEY = "invoicedesk.sessions"


@dataclass
class Principal:
    """Authenticated user attached to a session."""
    id: int
    username: str
    role: str
    permissions: list[str] = field(default_factory=list)

    @classmethod
    def from_user(cls, user: User) -> "Principal":
        return cls(
            id=user.id,
            username=user.username,
            role=user.role,
            permissions=user.permission_set,
        )

    def to_dict(self) -> dict:
        return asdict(self)


class SessionRegistry:
    """Live sessions keyed by token hash. Process lifetime only."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._sessions: dict[str, Principal] = {}

    def add(self, token_hash: str, principal: Principal) -> None:
        with self._lock:
            self._sessions[token_hash] = principal

    def get(self, token_hash: str) -> Principal | None:
        with self._lock:
            return self._sessions.get(token_hash)

    def revoke(self, token_hash: str) -> bool:
        with self._lock:
            return self._sessions.pop(token_hash, None) is not None


def generate_token() -> str:
    """64-character hex token sent to the client inside the signed cookie."""
    return secrets.token_hex(32)


def hash_token(token: str) -> str:
    return hashlib.sha256(token.encode('utf-8')).hexdigest()


def init_app(app) -> None:
    app.extensions[REGISTRY_EXTENSION_KEY] = SessionRegistry()


def registry() -> SessionRegistry:
    """The current application's session registry."""
    return current_app.extensions[REGISTRY_EXTENSION_KEY]


def _cookie_token() -> str | None:
    token = session.get(SESSION_TOKEN_KEY)
    return token if isinstance(token, str) and token else None


def attach_principal(user: User) -> Principal:
    """Bind the user to a fresh server-side session (login)."""
    destroy_session()
    principal = Principal.from_user(user)
    token = generate_token()
    registry().add(hash_token(token), principal)
    session[SESSION_TOKEN_KEY] = token
    return principal


def current_principal() -> Principal | None:
    """Return the session principal, or None when not logged in."""
    token = _cookie_token()
    if token is None:
        return None
    return registry().get(hash_token(token))


def destroy_session() -> None:
    """Revoke the server-side session and clear the cookie (logout)."""
    token = _cookie_token()
    if token is not None:
        registry().revoke(hash_token(token))
    session.clear()
