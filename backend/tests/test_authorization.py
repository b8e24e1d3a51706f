# Overview: Pytest coverage for the session gate, login and logout.

"""
Authorization tests.

Verifies:
- Every data route returns 401 without a logged-in session
- Rejected requests write nothing
- Login accepts both key styles and reports failure as {"success": false}
- Logout ends the session
"""

import pytest

from invoicedesk.extensions import db
from invoicedesk.models import Customer, Item, User


# =============================================================================
# UNAUTHENTICATED ACCESS: 401
# =============================================================================


class TestUnauthenticatedAccess:
    """All data endpoints return 401 without a session."""

    @pytest.mark.parametrize(
        "method,path",
        [
            ("GET", "/api/dashboard"),
            ("GET", "/api/items"),
            ("POST", "/api/items"),
            ("POST", "/api/items/update"),
            ("POST", "/api/items/delete"),
            ("GET", "/api/customers"),
            ("POST", "/api/customers"),
            ("POST", "/api/customers/delete"),
            ("GET", "/api/invoices"),
            ("GET", "/api/invoices/1"),
            ("POST", "/api/invoices"),
            ("GET", "/api/invoice/last"),
            ("GET", "/api/quotations"),
            ("GET", "/api/quotations/1"),
            ("POST", "/api/quotations"),
            ("POST", "/api/quotations/delete"),
            ("GET", "/api/settings"),
            ("POST", "/api/settings"),
            ("GET", "/api/users"),
            ("POST", "/api/users"),
            ("POST", "/api/users/delete"),
            ("GET", "/api/logs"),
            ("GET", "/api/backup"),
            ("POST", "/api/restore"),
            ("GET", "/api/export"),
        ],
    )
    def test_requires_auth(self, client, method, path):
        resp = getattr(client, method.lower())(path, json={})
        assert resp.status_code == 401, f"{method} {path} returned {resp.status_code}"
        assert resp.get_json() == {"error": "Unauthorized"}

    def test_rejected_writes_change_nothing(self, app, client):
        client.post("/api/items", json={"name": "Widget", "price": 5, "stock": 1})
        client.post("/api/customers", json={"name": "Acme"})
        client.post("/api/users", json={"username": "intruder", "password": "x"})
        client.post("/api/users/delete", json={"id": 1})

        with app.app_context():
            assert db.session.query(Item).count() == 0
            assert db.session.query(Customer).count() == 0
            assert [u.username for u in db.session.query(User).all()] == ["admin"]

    def test_health_is_public(self, client):
        resp = client.get("/api/health")
        assert resp.status_code == 200
        body = resp.get_json()
        assert body["status"] == "healthy"
        assert body["checks"]["database"]["status"] == "healthy"


# =============================================================================
# LOGIN / LOGOUT
# =============================================================================


class TestLogin:

    def test_login_success_returns_principal(self, client):
        resp = client.post("/api/login", json={"username": "admin", "password": "admin123"})
        assert resp.status_code == 200
        assert resp.get_json() == {
            "success": True,
            "role": "admin",
            "username": "admin",
            "permissions": ["all"],
        }

    def test_login_accepts_short_keys(self, client):
        resp = client.post("/api/login", json={"user": "admin", "pass": "admin123"})
        assert resp.get_json()["success"] is True

    @pytest.mark.parametrize(
        "payload",
        [
            {"username": "admin", "password": "wrong"},
            {"username": "nobody", "password": "admin123"},
            {"username": "admin"},
            {},
            {"username": "admin", "password": 123},
            {"username": ["admin"], "password": "admin123"},
            {"user": {"name": "admin"}, "pass": "admin123"},
            {"username": "admin", "password": ["admin123"]},
            ["admin", "admin123"],
        ],
    )
    def test_login_failure_is_not_an_http_error(self, client, payload):
        resp = client.post("/api/login", json=payload)
        assert resp.status_code == 200
        assert resp.get_json() == {"success": False}

    def test_failed_login_grants_no_session(self, client):
        client.post("/api/login", json={"username": "admin", "password": "wrong"})
        assert client.get("/api/items").status_code == 401

    def test_session_grants_access(self, admin_client):
        resp = admin_client.get("/api/items")
        assert resp.status_code == 200
        assert resp.get_json() == []

    def test_logout_ends_session(self, admin_client):
        resp = admin_client.post("/api/logout")
        assert resp.get_json() == {"success": True}
        assert admin_client.get("/api/dashboard").status_code == 401

    def test_logout_without_session(self, client):
        assert client.post("/api/logout").get_json() == {"success": True}

    def test_cookie_holds_only_an_opaque_token(self, admin_client):
        with admin_client.session_transaction() as sess:
            assert set(sess.keys()) == {"sid"}
            token = sess["sid"]
        assert "admin" not in token
        assert len(token) == 64

    def test_cookie_replayed_after_logout_is_rejected(self, admin_client):
        with admin_client.session_transaction() as sess:
            captured = sess["sid"]

        admin_client.post("/api/logout")
        assert admin_client.get("/api/items").status_code == 401

        with admin_client.session_transaction() as sess:
            sess["sid"] = captured
        resp = admin_client.get("/api/items")
        assert resp.status_code == 401
        assert resp.get_json() == {"error": "Unauthorized"}

    def test_relogin_revokes_previous_session(self, admin_client):
        with admin_client.session_transaction() as sess:
            first = sess["sid"]

        admin_client.post("/api/login", json={"username": "admin", "password": "admin123"})
        with admin_client.session_transaction() as sess:
            assert sess["sid"] != first
            sess["sid"] = first
        assert admin_client.get("/api/items").status_code == 401

    def test_sessions_are_independent(self, app, admin_client):
        other = app.test_client()
        other.post("/api/login", json={"username": "admin", "password": "admin123"})

        admin_client.post("/api/logout")
        assert admin_client.get("/api/items").status_code == 401
        assert other.get("/api/items").status_code == 200
