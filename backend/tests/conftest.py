"""
Pytest fixtures for the invoicing backend tests.

Every test gets its own SQLite file, bootstrapped with the default admin,
plus factories that create records through the HTTP API.
"""

import pytest

from invoicedesk import create_app
from invoicedesk.extensions import db


ADMIN_CREDENTIALS = {"username": "admin", "password": "admin123"}


@pytest.fixture(scope='function')
def app(tmp_path):
    """Create application for testing against a fresh database file."""
    app = create_app({
        'TESTING': True,
        'SECRET_KEY': 'test-secret-key',
        'DATABASE_PATH': str(tmp_path / 'test.db'),
        'BCRYPT_ROUNDS': 4,
        'AUTO_INIT_SCHEMA': True,
    })

    yield app

    with app.app_context():
        db.session.remove()
        db.engine.dispose()


@pytest.fixture(scope='function')
def client(app):
    """Create test client (no session)."""
    return app.test_client()


@pytest.fixture(scope='function')
def admin_client(app):
    """Test client logged in as the seeded admin."""
    client = app.test_client()
    response = client.post('/api/login', json=ADMIN_CREDENTIALS)
    assert response.get_json()["success"] is True
    return client


@pytest.fixture(scope='function')
def db_session(app):
    """Application context with the database session."""
    with app.app_context():
        yield db.session
        db.session.rollback()


@pytest.fixture(scope='function')
def make_customer(admin_client):
    """Create a customer through the API and return its id."""
    def _make(**fields):
        payload = {"name": "Acme", "phone": "555-0100", "email": "ops@acme.test", "address": "1 Main St"}
        payload.update(fields)
        return admin_client.post('/api/customers', json=payload).get_json()["id"]
    return _make


@pytest.fixture(scope='function')
def make_item(admin_client):
    """Create an item through the API and return its id."""
    def _make(**fields):
        payload = {"name": "Widget", "description": "Blue widget", "unit": "pcs", "price": 5, "stock": 20}
        payload.update(fields)
        return admin_client.post('/api/items', json=payload).get_json()["id"]
    return _make


@pytest.fixture(scope='function')
def document_payload():
    """Build an invoice or quotation body with sensible defaults."""
    def _build(number_field, number, customer_id=None, lines=None, **fields):
        payload = {
            number_field: number,
            "customer_id": customer_id,
            "date": "2024-03-15",
            "subtotal": 20,
            "discount_percent": 0,
            "discount_amount": 0,
            "tax_percent": 0,
            "service_charge": 0,
            "grand_total": 20,
            "items": lines or [],
        }
        payload.update(fields)
        return payload
    return _build
