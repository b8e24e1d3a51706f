# Overview: Pytest coverage for invoices and quotations: uniqueness, stock and cascade.

"""
Document tests.

Verifies:
- A duplicate document number fails and leaves no lines or stock change
- Invoice lines decrement stock without clamping; quotations never touch it
- Quotation delete removes its lines; invoices have no delete route
- Lookups of unknown ids answer null
"""

import pytest
from sqlalchemy import event

from invoicedesk.extensions import db
from invoicedesk.models import InvoiceItem, QuotationItem
from invoicedesk.services import document_service
from invoicedesk.services.document_service import INVOICES, DocumentError


def _line(item_id, qty, price=5, name="Widget"):
    return {"item_id": item_id, "item_name": name, "description": "", "qty": qty, "price": price, "total": qty * price}


def _stock(client, item_id):
    return [i for i in client.get("/api/items").get_json() if i["id"] == item_id][0]["stock"]


@pytest.fixture
def statements(app):
    """SQL text of every statement the app runs while the fixture is active."""
    with app.app_context():
        engine = db.engine
    seen = []

    def capture(conn, cursor, statement, parameters, context, executemany):
        seen.append(statement)

    event.listen(engine, "before_cursor_execute", capture)
    yield seen
    event.remove(engine, "before_cursor_execute", capture)


class TestInvoiceCreation:

    def test_create_decrements_stock(self, admin_client, make_item, document_payload):
        item_id = make_item(stock=10)
        resp = admin_client.post("/api/invoices", json=document_payload("invoice_no", "INV-1", lines=[_line(item_id, 3)]))
        assert resp.get_json() is True
        assert _stock(admin_client, item_id) == 7

    def test_stock_may_go_negative(self, admin_client, make_item, document_payload):
        item_id = make_item(stock=10)
        admin_client.post("/api/invoices", json=document_payload("invoice_no", "INV-1", lines=[_line(item_id, 15)]))
        assert _stock(admin_client, item_id) == -5

    def test_legacy_line_keys(self, admin_client, make_item, document_payload):
        item_id = make_item(stock=10)
        line = {"id": item_id, "name": "Widget", "desc": "blue", "qty": 2, "price": 5, "total": 10}
        admin_client.post("/api/invoices", json=document_payload("invoice_no", "INV-1", lines=[line]))

        assert _stock(admin_client, item_id) == 8
        detail = admin_client.get("/api/invoices/1").get_json()
        assert detail["items"][0]["item_name"] == "Widget"
        assert detail["items"][0]["description"] == "blue"

    def test_free_text_line_leaves_stock_alone(self, admin_client, make_item, document_payload):
        item_id = make_item(stock=10)
        line = {"item_name": "Labour", "qty": 2, "price": 40, "total": 80}
        assert admin_client.post(
            "/api/invoices", json=document_payload("invoice_no", "INV-1", lines=[line])
        ).get_json() is True
        assert _stock(admin_client, item_id) == 10

    def test_duplicate_number_fails_without_side_effects(self, app, admin_client, make_item, document_payload):
        item_id = make_item(stock=10)
        first = admin_client.post("/api/invoices", json=document_payload("invoice_no", "INV-1", lines=[_line(item_id, 1)]))
        assert first.get_json() is True

        second = admin_client.post(
            "/api/invoices",
            json=document_payload("invoice_no", "INV-1", lines=[_line(item_id, 2), _line(item_id, 4)]),
        )
        assert second.status_code == 200
        assert second.get_json() is False

        assert len(admin_client.get("/api/invoices").get_json()) == 1
        assert _stock(admin_client, item_id) == 9
        with app.app_context():
            assert db.session.query(InvoiceItem).count() == 1

    def test_duplicate_raises_constraint_violation(self, app, document_payload):
        with app.app_context():
            document_service.create_document(INVOICES, document_payload("invoice_no", "INV-9"), actor="admin")
            with pytest.raises(DocumentError) as exc:
                document_service.create_document(INVOICES, document_payload("invoice_no", "INV-9"), actor="admin")
            assert exc.value.kind.value == "CONSTRAINT_VIOLATION"

    def test_totals_stored_as_sent(self, admin_client, document_payload):
        payload = document_payload(
            "invoice_no", "INV-1",
            subtotal=100, discount_percent=10, discount_amount=10, tax=5, service=2, grand_total=1,
        )
        payload.pop("tax_percent")
        payload.pop("service_charge")
        admin_client.post("/api/invoices", json=payload)

        detail = admin_client.get("/api/invoices/1").get_json()
        assert detail["subtotal"] == 100
        assert detail["tax_percent"] == 5
        assert detail["service_charge"] == 2
        assert detail["grand_total"] == 1

    def test_items_must_be_a_list(self, admin_client, document_payload):
        payload = document_payload("invoice_no", "INV-1")
        payload["items"] = "Widget x2"
        resp = admin_client.post("/api/invoices", json=payload)
        assert resp.status_code == 400
        assert admin_client.get("/api/invoices").get_json() == []

    def test_create_is_logged(self, admin_client, document_payload):
        admin_client.post("/api/invoices", json=document_payload("invoice_no", "INV-7"))
        entry = admin_client.get("/api/logs").get_json()[0]
        assert entry["action"] == "Create Invoice"
        assert entry["details"] == "#INV-7"
        assert entry["username"] == "admin"
        assert entry["timestamp"].endswith("Z")


class TestInvoiceReads:

    def test_list_includes_customer_name(self, admin_client, make_customer, document_payload):
        customer_id = make_customer(name="Acme")
        admin_client.post("/api/invoices", json=document_payload("invoice_no", "INV-1", customer_id=customer_id))
        admin_client.post("/api/invoices", json=document_payload("invoice_no", "INV-2"))

        invoices = admin_client.get("/api/invoices").get_json()
        assert [i["invoice_no"] for i in invoices] == ["INV-2", "INV-1"]
        assert invoices[0]["customer_name"] is None
        assert invoices[1]["customer_name"] == "Acme"

    def test_deleted_customer_reads_as_null(self, admin_client, make_customer, document_payload):
        customer_id = make_customer(name="Acme")
        admin_client.post("/api/invoices", json=document_payload("invoice_no", "INV-1", customer_id=customer_id))
        admin_client.post("/api/customers/delete", json={"id": customer_id})

        invoice = admin_client.get("/api/invoices").get_json()[0]
        assert invoice["customer_id"] == customer_id
        assert invoice["customer_name"] is None

    def test_detail_has_contact_and_lines(self, admin_client, make_customer, make_item, document_payload):
        customer_id = make_customer(name="Acme", phone="555-0199", address="9 Dock Rd")
        item_id = make_item()
        lines = [_line(item_id, 1), _line(item_id, 2, name="Widget XL")]
        admin_client.post("/api/invoices", json=document_payload("invoice_no", "INV-1", customer_id=customer_id, lines=lines))

        detail = admin_client.get("/api/invoices/1").get_json()
        assert detail["invoice_no"] == "INV-1"
        assert detail["customer_name"] == "Acme"
        assert detail["phone"] == "555-0199"
        assert detail["address"] == "9 Dock Rd"
        assert [line["item_name"] for line in detail["items"]] == ["Widget", "Widget XL"]
        assert all(line["invoice_id"] == 1 for line in detail["items"])

    def test_unknown_id_returns_null(self, admin_client, statements):
        resp = admin_client.get("/api/invoices/999")
        assert resp.status_code == 200
        assert resp.get_json() is None

        assert any("FROM invoices" in s for s in statements)
        assert not any("invoice_items" in s for s in statements)

    @pytest.mark.parametrize("path", ["/api/invoices/abc", "/api/invoices/-1", "/api/quotations/abc"])
    def test_non_numeric_id_returns_null(self, admin_client, path):
        resp = admin_client.get(path)
        assert resp.status_code == 200
        assert resp.is_json
        assert resp.get_json() is None

    def test_last_invoice_number(self, admin_client, document_payload):
        assert admin_client.get("/api/invoice/last").get_json() is None

        admin_client.post("/api/invoices", json=document_payload("invoice_no", "INV-1"))
        admin_client.post("/api/invoices", json=document_payload("invoice_no", "INV-2"))
        assert admin_client.get("/api/invoice/last").get_json() == {"invoice_no": "INV-2"}

    def test_invoices_cannot_be_deleted(self, admin_client, document_payload):
        admin_client.post("/api/invoices", json=document_payload("invoice_no", "INV-1"))
        resp = admin_client.post("/api/invoices/delete", json={"id": 1})
        assert resp.status_code == 405
        assert len(admin_client.get("/api/invoices").get_json()) == 1


class TestQuotations:

    def test_create_leaves_stock_alone(self, admin_client, make_item, document_payload):
        item_id = make_item(stock=10)
        resp = admin_client.post("/api/quotations", json=document_payload("quotation_no", "Q-1", lines=[_line(item_id, 4)]))
        assert resp.get_json() is True
        assert _stock(admin_client, item_id) == 10

        entry = admin_client.get("/api/logs").get_json()[0]
        assert entry["action"] == "Create Quotation"
        assert entry["details"] == "#Q-1"

    def test_duplicate_number_fails(self, admin_client, document_payload):
        assert admin_client.post("/api/quotations", json=document_payload("quotation_no", "Q-1")).get_json() is True
        assert admin_client.post("/api/quotations", json=document_payload("quotation_no", "Q-1")).get_json() is False

    def test_numbers_are_per_document_type(self, admin_client, document_payload):
        assert admin_client.post("/api/invoices", json=document_payload("invoice_no", "DOC-1")).get_json() is True
        assert admin_client.post("/api/quotations", json=document_payload("quotation_no", "DOC-1")).get_json() is True

    def test_delete_cascades_to_lines(self, app, admin_client, make_item, document_payload):
        item_id = make_item()
        admin_client.post("/api/quotations", json=document_payload("quotation_no", "Q-1", lines=[_line(item_id, 1), _line(item_id, 2)]))
        admin_client.post("/api/quotations", json=document_payload("quotation_no", "Q-2", lines=[_line(item_id, 1)]))

        assert admin_client.post("/api/quotations/delete", json={"id": 1}).get_json() is True

        assert admin_client.get("/api/quotations/1").get_json() is None
        assert [q["quotation_no"] for q in admin_client.get("/api/quotations").get_json()] == ["Q-2"]
        with app.app_context():
            assert db.session.query(QuotationItem).filter_by(quotation_id=1).count() == 0
            assert db.session.query(QuotationItem).filter_by(quotation_id=2).count() == 1

    def test_detail(self, admin_client, make_customer, document_payload):
        customer_id = make_customer(name="Acme")
        admin_client.post("/api/quotations", json=document_payload("quotation_no", "Q-1", customer_id=customer_id))
        detail = admin_client.get("/api/quotations/1").get_json()
        assert detail["quotation_no"] == "Q-1"
        assert detail["customer_name"] == "Acme"
        assert detail["items"] == []

    def test_invoice_kind_refuses_delete(self, app):
        with app.app_context():
            with pytest.raises(DocumentError):
                document_service.delete_document(INVOICES, 1)
