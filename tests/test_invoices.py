# tests/test_invoices.py

from datetime import datetime, timezone

from sqlalchemy import text

from app.api.invoices import _row_to_invoice_detail
from app.db.schema import invoices


def _today() -> str:
    # SQLite's CURRENT_DATE is in UTC
    return datetime.now(timezone.utc).date().isoformat()


class TestListInvoices:
    def test_sorted_by_company_code(self, client, seeded):
        resp = client.get("/invoices")

        assert resp.status_code == 200
        body = resp.json()["invoices"]
        assert [inv["comp_code"] for inv in body] == ["apple", "apple", "ibm"]
        assert set(body[0]) == {"id", "comp_code"}


class TestGetInvoice:
    def test_nests_company(self, client, seeded):
        invoice_id = seeded["ibm"][0]

        resp = client.get(f"/invoices/{invoice_id}")

        assert resp.status_code == 200
        assert resp.json() == {
            "invoice": {
                "id": invoice_id,
                "amt": 400,
                "paid": False,
                "add_date": _today(),
                "paid_date": None,
                "company": {"code": "ibm", "name": "IBM", "description": "Big blue."},
            }
        }

    def test_not_found(self, client):
        resp = client.get("/invoices/9999")

        assert resp.status_code == 404
        assert resp.json()["error"]["message"] == "Invoice '9999' not found"

    def test_non_integer_id_is_400(self, client):
        resp = client.get("/invoices/abc")

        assert resp.status_code == 400

    def test_id_wider_than_64_bits_is_400(self, client):
        for method in ("get", "delete"):
            resp = getattr(client, method)("/invoices/99999999999999999999")

            assert resp.status_code == 400
            assert resp.json()["error"]["kind"] == "validation_error"

        resp = client.put("/invoices/99999999999999999999", json={"amt": 1})
        assert resp.status_code == 400

    def test_orphaned_invoice_has_null_company(self, client, engine):
        with engine.connect() as conn:
            conn.exec_driver_sql("PRAGMA foreign_keys=OFF")
            conn.execute(text("INSERT INTO invoices (id, comp_code, amt) VALUES (7, 'gone', 5)"))
            conn.commit()
            conn.exec_driver_sql("PRAGMA foreign_keys=ON")

        resp = client.get("/invoices/7")

        assert resp.status_code == 200
        assert resp.json()["invoice"]["company"] == {
            "code": None,
            "name": None,
            "description": None,
        }

    def test_detail_projection(self):
        row = {
            "id": 1,
            "amt": 10.5,
            "paid": False,
            "add_date": "2024-01-02",
            "paid_date": None,
            "company_code": "acme",
            "company_name": "Acme",
            "company_description": None,
        }

        detail = _row_to_invoice_detail(row)

        assert detail.company.code == "acme"
        assert detail.company.description is None
        assert detail.add_date.isoformat() == "2024-01-02"


class TestCreateInvoice:
    def test_defaults(self, client, seeded):
        resp = client.post("/invoices", json={"comp_code": "ibm", "amt": 250})

        assert resp.status_code == 201
        invoice = resp.json()["invoice"]
        assert isinstance(invoice["id"], int)
        assert invoice["comp_code"] == "ibm"
        assert invoice["amt"] == 250
        assert invoice["paid"] is False
        assert invoice["add_date"] == _today()
        assert invoice["paid_date"] is None

    def test_zero_amount_is_400(self, client, seeded):
        resp = client.post("/invoices", json={"comp_code": "ibm", "amt": 0})

        assert resp.status_code == 400
        assert resp.json()["error"]["message"] == "comp_code and amt are required"

    def test_missing_comp_code_is_400(self, client):
        resp = client.post("/invoices", json={"amt": 10})

        assert resp.status_code == 400

    def test_unknown_company_is_a_storage_error(self, client):
        resp = client.post("/invoices", json={"comp_code": "nope", "amt": 10})

        assert resp.status_code == 500
        assert resp.json()["error"]["message"] == "A database error occurred"

    def test_negative_amount_rejected_by_storage(self, client, seeded):
        resp = client.post("/invoices", json={"comp_code": "ibm", "amt": -5})

        assert resp.status_code == 500

    def test_paid_cannot_be_set(self, client, seeded):
        resp = client.post("/invoices", json={"comp_code": "ibm", "amt": 5, "paid": True})

        assert resp.json()["invoice"]["paid"] is False


class TestUpdateInvoice:
    def test_updates_only_amount(self, client, seeded):
        invoice_id = seeded["apple"][0]

        resp = client.put(
            f"/invoices/{invoice_id}",
            json={"amt": 999, "comp_code": "ibm", "paid": True},
        )

        assert resp.status_code == 200
        invoice = resp.json()["invoice"]
        assert invoice["id"] == invoice_id
        assert invoice["amt"] == 999
        assert invoice["comp_code"] == "apple"
        assert invoice["paid"] is False
        assert set(invoice) == {"id", "comp_code", "amt", "paid", "add_date", "paid_date"}

    def test_missing_amount_is_400(self, client, seeded):
        resp = client.put(f"/invoices/{seeded['ibm'][0]}", json={})

        assert resp.status_code == 400
        assert resp.json()["error"]["message"] == "Amount is required"

    def test_zero_amount_is_400(self, client, seeded):
        resp = client.put(f"/invoices/{seeded['ibm'][0]}", json={"amt": 0})

        assert resp.status_code == 400

    def test_not_found(self, client):
        resp = client.put("/invoices/9999", json={"amt": 1})

        assert resp.status_code == 404


class TestDeleteInvoice:
    def test_delete_twice(self, client, engine, seeded):
        invoice_id = seeded["ibm"][0]

        first = client.delete(f"/invoices/{invoice_id}")
        second = client.delete(f"/invoices/{invoice_id}")

        assert first.json() == {"status": "deleted"}
        assert second.status_code == 404
        with engine.connect() as conn:
            remaining = conn.execute(invoices.select()).all()
        assert len(remaining) == 2
        assert client.get("/companies/ibm").json()["company"]["invoices"] == []


class TestAmountRendering:
    def test_whole_amount_is_an_integer_in_json(self, client, seeded):
        resp = client.post("/invoices", json={"comp_code": "ibm", "amt": 100})

        assert '"amt":100,' in resp.text
        assert type(resp.json()["invoice"]["amt"]) is int

        detail = client.get(f"/invoices/{resp.json()['invoice']['id']}")
        assert type(detail.json()["invoice"]["amt"]) is int

    def test_fractional_amount_is_kept(self, client, seeded):
        resp = client.post("/invoices", json={"comp_code": "ibm", "amt": 10.5})

        assert resp.json()["invoice"]["amt"] == 10.5
