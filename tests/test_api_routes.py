"""HTTP tests for the v1 document API, run against in-memory repositories."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from jose import jwt

from salesdesk.api.routes import api_router
from salesdesk.api.v1 import v1_router
from salesdesk.api.v1.deps import (
    Principal,
    get_document_repo,
    get_job_repo,
    get_payment_repo,
    get_principal,
    get_print_config_repo,
)
from salesdesk.api.v1.errors import register_exception_handlers
from salesdesk.core.config import settings

from conftest import COMPANY, OTHER_COMPANY, USER


def _build_app(doc_repo, job_repo, payment_repo, print_config_repo) -> FastAPI:
    app = FastAPI()
    register_exception_handlers(app)
    app.include_router(api_router)
    app.include_router(v1_router)
    app.dependency_overrides[get_document_repo] = lambda: doc_repo
    app.dependency_overrides[get_job_repo] = lambda: job_repo
    app.dependency_overrides[get_payment_repo] = lambda: payment_repo
    app.dependency_overrides[get_print_config_repo] = lambda: print_config_repo
    return app


@pytest.fixture
def app(doc_repo, job_repo, payment_repo, print_config_repo):
    app = _build_app(doc_repo, job_repo, payment_repo, print_config_repo)
    app.dependency_overrides[get_principal] = lambda: Principal(user_id=USER, company_id=COMPANY)
    return app


@pytest.fixture
def client(app):
    return TestClient(app)


def _create_quotation(client, payload):
    resp = client.post("/api/v1/quotations", json=payload)
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]


class TestQuotationRoutes:

    def test_create_and_get(self, client, quotation_payload):
        data = _create_quotation(client, quotation_payload)
        assert data["number"].startswith("RX-VQ")
        assert data["status"] == "draft"
        assert data["badge"] == {"label": "Draft", "color": "gray"}
        assert data["allowed_transitions"] == ["sent"]
        assert data["totals"]["total_amount"] == 2814
        assert data["totals"]["amount_in_words"].startswith("Rupees two thousand eight hundred")

        resp = client.get(f"/api/v1/quotations/{data['number']}")
        assert resp.status_code == 200
        assert resp.json()["data"]["id"] == data["id"]

    def test_duplicate_number_is_conflict(self, client, quotation_payload):
        _create_quotation(client, dict(quotation_payload, number="RX-VQ25-25-07-001"))
        resp = client.post("/api/v1/quotations", json=dict(quotation_payload, number="RX-VQ25-25-07-001"))
        assert resp.status_code == 409
        body = resp.json()
        assert body["status"] == "error"
        assert body["data"] is None
        assert "RX-VQ25-25-07-001" in body["message"]

    def test_request_validation_uses_error_envelope(self, client, quotation_payload):
        payload = dict(quotation_payload, items=[{"quantity": 0, "rate": 10}])
        resp = client.post("/api/v1/quotations", json=payload)
        assert resp.status_code == 422
        body = resp.json()
        assert body["status"] == "error"
        assert body["errors"][0]["field"] == "items.0.quantity"

    def test_status_change(self, client, quotation_payload):
        data = _create_quotation(client, quotation_payload)
        resp = client.post(f"/api/v1/quotations/{data['id']}/status", json={"status": "sent"})
        assert resp.status_code == 200
        assert resp.json()["data"]["status"] == "sent"

        resp = client.post(f"/api/v1/quotations/{data['id']}/status", json={"status": "paid"})
        assert resp.status_code == 409

    def test_update_and_delete(self, client, quotation_payload):
        data = _create_quotation(client, quotation_payload)
        payload = dict(quotation_payload, items=[{"quantity": 1, "rate": 100, "igst_rate": 18}], extra_charges=[])
        resp = client.put(f"/api/v1/quotations/{data['id']}", json=payload)
        assert resp.status_code == 200
        assert resp.json()["data"]["totals"]["total_amount"] == 118

        assert client.delete(f"/api/v1/quotations/{data['id']}").status_code == 200
        assert client.get(f"/api/v1/quotations/{data['id']}").status_code == 404

    def test_list_is_paginated(self, client, quotation_payload):
        for _ in range(3):
            _create_quotation(client, quotation_payload)
        resp = client.get("/api/v1/quotations", params={"limit": 2})
        page = resp.json()["data"]
        assert page["total"] == 3
        assert len(page["items"]) == 2
        assert page["has_more"] is True

    def test_pdf_downloads(self, client, quotation_payload):
        data = _create_quotation(client, quotation_payload)
        for suffix in ("download-pdf", "proforma-invoice", "delivery-challan"):
            resp = client.get(f"/api/v1/quotations/{data['id']}/{suffix}")
            assert resp.status_code == 200
            assert resp.headers["content-type"] == "application/pdf"
            assert resp.content.startswith(b"%PDF")


class TestConversionRoutes:

    def test_quotation_to_invoice(self, client, quotation_payload):
        quotation = _create_quotation(client, quotation_payload)
        resp = client.post(f"/api/v1/quotations/{quotation['id']}/convert-to-invoice")
        assert resp.status_code == 201
        invoice = resp.json()["data"]
        assert invoice["status"] == "pending"
        assert invoice["number"].startswith("RX-VI")
        assert invoice["source_document_id"] == quotation["id"]
        assert invoice["totals"]["total_amount"] == 2814

        assert client.get(f"/api/v1/invoices/{invoice['id']}").status_code == 200

    def test_order_chain_and_manufacturing_job(self, client, quotation_payload):
        quotation = _create_quotation(client, quotation_payload)
        order = client.post(f"/api/v1/quotations/{quotation['id']}/convert-to-order").json()["data"]
        assert order["status"] == "processing"

        challan = client.post(f"/api/v1/orders/{order['id']}/convert-to-delivery-challan")
        assert challan.status_code == 201
        assert challan.json()["data"]["number"].startswith("RX-DC")

        job = client.post(f"/api/v1/orders/{order['id']}/manufacturing-jobs", json={"priority": "urgent"})
        assert job.status_code == 201
        job_data = job.json()["data"]
        assert job_data["order_id"] == order["id"]
        assert job_data["priority"] == "urgent"

        resp = client.post(f"/api/v1/manufacturing-jobs/{job_data['id']}/status", json={"status": "started"})
        assert resp.json()["data"]["status"] == "started"

    def test_incomplete_source(self, client):
        quotation = _create_quotation(client, {"items": []})
        resp = client.post(f"/api/v1/quotations/{quotation['id']}/convert-to-order")
        assert resp.status_code == 422
        assert {e["field"] for e in resp.json()["errors"]} == {"customer_id", "items"}

    def test_unknown_source(self, client):
        resp = client.post("/api/v1/quotations/RX-VQ25-25-07-404/convert-to-invoice")
        assert resp.status_code == 404
        assert resp.json()["status"] == "error"


def test_invoice_payments(client, quotation_payload):
    invoice = client.post("/api/v1/invoices", json=quotation_payload).json()["data"]
    resp = client.post(f"/api/v1/invoices/{invoice['id']}/payments", json={"amount": "2814", "method": "cash"})
    assert resp.status_code == 201
    assert resp.json()["data"]["invoice"]["status"] == "paid"

    listing = client.get(f"/api/v1/invoices/{invoice['id']}/payments").json()["data"]
    assert len(listing["payments"]) == 1
    assert listing["summary"]["is_fully_paid"] is True


def test_print_config_routes(client):
    resp = client.put("/api/v1/print-configs/quotation", json={"options": {"bank_details": False}})
    assert resp.status_code == 200
    assert resp.json()["data"]["options"]["bank_details"] is False

    resp = client.put("/api/v1/print-configs/quotation", json={"options": {"watermark": True}})
    assert resp.status_code == 422

    assert client.get("/api/v1/print-configs/payslip").status_code == 404
    resp = client.delete("/api/v1/print-configs/quotation")
    assert resp.json()["data"]["options"]["bank_details"] is True


def test_tenants_are_isolated(app, client, quotation_payload):
    data = _create_quotation(client, quotation_payload)
    app.dependency_overrides[get_principal] = lambda: Principal(user_id="u-2", company_id=OTHER_COMPANY)
    assert client.get(f"/api/v1/quotations/{data['id']}").status_code == 404


def test_health(client):
    assert client.get("/health").json()["status"] == "ok"
    assert client.get("/api/v1/health").status_code == 200


class TestAuth:

    @pytest.fixture
    def secured(self, doc_repo, job_repo, payment_repo, print_config_repo):
        return TestClient(_build_app(doc_repo, job_repo, payment_repo, print_config_repo))

    def test_missing_token(self, secured):
        resp = secured.get("/api/v1/quotations")
        assert resp.status_code == 401
        assert resp.json()["status"] == "error"

    def test_valid_token(self, secured):
        token = jwt.encode({"sub": USER, "company_id": COMPANY}, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)
        resp = secured.get("/api/v1/quotations", headers={"Authorization": f"Bearer {token}"})
        assert resp.status_code == 200
        assert resp.json()["data"]["total"] == 0

    def test_token_without_company(self, secured):
        token = jwt.encode({"sub": USER}, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)
        resp = secured.get("/api/v1/quotations", headers={"Authorization": f"Bearer {token}"})
        assert resp.status_code == 401

    def test_bad_signature(self, secured):
        token = jwt.encode({"sub": USER, "company_id": COMPANY}, "wrong-secret", algorithm="HS256")
        resp = secured.get("/api/v1/quotations", headers={"Authorization": f"Bearer {token}"})
        assert resp.status_code == 401
