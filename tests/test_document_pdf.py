"""Tests for the default PDF renderer."""

from salesdesk.domain.models.documents import DocumentType
from salesdesk.domain.services import document_service
from salesdesk.domain.services.document_pdf import render_document_pdf
from salesdesk.domain.services.print_config import DEFAULT_PRINT_CONFIG

from conftest import COMPANY


def _quotation(event_loop, doc_repo, payload):
    return event_loop.run_until_complete(
        document_service.create_document(doc_repo, DocumentType.QUOTATION, payload, company_id=COMPANY)
    )


def test_renders_with_defaults(event_loop, doc_repo, quotation_payload):
    doc = _quotation(event_loop, doc_repo, quotation_payload)
    pdf = render_document_pdf(doc)
    assert pdf.startswith(b"%PDF")
    assert len(pdf) > 1000


def test_renders_with_every_option_toggled(event_loop, doc_repo, quotation_payload):
    payload = dict(quotation_payload, notes="Deliver to gate 3 & call ahead")
    payload["items"] = [dict(payload["items"][0], item_code="CP-01", lead_time="2 weeks")]
    doc = _quotation(event_loop, doc_repo, payload)

    all_on = {key: True for key in DEFAULT_PRINT_CONFIG}
    all_off = {key: False for key in DEFAULT_PRINT_CONFIG}
    assert render_document_pdf(doc, all_on, title="PROFORMA INVOICE").startswith(b"%PDF")
    assert render_document_pdf(doc, all_off).startswith(b"%PDF")
