"""Tests for the document conversion pipeline."""

from datetime import timedelta
from decimal import Decimal

import pytest

from salesdesk.domain.errors import (
    IncompleteSourceDocument,
    InvalidStatusTransition,
    SourceNotFound,
    ValidationError,
)
from salesdesk.domain.models.documents import DocumentType
from salesdesk.domain.services import document_service
from salesdesk.domain.services.conversion import convert, convert_document

from conftest import COMPANY, OTHER_COMPANY, USER

Q = DocumentType.QUOTATION


@pytest.fixture
def quotation(event_loop, doc_repo, quotation_payload):
    return event_loop.run_until_complete(
        document_service.create_document(doc_repo, Q, quotation_payload, company_id=COMPANY, user_id=USER)
    )


def _convert(event_loop, repo, source, target, company=COMPANY, **kwargs):
    source_type = DocumentType(source.document_type)
    return event_loop.run_until_complete(
        convert_document(repo, company, source_type, source.id, target, user_id=USER, **kwargs)
    )


def test_draft_quotation_to_invoice(event_loop, doc_repo, quotation):
    invoice = _convert(event_loop, doc_repo, quotation, DocumentType.INVOICE)

    assert invoice.status == "pending"
    assert invoice.id != quotation.id
    assert invoice.number != quotation.number
    assert invoice.number.startswith("RX-VI")
    assert invoice.source_document_id == quotation.id
    assert invoice.document_type == "invoice"
    assert invoice.valid_until == invoice.document_date + timedelta(days=30)
    assert quotation.status == "draft"


@pytest.mark.parametrize(
    "target, status, days",
    [
        (DocumentType.PROFORMA, "draft", 15),
        (DocumentType.ORDER, "processing", 30),
        (DocumentType.DELIVERY_CHALLAN, "draft", None),
    ],
)
def test_quotation_targets(event_loop, doc_repo, quotation, target, status, days):
    derived = _convert(event_loop, doc_repo, quotation, target)
    assert derived.status == status
    if days is None:
        assert derived.valid_until is None
    else:
        assert derived.valid_until == derived.document_date + timedelta(days=days)


def test_copies_party_items_and_recomputes_totals(event_loop, doc_repo, quotation):
    # Stored totals drifted (e.g. edited outside the service); conversion recomputes them
    quotation.total_amount = Decimal("1.00")
    order = _convert(event_loop, doc_repo, quotation, DocumentType.ORDER)

    assert order.customer_id == quotation.customer_id
    assert order.customer_company == "Acme Traders"
    assert order.gstin == quotation.gstin
    assert order.shipping_city == "Pune"
    assert order.terms == quotation.terms
    assert order.bank_details == quotation.bank_details
    assert order.total_amount == Decimal("2814.00")
    assert order.cgst_total == Decimal("207.00")


def test_items_are_deep_copied(event_loop, doc_repo, quotation):
    proforma = _convert(event_loop, doc_repo, quotation, DocumentType.PROFORMA)
    proforma.items[0]["description"] = "Changed"
    assert quotation.items[0]["description"] == "Control panel"
    assert proforma.items is not quotation.items


def test_order_to_invoice_chain(event_loop, doc_repo, quotation):
    order = _convert(event_loop, doc_repo, quotation, DocumentType.ORDER)
    invoice = _convert(event_loop, doc_repo, order, DocumentType.INVOICE)
    assert invoice.source_document_id == order.id
    assert invoice.total_amount == order.total_amount


def test_deleting_either_side_leaves_the_other(event_loop, doc_repo, quotation):
    invoice = _convert(event_loop, doc_repo, quotation, DocumentType.INVOICE)
    event_loop.run_until_complete(document_service.delete_document(doc_repo, COMPANY, Q, quotation.id))
    assert invoice.id in doc_repo.rows
    assert invoice.source_document_id == quotation.id

    other = event_loop.run_until_complete(
        document_service.create_document(
            doc_repo, Q, {"lead_id": "lead-1", "items": [{"rate": 10}]}, company_id=COMPANY
        )
    )
    order = _convert(event_loop, doc_repo, other, DocumentType.ORDER)
    event_loop.run_until_complete(document_service.delete_document(doc_repo, COMPANY, DocumentType.ORDER, order.id))
    assert other.id in doc_repo.rows


def test_unknown_source(event_loop, doc_repo):
    with pytest.raises(SourceNotFound):
        event_loop.run_until_complete(
            convert_document(doc_repo, COMPANY, Q, "RX-VQ25-25-07-999", DocumentType.INVOICE)
        )


def test_other_tenant_source_is_not_found(event_loop, doc_repo, quotation):
    with pytest.raises(SourceNotFound):
        _convert(event_loop, doc_repo, quotation, DocumentType.INVOICE, company=OTHER_COMPANY)


def test_source_without_party_or_items(event_loop, doc_repo):
    bare = event_loop.run_until_complete(
        document_service.create_document(doc_repo, Q, {"items": []}, company_id=COMPANY)
    )
    with pytest.raises(IncompleteSourceDocument) as exc:
        _convert(event_loop, doc_repo, bare, DocumentType.INVOICE)
    assert exc.value.missing == ["customer_id", "items"]
    assert len(doc_repo.rows) == 1


def test_unsupported_pair(event_loop, doc_repo, quotation):
    with pytest.raises(ValidationError):
        convert(quotation, DocumentType.PURCHASE_ORDER, number="X-1")


def test_require_accepted_quotation(event_loop, doc_repo, quotation):
    with pytest.raises(InvalidStatusTransition):
        _convert(event_loop, doc_repo, quotation, DocumentType.INVOICE, require_accepted=True)
    assert len(doc_repo.rows) == 1

    quotation.status = "accepted"
    invoice = _convert(event_loop, doc_repo, quotation, DocumentType.INVOICE, require_accepted=True)
    assert invoice.status == "pending"
