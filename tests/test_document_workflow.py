"""Tests for document status workflows."""

from datetime import date
from types import SimpleNamespace

import pytest

from salesdesk.domain.errors import InvalidStatusTransition
from salesdesk.domain.models.documents import DocumentType
from salesdesk.domain.services.document_workflow import (
    INITIAL_STATUS,
    allowed_transitions,
    apply_transition,
    effective_status,
    is_terminal,
    status_badge,
    validate_transition,
)


class TestQuotationWorkflow:

    def test_happy_path(self):
        validate_transition(DocumentType.QUOTATION, "draft", "sent")
        validate_transition(DocumentType.QUOTATION, "sent", "accepted")

    def test_cannot_accept_a_draft(self):
        with pytest.raises(InvalidStatusTransition):
            validate_transition(DocumentType.QUOTATION, "draft", "accepted")

    @pytest.mark.parametrize("current", ["sent", "accepted", "rejected", "expired"])
    def test_reset_to_draft_from_anywhere(self, current):
        validate_transition(DocumentType.QUOTATION, current, "draft")

    def test_draft_cannot_reset_to_itself(self):
        assert "draft" not in allowed_transitions(DocumentType.QUOTATION, "draft")


class TestOrderWorkflow:

    def test_full_lifecycle(self):
        record = SimpleNamespace(status=INITIAL_STATUS[DocumentType.ORDER], number="RX-VO25-25-07-001")
        for status in ("shipped", "delivered", "completed"):
            apply_transition(record, DocumentType.ORDER, status)
        assert record.status == "completed"
        assert is_terminal(DocumentType.ORDER, "completed")

    def test_cannot_cancel_after_shipping(self):
        with pytest.raises(InvalidStatusTransition):
            validate_transition(DocumentType.ORDER, "shipped", "cancelled")

    def test_failed_transition_leaves_record_untouched(self):
        record = SimpleNamespace(status="completed", number="RX-VO25-25-07-001")
        with pytest.raises(InvalidStatusTransition) as exc:
            apply_transition(record, DocumentType.ORDER, "processing")
        assert record.status == "completed"
        assert exc.value.allowed == []


class TestInvoiceWorkflow:

    def test_pending_to_paid(self):
        validate_transition(DocumentType.INVOICE, "pending", "paid")

    def test_overdue_is_not_a_stored_status(self):
        with pytest.raises(InvalidStatusTransition):
            validate_transition(DocumentType.INVOICE, "pending", "overdue")

    def test_effective_status_overdue(self):
        today = date(2025, 8, 20)
        assert effective_status(DocumentType.INVOICE, "pending", date(2025, 8, 1), today) == "overdue"
        assert effective_status(DocumentType.INVOICE, "paid", date(2025, 8, 1), today) == "paid"
        assert effective_status(DocumentType.INVOICE, "pending", date(2025, 9, 1), today) == "pending"
        assert effective_status(DocumentType.QUOTATION, "sent", date(2025, 8, 1), today) == "sent"


class TestOtherWorkflows:

    def test_purchase_order_cancel_from_open_states(self):
        for current in ("draft", "pending", "approved"):
            validate_transition(DocumentType.PURCHASE_ORDER, current, "cancelled")
        with pytest.raises(InvalidStatusTransition):
            validate_transition(DocumentType.PURCHASE_ORDER, "received", "cancelled")

    def test_manufacturing_job_stages(self):
        record = SimpleNamespace(status="pending", job_number="RX-JO25-25-07-001")
        for status in ("started", "in-assembly", "qa", "packed", "shipped"):
            apply_transition(record, DocumentType.MANUFACTURING_JOB, status)
        assert is_terminal(DocumentType.MANUFACTURING_JOB, record.status)

    def test_delivery_challan_cannot_skip_dispatch(self):
        with pytest.raises(InvalidStatusTransition):
            validate_transition(DocumentType.DELIVERY_CHALLAN, "draft", "delivered")


def test_status_badges():
    assert status_badge("paid") == {"label": "Paid", "color": "green"}
    assert status_badge("on_hold") == {"label": "On Hold", "color": "gray"}
