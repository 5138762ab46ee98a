# salesdesk/domain/services/document_workflow.py
"""
Document status workflow.

Each document type has its own lifecycle:

  quotation:          draft → sent → accepted | rejected | expired  (reset to draft from anywhere)
  proforma:           draft → sent → accepted | cancelled
  order:              processing → shipped → delivered → completed, processing → cancelled
  invoice:            pending → paid | cancelled   (``overdue`` is derived on read)
  purchase-order:     draft → pending → approved → received, cancelled from any open state
  delivery-challan:   draft → dispatched → delivered, cancelled before delivery
  manufacturing-job:  pending → started | in_progress → in-assembly → qa → packed → shipped

Transitions are explicit; nothing cascades to other records.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any

from salesdesk.domain.errors import InvalidStatusTransition
from salesdesk.domain.models.documents import DocumentType

logger = logging.getLogger("document_workflow")


# ---------------------------------------------------------------------------
# Valid state transitions
# ---------------------------------------------------------------------------

QUOTATION_TRANSITIONS: dict[str, list[str]] = {
    "draft": ["sent"],
    "sent": ["accepted", "rejected", "expired"],
    "accepted": [],
    "rejected": [],
    "expired": [],
}

# Any quotation may be put back to draft by the user
QUOTATION_RESET_STATUS = "draft"

PROFORMA_TRANSITIONS: dict[str, list[str]] = {
    "draft": ["sent", "cancelled"],
    "sent": ["accepted", "cancelled"],
    "accepted": [],
    "cancelled": [],
}

ORDER_TRANSITIONS: dict[str, list[str]] = {
    "processing": ["shipped", "cancelled"],
    "shipped": ["delivered"],
    "delivered": ["completed"],
    "completed": [],  # terminal
    "cancelled": [],  # terminal
}

INVOICE_TRANSITIONS: dict[str, list[str]] = {
    "pending": ["paid", "cancelled"],
    "paid": [],
    "cancelled": [],
}

PURCHASE_ORDER_TRANSITIONS: dict[str, list[str]] = {
    "draft": ["pending", "cancelled"],
    "pending": ["approved", "cancelled"],
    "approved": ["received", "cancelled"],
    "received": [],
    "cancelled": [],
}

DELIVERY_CHALLAN_TRANSITIONS: dict[str, list[str]] = {
    "draft": ["dispatched", "cancelled"],
    "dispatched": ["delivered", "cancelled"],
    "delivered": [],
    "cancelled": [],
}

MANUFACTURING_JOB_TRANSITIONS: dict[str, list[str]] = {
    "pending": ["started", "in_progress", "cancelled"],
    "started": ["in-assembly", "cancelled"],
    "in_progress": ["in-assembly", "cancelled"],
    "in-assembly": ["qa", "cancelled"],
    "qa": ["packed", "cancelled"],
    "packed": ["shipped", "cancelled"],
    "shipped": [],
    "cancelled": [],
}

VALID_TRANSITIONS: dict[DocumentType, dict[str, list[str]]] = {
    DocumentType.QUOTATION: QUOTATION_TRANSITIONS,
    DocumentType.PROFORMA: PROFORMA_TRANSITIONS,
    DocumentType.ORDER: ORDER_TRANSITIONS,
    DocumentType.INVOICE: INVOICE_TRANSITIONS,
    DocumentType.PURCHASE_ORDER: PURCHASE_ORDER_TRANSITIONS,
    DocumentType.DELIVERY_CHALLAN: DELIVERY_CHALLAN_TRANSITIONS,
    DocumentType.MANUFACTURING_JOB: MANUFACTURING_JOB_TRANSITIONS,
}

INITIAL_STATUS: dict[DocumentType, str] = {
    DocumentType.QUOTATION: "draft",
    DocumentType.PROFORMA: "draft",
    DocumentType.ORDER: "processing",
    DocumentType.INVOICE: "pending",
    DocumentType.PURCHASE_ORDER: "draft",
    DocumentType.DELIVERY_CHALLAN: "draft",
    DocumentType.MANUFACTURING_JOB: "pending",
}

# Display-only, computed on read
OVERDUE = "overdue"
INVOICE_SETTLED_STATUSES = {"paid", "cancelled"}


# ---------------------------------------------------------------------------
# Badges
# ---------------------------------------------------------------------------

STATUS_BADGES: dict[str, dict[str, str]] = {
    "draft": {"label": "Draft", "color": "gray"},
    "sent": {"label": "Sent", "color": "blue"},
    "accepted": {"label": "Accepted", "color": "green"},
    "rejected": {"label": "Rejected", "color": "red"},
    "expired": {"label": "Expired", "color": "orange"},
    "processing": {"label": "Processing", "color": "blue"},
    "shipped": {"label": "Shipped", "color": "purple"},
    "delivered": {"label": "Delivered", "color": "green"},
    "completed": {"label": "Completed", "color": "green"},
    "cancelled": {"label": "Cancelled", "color": "red"},
    "pending": {"label": "Pending", "color": "yellow"},
    "paid": {"label": "Paid", "color": "green"},
    "overdue": {"label": "Overdue", "color": "red"},
    "approved": {"label": "Approved", "color": "green"},
    "received": {"label": "Received", "color": "green"},
    "dispatched": {"label": "Dispatched", "color": "purple"},
    "started": {"label": "Started", "color": "blue"},
    "in_progress": {"label": "In Progress", "color": "blue"},
    "in-assembly": {"label": "In Assembly", "color": "indigo"},
    "qa": {"label": "Quality Check", "color": "orange"},
    "packed": {"label": "Packed", "color": "teal"},
}


def status_badge(status: str) -> dict[str, str]:
    """Label and colour for a status; unknown statuses fall back to a gray badge."""
    return STATUS_BADGES.get(status, {"label": status.replace("_", " ").title(), "color": "gray"})


# ---------------------------------------------------------------------------
# Transition validation
# ---------------------------------------------------------------------------

def allowed_transitions(document_type: DocumentType, current_status: str) -> list[str]:
    allowed = list(VALID_TRANSITIONS[document_type].get(current_status, []))
    if document_type == DocumentType.QUOTATION and current_status != QUOTATION_RESET_STATUS:
        allowed.append(QUOTATION_RESET_STATUS)
    return allowed


def validate_transition(document_type: DocumentType, current_status: str, new_status: str) -> None:
    """Raise InvalidStatusTransition if ``current_status → new_status`` is not allowed."""
    allowed = allowed_transitions(document_type, current_status)
    if new_status not in allowed:
        raise InvalidStatusTransition(document_type.value, current_status, new_status, allowed)


def is_terminal(document_type: DocumentType, status: str) -> bool:
    return not VALID_TRANSITIONS[document_type].get(status)


def effective_status(
    document_type: DocumentType,
    status: str,
    due_date: date | None,
    today: date | None = None,
) -> str:
    """
    Status to display.

    An unpaid invoice past its due date reads as ``overdue``; the stored status
    stays ``pending``.
    """
    if document_type != DocumentType.INVOICE or due_date is None:
        return status
    today = today or date.today()
    if due_date < today and status not in INVOICE_SETTLED_STATUSES:
        return OVERDUE
    return status


# ---------------------------------------------------------------------------
# Workflow operation
# ---------------------------------------------------------------------------

def apply_transition(record: Any, document_type: DocumentType, new_status: str) -> Any:
    """
    Validate and set ``record.status``. The record is left untouched on failure.
    """
    current = record.status
    validate_transition(document_type, current, new_status)
    record.status = new_status
    logger.info(
        "%s %s status %s → %s",
        document_type.value,
        getattr(record, "number", None) or getattr(record, "job_number", None),
        current,
        new_status,
    )
    return record
