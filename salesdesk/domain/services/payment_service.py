# salesdesk/domain/services/payment_service.py
"""
Payments against invoices.

Only ``completed`` payments count towards ``paid_amount``. When the paid
amount reaches the invoice total the invoice moves ``pending → paid`` through
the regular workflow.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any

from salesdesk.domain.errors import ValidationError
from salesdesk.domain.models.documents import DocumentType
from salesdesk.domain.services.document_service import get_document, today
from salesdesk.domain.services.document_totals import money
from salesdesk.domain.services.document_workflow import INVOICE_SETTLED_STATUSES, apply_transition
from salesdesk.infrastructure.db.models import Document, Payment

logger = logging.getLogger("payment_service")

PAYMENT_METHODS = {"cash", "bank_transfer", "cheque", "upi", "card", "other"}
PAYMENT_STATUSES = {"pending", "completed", "failed"}


@dataclass
class PaymentSummary:
    total_amount: Decimal
    paid_amount: Decimal
    payment_count: int

    @property
    def balance_due(self) -> Decimal:
        return max(self.total_amount - self.paid_amount, Decimal("0.00"))

    @property
    def is_fully_paid(self) -> bool:
        return self.paid_amount >= self.total_amount

    def to_dict(self) -> dict:
        return {
            "total_amount": self.total_amount,
            "paid_amount": self.paid_amount,
            "balance_due": self.balance_due,
            "payment_count": self.payment_count,
            "is_fully_paid": self.is_fully_paid,
        }


def _validate_payment(invoice: Document, payload: dict[str, Any]) -> tuple[Decimal, str, str]:
    errors = []
    try:
        amount = money(Decimal(str(payload.get("amount"))))
    except (InvalidOperation, ValueError, TypeError):
        amount = Decimal("0")
        errors.append({"field": "amount", "message": "Amount must be a number"})
    else:
        if amount <= 0:
            errors.append({"field": "amount", "message": "Amount must be greater than zero"})

    method = payload.get("method") or "bank_transfer"
    if method not in PAYMENT_METHODS:
        errors.append({"field": "method", "message": f"Unknown payment method '{method}'"})

    status = payload.get("status") or "completed"
    if status not in PAYMENT_STATUSES:
        errors.append({"field": "status", "message": f"Unknown payment status '{status}'"})

    if not errors and status == "completed":
        balance = Decimal(str(invoice.total_amount or 0)) - Decimal(str(invoice.paid_amount or 0))
        if amount > balance:
            errors.append({"field": "amount", "message": f"Amount exceeds balance due of {balance}"})

    if errors:
        raise ValidationError("Invalid payment", errors)
    return amount, method, status


async def record_payment(
    repo: Any,
    payment_repo: Any,
    company_id: str,
    invoice_id: Any,
    payload: dict[str, Any],
    *,
    user_id: str | None = None,
) -> tuple[Payment, Document]:
    """
    Record a payment against an invoice.

    Paid or cancelled invoices accept no further payments.
    """
    invoice = await get_document(repo, company_id, DocumentType.INVOICE, invoice_id)
    if invoice.status in INVOICE_SETTLED_STATUSES:
        raise ValidationError.for_field(
            "invoice", f"Invoice {invoice.number} is {invoice.status} and accepts no payments"
        )

    amount, method, status = _validate_payment(invoice, payload)

    payment = Payment(
        id=uuid.uuid4(),
        company_id=company_id,
        invoice_id=invoice.id,
        amount=amount,
        payment_date=payload.get("payment_date") or today(),
        method=method,
        reference=payload.get("reference"),
        notes=payload.get("notes"),
        status=status,
        created_by=user_id,
    )

    if status == "completed":
        invoice.paid_amount = money(Decimal(str(invoice.paid_amount or 0)) + amount)
        if invoice.paid_amount >= Decimal(str(invoice.total_amount or 0)):
            apply_transition(invoice, DocumentType.INVOICE, "paid")

    payment = await payment_repo.add(payment, invoice)
    logger.info(
        "Payment of %s recorded on invoice %s (%s, paid %s of %s)",
        amount, invoice.number, status, invoice.paid_amount, invoice.total_amount,
    )
    return payment, invoice


async def list_payments(
    repo: Any,
    payment_repo: Any,
    company_id: str,
    invoice_id: Any,
) -> tuple[list[Payment], PaymentSummary]:
    invoice = await get_document(repo, company_id, DocumentType.INVOICE, invoice_id)
    payments = await payment_repo.list_for_invoice(company_id, invoice.id)
    paid = await payment_repo.total_completed(company_id, invoice.id)
    if paid != Decimal(str(invoice.paid_amount or 0)):
        logger.warning(
            "Invoice %s paid_amount %s differs from completed payments %s",
            invoice.number, invoice.paid_amount, paid,
        )
    summary = PaymentSummary(
        total_amount=Decimal(str(invoice.total_amount or 0)),
        paid_amount=money(paid),
        payment_count=len(payments),
    )
    return payments, summary
