# salesdesk/api/v1/routes/invoices.py
"""
Invoice endpoints: CRUD, status, PDF and payments.

``GET /invoices?status=overdue`` lists pending invoices past their due date.
"""

from __future__ import annotations

from fastapi import Depends, status

from salesdesk.api.v1.deps import Principal, get_document_repo, get_payment_repo, get_principal
from salesdesk.api.v1.envelope import ok
from salesdesk.api.v1.routes.documents import build_document_router, document_to_detail
from salesdesk.api.v1.schemas.payments import PaymentCreate, PaymentDetail
from salesdesk.domain.models.documents import DocumentType
from salesdesk.domain.services.payment_service import list_payments, record_payment
from salesdesk.infrastructure.audit import log_document_action
from salesdesk.infrastructure.db.models import Payment
from salesdesk.infrastructure.db.repositories import DocumentRepository, PaymentRepository

router = build_document_router(DocumentType.INVOICE, "/invoices", "Invoices")


def _payment_to_detail(payment: Payment) -> dict:
    return PaymentDetail(
        id=str(payment.id),
        invoice_id=str(payment.invoice_id),
        amount=payment.amount,
        payment_date=payment.payment_date,
        method=payment.method,
        reference=payment.reference,
        notes=payment.notes,
        status=payment.status,
        created_by=payment.created_by,
        created_at=payment.created_at,
    ).model_dump()


@router.post("/{document_id}/payments", response_model=dict, status_code=status.HTTP_201_CREATED)
async def add_payment(
    document_id: str,
    body: PaymentCreate,
    principal: Principal = Depends(get_principal),
    repo: DocumentRepository = Depends(get_document_repo),
    payment_repo: PaymentRepository = Depends(get_payment_repo),
):
    payment, invoice = await record_payment(
        repo,
        payment_repo,
        principal.company_id,
        document_id,
        body.model_dump(),
        user_id=principal.user_id,
    )
    log_document_action(
        "payment", company_id=principal.company_id, user_id=principal.user_id,
        document_type=DocumentType.INVOICE.value, number=invoice.number,
        details={"amount": str(payment.amount), "status": payment.status},
    )
    return ok(
        data={"payment": _payment_to_detail(payment), "invoice": document_to_detail(invoice)},
        message="Payment recorded",
    )


@router.get("/{document_id}/payments", response_model=dict)
async def get_payments(
    document_id: str,
    principal: Principal = Depends(get_principal),
    repo: DocumentRepository = Depends(get_document_repo),
    payment_repo: PaymentRepository = Depends(get_payment_repo),
):
    payments, summary = await list_payments(repo, payment_repo, principal.company_id, document_id)
    return ok(data={"payments": [_payment_to_detail(p) for p in payments], "summary": summary.to_dict()})
