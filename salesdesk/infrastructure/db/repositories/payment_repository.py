# salesdesk/infrastructure/db/repositories/payment_repository.py
"""Repository for invoice payments and payment aggregation."""

from __future__ import annotations

import uuid
from decimal import Decimal

from sqlalchemy import and_, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from salesdesk.infrastructure.db.models import Document, Payment


class PaymentRepository:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def add(self, payment: Payment, invoice: Document) -> Payment:
        """Store a payment and the invoice's new paid amount/status in one commit."""
        self.db.add(payment)
        self.db.add(invoice)
        await self.db.commit()
        await self.db.refresh(payment)
        await self.db.refresh(invoice)
        return payment

    async def list_for_invoice(self, company_id: str, invoice_id: uuid.UUID) -> list[Payment]:
        """All payments for an invoice, most recent first."""
        stmt = (
            select(Payment)
            .where(Payment.company_id == company_id, Payment.invoice_id == invoice_id)
            .order_by(Payment.created_at.desc())
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def total_completed(self, company_id: str, invoice_id: uuid.UUID) -> Decimal:
        """Sum of completed payments for an invoice."""
        stmt = select(func.coalesce(func.sum(Payment.amount), 0)).where(
            and_(
                Payment.company_id == company_id,
                Payment.invoice_id == invoice_id,
                Payment.status == "completed",
            )
        )
        return Decimal(str((await self.db.execute(stmt)).scalar() or 0))
