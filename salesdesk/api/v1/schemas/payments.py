# salesdesk/api/v1/schemas/payments.py
"""Request and response schemas for invoice payments."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field


class PaymentCreate(BaseModel):
    amount: Decimal = Field(gt=0)
    payment_date: date | None = None
    method: Literal["cash", "bank_transfer", "cheque", "upi", "card", "other"] = "bank_transfer"
    reference: str | None = Field(default=None, max_length=120)
    notes: str | None = None
    status: Literal["pending", "completed", "failed"] = "completed"


class PaymentDetail(BaseModel):
    id: str
    invoice_id: str
    amount: Decimal
    payment_date: date
    method: str
    reference: str | None
    notes: str | None
    status: str
    created_by: str | None
    created_at: datetime | None
