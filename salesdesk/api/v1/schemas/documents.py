# salesdesk/api/v1/schemas/documents.py
"""Request and response schemas shared by all sales document endpoints."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from salesdesk.domain.models.documents import DiscountType


class LineItemIn(BaseModel):
    item_code: str | None = Field(default=None, max_length=50)
    description: str = Field(default="", max_length=1000)
    hsn_sac: str | None = Field(default=None, max_length=20)
    quantity: Decimal = Field(default=Decimal("1"), gt=0)
    unit: str = Field(default="nos", max_length=20)
    rate: Decimal = Field(default=Decimal("0"), ge=0)
    discount: Decimal = Field(default=Decimal("0"), ge=0)
    discount_type: DiscountType = DiscountType.AMOUNT
    cgst_rate: Decimal = Field(default=Decimal("0"), ge=0, le=100)
    sgst_rate: Decimal = Field(default=Decimal("0"), ge=0, le=100)
    igst_rate: Decimal = Field(default=Decimal("0"), ge=0, le=100)
    lead_time: str | None = Field(default=None, max_length=50)


class ChargeIn(BaseModel):
    description: str = Field(default="", max_length=200)
    amount: Decimal = Field(default=Decimal("0"), ge=0)


class BankDetailsIn(BaseModel):
    bank_name: str | None = Field(default=None, max_length=120)
    branch: str | None = Field(default=None, max_length=120)
    account_no: str | None = Field(default=None, max_length=40)
    ifsc: str | None = Field(default=None, max_length=20)


class DocumentUpdate(BaseModel):
    """Whole-record replace of the editable fields. Totals are always recomputed."""

    number: str | None = Field(default=None, max_length=50)
    document_date: date | None = None
    valid_until: date | None = None
    reference: str | None = Field(default=None, max_length=120)

    customer_id: str | None = Field(default=None, max_length=64)
    lead_id: str | None = Field(default=None, max_length=64)
    supplier_id: str | None = Field(default=None, max_length=64)
    contact_person_title: str | None = Field(default=None, max_length=20)
    contact_person: str | None = Field(default=None, max_length=200)
    customer_company: str | None = Field(default=None, max_length=200)
    email: str | None = Field(default=None, max_length=200)
    phone: str | None = Field(default=None, max_length=30)
    gstin: str | None = Field(default=None, max_length=20)

    address_line1: str | None = Field(default=None, max_length=255)
    address_line2: str | None = Field(default=None, max_length=255)
    city: str | None = Field(default=None, max_length=100)
    state: str | None = Field(default=None, max_length=100)
    country: str | None = Field(default="India", max_length=100)
    pincode: str | None = Field(default=None, max_length=20)

    same_as_billing: bool = True
    shipping_address_line1: str | None = Field(default=None, max_length=255)
    shipping_address_line2: str | None = Field(default=None, max_length=255)
    shipping_city: str | None = Field(default=None, max_length=100)
    shipping_state: str | None = Field(default=None, max_length=100)
    shipping_country: str | None = Field(default=None, max_length=100)
    shipping_pincode: str | None = Field(default=None, max_length=20)

    items: list[LineItemIn] = Field(default_factory=list)
    extra_charges: list[ChargeIn] = Field(default_factory=list)
    discounts: list[ChargeIn] = Field(default_factory=list)
    terms: list[str] = Field(default_factory=list)
    notes: str | None = None
    bank_details: BankDetailsIn | None = None

    auto_gst: bool = Field(
        default=False,
        description="Fill tax rates on items without any from the place of supply",
    )


class DocumentCreate(DocumentUpdate):
    """Create a document. Leave ``number`` empty to have one generated."""


class StatusChange(BaseModel):
    status: str = Field(min_length=1, max_length=30)


class TotalsOut(BaseModel):
    subtotal: Decimal
    taxable_total: Decimal
    cgst_total: Decimal
    sgst_total: Decimal
    igst_total: Decimal
    tax_total: Decimal
    total_amount: Decimal
    gross_total: Decimal
    line_discount_total: Decimal
    extra_charges_total: Decimal
    discounts_total: Decimal
    amount_in_words: str | None = None


class StatusBadge(BaseModel):
    label: str
    color: str


class DocumentSummary(BaseModel):
    """Row in a document list."""

    id: str
    number: str
    document_type: str
    document_date: date | None
    valid_until: date | None
    customer_id: str | None
    customer_company: str | None
    contact_person: str | None
    total_amount: Decimal
    status: str
    display_status: str
    badge: StatusBadge
    created_at: datetime | None


class DocumentDetail(DocumentSummary):
    """Full document returned by get/create/update/convert."""

    reference: str | None
    lead_id: str | None
    supplier_id: str | None
    contact_person_title: str | None
    email: str | None
    phone: str | None
    gstin: str | None

    address_line1: str | None
    address_line2: str | None
    city: str | None
    state: str | None
    country: str | None
    pincode: str | None
    same_as_billing: bool
    shipping_address_line1: str | None
    shipping_address_line2: str | None
    shipping_city: str | None
    shipping_state: str | None
    shipping_country: str | None
    shipping_pincode: str | None

    items: list[dict]
    extra_charges: list[dict]
    discounts: list[dict]
    terms: list[str]
    notes: str | None
    bank_details: dict | None

    totals: TotalsOut
    paid_amount: Decimal
    allowed_transitions: list[str]
    source_document_id: str | None
    created_by: str | None
    updated_at: datetime | None
