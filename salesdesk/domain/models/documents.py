from __future__ import annotations

from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class DocumentType(str, Enum):
    QUOTATION = "quotation"
    PROFORMA = "proforma"
    ORDER = "order"
    INVOICE = "invoice"
    PURCHASE_ORDER = "purchase-order"
    DELIVERY_CHALLAN = "delivery-challan"
    MANUFACTURING_JOB = "manufacturing-job"


# Types stored in the ``documents`` table (manufacturing jobs have their own)
SALES_DOCUMENT_TYPES: tuple[DocumentType, ...] = (
    DocumentType.QUOTATION,
    DocumentType.PROFORMA,
    DocumentType.ORDER,
    DocumentType.INVOICE,
    DocumentType.PURCHASE_ORDER,
    DocumentType.DELIVERY_CHALLAN,
)


class DiscountType(str, Enum):
    PERCENTAGE = "percentage"
    AMOUNT = "amount"


class LineItem(BaseModel):
    """One row of a document. Amounts are unchecked here, the calculator validates them."""

    item_code: Optional[str] = None
    description: str = ""
    hsn_sac: Optional[str] = None
    quantity: Decimal = Field(default=Decimal("1"))
    unit: str = "nos"
    rate: Decimal = Field(default=Decimal("0"))
    discount: Decimal = Field(default=Decimal("0"))
    discount_type: DiscountType = DiscountType.AMOUNT
    cgst_rate: Decimal = Field(default=Decimal("0"))
    sgst_rate: Decimal = Field(default=Decimal("0"))
    igst_rate: Decimal = Field(default=Decimal("0"))
    lead_time: Optional[str] = None


class Charge(BaseModel):
    """Document-level extra charge (freight, packing...) or flat discount."""

    description: str = ""
    amount: Decimal = Field(default=Decimal("0"))


class DocumentTotals(BaseModel):
    subtotal: Decimal = Field(default=Decimal("0.00"))
    taxable_total: Decimal = Field(default=Decimal("0.00"))
    cgst_total: Decimal = Field(default=Decimal("0.00"))
    sgst_total: Decimal = Field(default=Decimal("0.00"))
    igst_total: Decimal = Field(default=Decimal("0.00"))
    total_amount: Decimal = Field(default=Decimal("0.00"))

    # Informational breakdown (rendered on documents)
    gross_total: Decimal = Field(default=Decimal("0.00"))
    line_discount_total: Decimal = Field(default=Decimal("0.00"))
    extra_charges_total: Decimal = Field(default=Decimal("0.00"))
    discounts_total: Decimal = Field(default=Decimal("0.00"))

    @property
    def tax_total(self) -> Decimal:
        return self.cgst_total + self.sgst_total + self.igst_total


class BankDetails(BaseModel):
    bank_name: Optional[str] = None
    branch: Optional[str] = None
    account_no: Optional[str] = None
    ifsc: Optional[str] = None
