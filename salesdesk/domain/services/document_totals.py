# salesdesk/domain/services/document_totals.py
"""
Line-item calculator for sales documents.

Turns line items plus document-level extra charges and discounts into
:class:`DocumentTotals`. Pure and deterministic: callers recompute whenever
items, rates or charges change.

Per line:
    gross          = quantity * rate
    line_base      = gross - discount            (discount_type = amount)
                   = gross - gross * discount/100 (discount_type = percentage)
    taxable_amount = max(line_base, 0)
    cgst/sgst/igst = taxable_amount * rate / 100

Document:
    total_amount = taxable_total + cgst + sgst + igst
                   + sum(extra_charges) - sum(discounts)     (2 dp, half-up)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Iterable, Mapping

from salesdesk.domain.errors import InvalidLineItem, ValidationError
from salesdesk.domain.models.documents import (
    Charge,
    DiscountType,
    DocumentTotals,
    LineItem,
)

logger = logging.getLogger("document_totals")

ZERO = Decimal("0")
HUNDRED = Decimal("100")
CENT = Decimal("0.01")


def money(value: Decimal) -> Decimal:
    """Quantize to the currency minor unit (paise)."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class LineAmounts:
    """Computed amounts for a single line item (unrounded)."""
    gross: Decimal
    discount_amount: Decimal
    line_base: Decimal
    taxable_amount: Decimal
    cgst: Decimal
    sgst: Decimal
    igst: Decimal

    @property
    def amount(self) -> Decimal:
        return self.taxable_amount + self.cgst + self.sgst + self.igst


# ---------------------------------------------------------------------------
# Coercion
# ---------------------------------------------------------------------------

def coerce_item(raw: LineItem | Mapping[str, Any], index: int) -> LineItem:
    if isinstance(raw, LineItem):
        return raw
    try:
        return LineItem.model_validate(raw)
    except ValueError as exc:
        raise InvalidLineItem(
            f"Line item {index + 1} is malformed",
            [{"field": f"items.{index}", "message": str(exc)}],
        ) from exc


def coerce_charge(raw: Charge | Mapping[str, Any], field: str) -> Charge:
    if isinstance(raw, Charge):
        charge = raw
    else:
        try:
            charge = Charge.model_validate(raw)
        except (ValueError, InvalidOperation) as exc:
            raise ValidationError.for_field(field, f"Malformed charge: {exc}") from exc
    if charge.amount < ZERO:
        raise ValidationError.for_field(f"{field}.amount", "Amount must not be negative")
    return charge


def _validate_item(item: LineItem, index: int) -> None:
    errors = []
    for name in ("quantity", "rate", "discount", "cgst_rate", "sgst_rate", "igst_rate"):
        if getattr(item, name) < ZERO:
            errors.append({"field": f"items.{index}.{name}", "message": f"{name} must not be negative"})
    if errors:
        raise InvalidLineItem(f"Line item {index + 1} has negative values", errors)


# ---------------------------------------------------------------------------
# Calculator
# ---------------------------------------------------------------------------

def compute_line(item: LineItem) -> LineAmounts:
    """Compute one line. The item is assumed to be validated."""
    gross = item.quantity * item.rate
    if item.discount_type == DiscountType.PERCENTAGE:
        discount_amount = gross * item.discount / HUNDRED
    else:
        discount_amount = item.discount
    line_base = gross - discount_amount
    taxable = max(line_base, ZERO)

    return LineAmounts(
        gross=gross,
        discount_amount=discount_amount,
        line_base=line_base,
        taxable_amount=taxable,
        cgst=taxable * item.cgst_rate / HUNDRED,
        sgst=taxable * item.sgst_rate / HUNDRED,
        igst=taxable * item.igst_rate / HUNDRED,
    )


def compute_totals(
    items: Iterable[LineItem | Mapping[str, Any]],
    extra_charges: Iterable[Charge | Mapping[str, Any]] | None = None,
    discounts: Iterable[Charge | Mapping[str, Any]] | None = None,
) -> DocumentTotals:
    """
    Compute document totals.

    Raises
    ------
    InvalidLineItem
        If any item has a negative quantity, rate, discount or tax rate.
    ValidationError
        If an extra charge or discount amount is negative or malformed.
    """
    parsed = [coerce_item(raw, i) for i, raw in enumerate(items or [])]
    for i, item in enumerate(parsed):
        _validate_item(item, i)

    charges = [coerce_charge(c, f"extra_charges.{i}") for i, c in enumerate(extra_charges or [])]
    flat_discounts = [coerce_charge(d, f"discounts.{i}") for i, d in enumerate(discounts or [])]

    gross = line_discount = subtotal = taxable = cgst = sgst = igst = ZERO
    for item in parsed:
        line = compute_line(item)
        gross += line.gross
        line_discount += line.discount_amount
        subtotal += line.line_base
        taxable += line.taxable_amount
        cgst += line.cgst
        sgst += line.sgst
        igst += line.igst

    charges_total = sum((c.amount for c in charges), ZERO)
    discounts_total = sum((d.amount for d in flat_discounts), ZERO)
    total = taxable + cgst + sgst + igst + charges_total - discounts_total

    return DocumentTotals(
        subtotal=money(subtotal),
        taxable_total=money(taxable),
        cgst_total=money(cgst),
        sgst_total=money(sgst),
        igst_total=money(igst),
        total_amount=money(total),
        gross_total=money(gross),
        line_discount_total=money(line_discount),
        extra_charges_total=money(charges_total),
        discounts_total=money(discounts_total),
    )


# ---------------------------------------------------------------------------
# GST helpers
# ---------------------------------------------------------------------------

def mixed_supply_lines(items: Iterable[LineItem | Mapping[str, Any]]) -> list[int]:
    """
    Indices of lines carrying both CGST/SGST and IGST.

    A correct record is either intrastate (CGST + SGST) or interstate (IGST),
    never both. The calculator still sums whatever is present.
    """
    mixed = []
    for i, raw in enumerate(items or []):
        item = coerce_item(raw, i)
        if (item.cgst_rate or item.sgst_rate) and item.igst_rate:
            mixed.append(i)
    return mixed


def gst_rates_for_supply(
    company_state: str | None,
    customer_state: str | None,
    customer_country: str | None = "India",
    gst_rate: Decimal | float = Decimal("18"),
) -> tuple[Decimal, Decimal, Decimal]:
    """
    Split a GST rate by place of supply.

    Returns ``(cgst_rate, sgst_rate, igst_rate)``:
    - export (country other than India) → no GST
    - same state as the company → CGST + SGST, half each
    - other Indian state → IGST
    """
    rate = Decimal(str(gst_rate))
    country = (customer_country or "India").strip().lower()
    if country != "india":
        return ZERO, ZERO, ZERO

    same_state = (
        bool(company_state and customer_state)
        and company_state.strip().lower() == customer_state.strip().lower()
    )
    if same_state:
        half = rate / 2
        return half, half, ZERO
    return ZERO, ZERO, rate


def apply_default_gst(
    items: list[LineItem],
    company_state: str | None,
    customer_state: str | None,
    customer_country: str | None,
    gst_rate: Decimal | float,
) -> list[LineItem]:
    """Fill tax rates on items that were submitted without any."""
    cgst, sgst, igst = gst_rates_for_supply(company_state, customer_state, customer_country, gst_rate)
    filled = []
    for item in items:
        if item.cgst_rate or item.sgst_rate or item.igst_rate:
            filled.append(item)
        else:
            filled.append(item.model_copy(update={"cgst_rate": cgst, "sgst_rate": sgst, "igst_rate": igst}))
    return filled


# ---------------------------------------------------------------------------
# Amount in words (Indian numbering)
# ---------------------------------------------------------------------------

_BELOW_TWENTY = [
    "zero", "one", "two", "three", "four", "five", "six", "seven", "eight",
    "nine", "ten", "eleven", "twelve", "thirteen", "fourteen", "fifteen",
    "sixteen", "seventeen", "eighteen", "nineteen",
]
_TENS = ["", "", "twenty", "thirty", "forty", "fifty", "sixty", "seventy", "eighty", "ninety"]


def _two_digit_words(number: int) -> list[str]:
    if number < 20:
        return [_BELOW_TWENTY[number]]
    tens, ones = divmod(number, 10)
    return [_TENS[tens]] + ([_BELOW_TWENTY[ones]] if ones else [])


def _integer_words(number: int) -> list[str]:
    if number == 0:
        return ["zero"]

    words: list[str] = []
    crore, number = divmod(number, 10_000_000)
    if crore:
        words += _integer_words(crore) + ["crore"]
    lakh, number = divmod(number, 100_000)
    if lakh:
        words += _two_digit_words(lakh) + ["lakh"]
    thousand, number = divmod(number, 1000)
    if thousand:
        words += _two_digit_words(thousand) + ["thousand"]
    hundred, number = divmod(number, 100)
    if hundred:
        words += [_BELOW_TWENTY[hundred], "hundred"]
    if number:
        if words:
            words.append("and")
        words += _two_digit_words(number)
    return words


def amount_in_words(amount: Decimal | float | int | None) -> str | None:
    """``Decimal("1250.75")`` → ``"Rupees one thousand two hundred and fifty and seventy five paise only"``."""
    if amount is None:
        return None
    value = money(Decimal(str(amount)))
    if value < ZERO:
        words = amount_in_words(-value)
        return f"Minus {words[0].lower()}{words[1:]}"

    rupees = int(value)
    paise = int((value - rupees) * 100)

    phrase = "Rupees " + " ".join(_integer_words(rupees))
    if paise:
        phrase += " and " + " ".join(_two_digit_words(paise)) + " paise"
    return phrase + " only"
