# salesdesk/domain/services/document_service.py
"""
Document lifecycle: create, read, whole-record update, status change, delete.

Totals are always recomputed here from items and charges; whatever totals a
client sends are ignored. Numbers are allocated once and never change.
"""

from __future__ import annotations

import logging
import uuid
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from typing import Any

from salesdesk.core.config import settings
from salesdesk.domain.errors import (
    DuplicateDocumentNumber,
    NotFound,
    ValidationError,
)
from salesdesk.domain.models.documents import (
    BankDetails,
    Charge,
    DocumentTotals,
    DocumentType,
    LineItem,
)
from salesdesk.domain.services.document_totals import (
    apply_default_gst,
    coerce_charge,
    coerce_item,
    compute_totals,
    mixed_supply_lines,
)
from salesdesk.domain.services.document_workflow import (
    INITIAL_STATUS,
    OVERDUE,
    apply_transition,
)
from salesdesk.domain.services.numbering import (
    format_number,
    next_number,
    normalize_explicit_number,
)
from salesdesk.infrastructure.db.models import Document

logger = logging.getLogger("document_service")

# Days added to the document date for ``valid_until`` (validity / due date)
DEFAULT_VALIDITY_DAYS: dict[DocumentType, int | None] = {
    DocumentType.QUOTATION: 30,
    DocumentType.PROFORMA: 15,
    DocumentType.INVOICE: 30,
    DocumentType.ORDER: 30,
    DocumentType.PURCHASE_ORDER: 30,
    DocumentType.DELIVERY_CHALLAN: None,
}

BILLING_TO_SHIPPING = {
    "address_line1": "shipping_address_line1",
    "address_line2": "shipping_address_line2",
    "city": "shipping_city",
    "state": "shipping_state",
    "country": "shipping_country",
    "pincode": "shipping_pincode",
}

# Fields a client may set on create / replace on update
EDITABLE_FIELDS = (
    "document_date",
    "valid_until",
    "reference",
    "customer_id",
    "lead_id",
    "supplier_id",
    "contact_person_title",
    "contact_person",
    "customer_company",
    "email",
    "phone",
    "gstin",
    "address_line1",
    "address_line2",
    "city",
    "state",
    "country",
    "pincode",
    "same_as_billing",
    "shipping_address_line1",
    "shipping_address_line2",
    "shipping_city",
    "shipping_state",
    "shipping_country",
    "shipping_pincode",
    "notes",
)

MAX_NUMBER_ATTEMPTS = 1000


def today() -> date:
    return datetime.now(timezone.utc).date()


def default_valid_until(document_type: DocumentType, document_date: date) -> date | None:
    days = DEFAULT_VALIDITY_DAYS.get(document_type)
    if days is None:
        return None
    return document_date + timedelta(days=days)


def mirror_shipping(values: dict[str, Any]) -> dict[str, Any]:
    """Copy billing fields into shipping fields when ``same_as_billing`` is set."""
    if values.get("same_as_billing"):
        for billing, shipping in BILLING_TO_SHIPPING.items():
            values[shipping] = values.get(billing)
    return values


def totals_to_columns(totals: DocumentTotals) -> dict[str, Decimal]:
    return {
        "subtotal": totals.subtotal,
        "taxable_total": totals.taxable_total,
        "cgst_total": totals.cgst_total,
        "sgst_total": totals.sgst_total,
        "igst_total": totals.igst_total,
        "total_amount": totals.total_amount,
    }


def totals_from_record(record: Document) -> DocumentTotals:
    """Recompute the full breakdown for a stored document."""
    return compute_totals(record.items or [], record.extra_charges or [], record.discounts or [])


def _parse_lines(raw_items: list[Any]) -> list[LineItem]:
    return [coerce_item(item, i) for i, item in enumerate(raw_items or [])]


def _parse_charges(raw: list[Any] | None, field: str) -> list[Charge]:
    return [coerce_charge(c, f"{field}.{i}") for i, c in enumerate(raw or [])]


def prepare_values(
    document_type: DocumentType,
    payload: dict[str, Any],
    *,
    on_date: date | None = None,
) -> dict[str, Any]:
    """
    Turn a create/update payload into column values.

    Recomputes totals, fills ``valid_until`` from the type default and mirrors
    the billing address into shipping when asked to.
    """
    values = {key: payload.get(key) for key in EDITABLE_FIELDS if key in payload}
    values["document_date"] = values.get("document_date") or on_date or today()
    if values.get("same_as_billing") is None:
        values["same_as_billing"] = True
    if not values.get("valid_until"):
        values["valid_until"] = default_valid_until(document_type, values["document_date"])

    items = _parse_lines(payload.get("items") or [])
    if payload.get("auto_gst"):
        items = apply_default_gst(
            items,
            settings.COMPANY_STATE,
            values.get("state"),
            values.get("country"),
            settings.DEFAULT_GST_RATE,
        )
    extra_charges = _parse_charges(payload.get("extra_charges"), "extra_charges")
    discounts = _parse_charges(payload.get("discounts"), "discounts")

    totals = compute_totals(items, extra_charges, discounts)

    mixed = mixed_supply_lines(items)
    if mixed:
        logger.warning(
            "%s has lines with both CGST/SGST and IGST: %s",
            document_type.value,
            [i + 1 for i in mixed],
        )

    bank = payload.get("bank_details")
    values.update(
        items=[item.model_dump(mode="json") for item in items],
        extra_charges=[c.model_dump(mode="json") for c in extra_charges],
        discounts=[d.model_dump(mode="json") for d in discounts],
        terms=list(payload.get("terms") or []),
        bank_details=BankDetails.model_validate(bank).model_dump(mode="json") if bank else None,
        **totals_to_columns(totals),
    )
    return mirror_shipping(values)


# ---------------------------------------------------------------------------
# Numbering
# ---------------------------------------------------------------------------

async def allocate_number(
    repo: Any,
    company_id: str,
    document_type: DocumentType,
    on_date: date,
    prefix: str | None = None,
) -> str:
    """
    Next free number for the tenant's ``document_type`` on ``on_date``.

    The format only carries year and month, so a sequence restarted on a new
    day (or another tenant's sequence) can hit a taken number; in that case
    the sequence is bumped until a free one is found.
    """
    prefix = prefix or settings.NUMBER_PREFIX
    existing = await repo.count_created_on(company_id, document_type.value, on_date)
    number = next_number(document_type, on_date, existing, prefix)
    sequence = existing + 1
    for _ in range(MAX_NUMBER_ATTEMPTS):
        if not await repo.number_exists(document_type.value, number):
            return number
        logger.warning("Number %s already taken, trying next sequence", number)
        sequence += 1
        number = format_number(document_type, on_date, sequence, prefix)
    raise DuplicateDocumentNumber(document_type.value, number)


# ---------------------------------------------------------------------------
# Operations
# ---------------------------------------------------------------------------

async def create_document(
    repo: Any,
    document_type: DocumentType,
    payload: dict[str, Any],
    *,
    company_id: str,
    user_id: str | None = None,
    on_date: date | None = None,
) -> Document:
    """
    Create a document of ``document_type``.

    An explicit ``payload["number"]`` must not already exist for the type
    (:class:`DuplicateDocumentNumber`, nothing persisted); otherwise a number
    is generated.
    """
    on_date = on_date or today()
    values = prepare_values(document_type, payload, on_date=on_date)

    explicit = normalize_explicit_number(payload.get("number"))
    if explicit:
        if await repo.number_exists(document_type.value, explicit):
            raise DuplicateDocumentNumber(document_type.value, explicit)
        number = explicit
    else:
        number = await allocate_number(repo, company_id, document_type, on_date)

    document = Document(
        id=uuid.uuid4(),
        document_type=document_type.value,
        number=number,
        company_id=company_id,
        created_by=user_id,
        status=INITIAL_STATUS[document_type],
        paid_amount=Decimal("0.00"),
        **values,
    )
    document = await repo.create(document)
    logger.info(
        "Created %s %s for company %s (total %s)",
        document_type.value, number, company_id, document.total_amount,
    )
    return document


def _as_uuid(value: Any) -> uuid.UUID | None:
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError):
        return None


async def get_document(
    repo: Any,
    company_id: str,
    document_type: DocumentType,
    id_or_number: Any,
) -> Document:
    """Look a document up by UUID or by number; raises :class:`NotFound`."""
    document_id = _as_uuid(id_or_number)
    document = None
    if document_id is not None:
        document = await repo.get(company_id, document_id, document_type.value)
    if document is None:
        document = await repo.get_by_number(company_id, document_type.value, str(id_or_number).strip())
    if document is None:
        raise NotFound(document_type.value, id_or_number)
    return document


def reconcile_paid_amount(document: Document, document_type: DocumentType, new_total: Decimal) -> None:
    """
    Keep an invoice's status in line with what has been paid when its total changes.

    The total may not drop below the paid amount; a pending invoice whose new
    total equals the paid amount becomes ``paid``, and a paid invoice may not
    grow past what was paid.
    """
    if document_type != DocumentType.INVOICE:
        return
    paid = Decimal(str(document.paid_amount or 0))
    if paid <= 0:
        return
    if new_total < paid:
        raise ValidationError.for_field(
            "items", f"Invoice total {new_total} would fall below the amount already paid ({paid})"
        )
    if document.status == "paid" and new_total > paid:
        raise ValidationError.for_field(
            "items", f"Invoice {document.number} is paid; its total cannot exceed {paid}"
        )
    if document.status == "pending" and new_total == paid:
        apply_transition(document, document_type, "paid")
        logger.info("Invoice %s settled by update (total %s)", document.number, new_total)


async def update_document(
    repo: Any,
    company_id: str,
    document_type: DocumentType,
    document_id: Any,
    payload: dict[str, Any],
) -> Document:
    """
    Replace the editable fields of a document and recompute its totals.

    Number, status, owner and back-reference are not editable here; an invoice
    whose new total equals its paid amount is settled (see
    :func:`reconcile_paid_amount`).
    """
    document = await get_document(repo, company_id, document_type, document_id)

    number = normalize_explicit_number(payload.get("number"))
    if number and number != document.number:
        raise ValidationError.for_field("number", "Document numbers cannot be changed")

    values = prepare_values(document_type, payload, on_date=document.document_date)
    reconcile_paid_amount(document, document_type, values["total_amount"])
    document = await repo.update(document, values)
    logger.info("Updated %s %s", document_type.value, document.number)
    return document


async def change_status(
    repo: Any,
    company_id: str,
    document_type: DocumentType,
    document_id: Any,
    new_status: str,
) -> Document:
    document = await get_document(repo, company_id, document_type, document_id)
    apply_transition(document, document_type, new_status)
    return await repo.update(document)


async def delete_document(
    repo: Any,
    company_id: str,
    document_type: DocumentType,
    document_id: Any,
) -> Document:
    """Hard delete. Documents converted from this one are left as they are."""
    document = await get_document(repo, company_id, document_type, document_id)
    await repo.delete(document)
    logger.info("Deleted %s %s", document_type.value, document.number)
    return document


async def list_documents(
    repo: Any,
    company_id: str,
    document_type: DocumentType,
    *,
    status: str | None = None,
    limit: int = 20,
    offset: int = 0,
    **filters: Any,
) -> tuple[list[Document], int]:
    """List a page of documents. ``status="overdue"`` selects unpaid invoices past due."""
    if document_type == DocumentType.INVOICE and status == OVERDUE:
        return await repo.list(
            company_id,
            document_type.value,
            status="pending",
            due_before=today(),
            limit=limit,
            offset=offset,
            **filters,
        )
    return await repo.list(
        company_id,
        document_type.value,
        status=status,
        limit=limit,
        offset=offset,
        **filters,
    )
