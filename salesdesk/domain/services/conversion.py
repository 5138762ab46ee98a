# salesdesk/domain/services/conversion.py
"""
Document conversion pipeline.

Derives a new document from an existing one:

  quotation → proforma | invoice | order | delivery-challan
  order     → invoice | delivery-challan

Party, addresses, items, charges, terms and bank details are copied (deep
copies, nothing is shared with the source). Number, document date, validity
and status are regenerated for the target type and totals are recomputed from
the copied items. The new record keeps ``source_document_id`` as an audit
trail only; the two documents are independent afterwards.
"""

from __future__ import annotations

import copy
import logging
import uuid
from datetime import date
from decimal import Decimal
from typing import Any

from salesdesk.core.config import settings
from salesdesk.domain.errors import (
    IncompleteSourceDocument,
    InvalidStatusTransition,
    SourceNotFound,
    ValidationError,
)
from salesdesk.domain.models.documents import DocumentType
from salesdesk.domain.services.document_service import (
    BILLING_TO_SHIPPING,
    _as_uuid,
    allocate_number,
    default_valid_until,
    today,
    totals_to_columns,
)
from salesdesk.domain.services.document_totals import compute_totals
from salesdesk.domain.services.document_workflow import INITIAL_STATUS
from salesdesk.infrastructure.db.models import Document

logger = logging.getLogger("conversion")

CONVERSIONS: dict[DocumentType, set[DocumentType]] = {
    DocumentType.QUOTATION: {
        DocumentType.PROFORMA,
        DocumentType.INVOICE,
        DocumentType.ORDER,
        DocumentType.DELIVERY_CHALLAN,
    },
    DocumentType.ORDER: {
        DocumentType.INVOICE,
        DocumentType.DELIVERY_CHALLAN,
    },
}

COPIED_FIELDS = (
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

DEEP_COPIED_FIELDS = ("items", "extra_charges", "discounts", "terms", "bank_details")


def missing_for_conversion(source: Document) -> list[str]:
    """Fields a source document needs before it can be converted."""
    missing = []
    if not source.customer_id and not source.lead_id:
        missing.append("customer_id")
    if not source.items:
        missing.append("items")
    return missing


def convert(
    source: Document,
    target_type: DocumentType,
    *,
    number: str,
    on_date: date | None = None,
    created_by: str | None = None,
) -> Document:
    """
    Build (but do not persist) the document derived from ``source``.

    Raises
    ------
    ValidationError
        The source type cannot be converted into ``target_type``.
    IncompleteSourceDocument
        The source has no customer/lead or no items.
    """
    source_type = DocumentType(source.document_type)
    if target_type not in CONVERSIONS.get(source_type, set()):
        raise ValidationError.for_field(
            "target_type",
            f"Cannot convert {source_type.value} into {target_type.value}",
        )

    missing = missing_for_conversion(source)
    if missing:
        raise IncompleteSourceDocument(source.number, missing)

    on_date = on_date or today()
    values: dict[str, Any] = {field: getattr(source, field) for field in COPIED_FIELDS}
    for field in DEEP_COPIED_FIELDS:
        values[field] = copy.deepcopy(getattr(source, field))
    values["items"] = values["items"] or []
    values["extra_charges"] = values["extra_charges"] or []
    values["discounts"] = values["discounts"] or []
    values["terms"] = values["terms"] or []

    if values.get("same_as_billing"):
        for billing, shipping in BILLING_TO_SHIPPING.items():
            values[shipping] = values.get(billing)

    totals = compute_totals(values["items"], values["extra_charges"], values["discounts"])

    return Document(
        id=uuid.uuid4(),
        document_type=target_type.value,
        number=number,
        company_id=source.company_id,
        created_by=created_by,
        document_date=on_date,
        valid_until=default_valid_until(target_type, on_date),
        status=INITIAL_STATUS[target_type],
        paid_amount=Decimal("0.00"),
        source_document_id=source.id,
        **values,
        **totals_to_columns(totals),
    )


async def convert_document(
    repo: Any,
    company_id: str,
    source_type: DocumentType,
    source_id: Any,
    target_type: DocumentType,
    *,
    user_id: str | None = None,
    on_date: date | None = None,
    require_accepted: bool | None = None,
) -> Document:
    """
    Load ``source_id``, derive a ``target_type`` document from it and persist it.

    Nothing is written when any check fails.
    """
    document_id = _as_uuid(source_id)
    source = None
    if document_id is not None:
        source = await repo.get(company_id, document_id, source_type.value)
    if source is None:
        source = await repo.get_by_number(company_id, source_type.value, str(source_id))
    if source is None:
        raise SourceNotFound(source_type.value, source_id)

    if require_accepted is None:
        require_accepted = settings.REQUIRE_ACCEPTED_QUOTATION
    if require_accepted and source_type == DocumentType.QUOTATION and source.status != "accepted":
        raise InvalidStatusTransition(
            source_type.value, source.status, f"converted to {target_type.value}", ["accepted"]
        )

    # Validate before spending a number
    missing = missing_for_conversion(source)
    if missing:
        raise IncompleteSourceDocument(source.number, missing)

    on_date = on_date or today()
    number = await allocate_number(repo, company_id, target_type, on_date)
    derived = convert(source, target_type, number=number, on_date=on_date, created_by=user_id)
    derived = await repo.create(derived)

    logger.info(
        "Converted %s %s → %s %s for company %s",
        source_type.value, source.number, target_type.value, derived.number, company_id,
    )
    return derived
