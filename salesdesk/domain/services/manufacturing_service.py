# salesdesk/domain/services/manufacturing_service.py
"""
Manufacturing jobs.

A job is an internal production record, optionally raised from an order. It
has its own numbering (``JO`` type code) and state machine; nothing on the
order changes when a job is created, progressed or deleted.
"""

from __future__ import annotations

import logging
import uuid
from datetime import date, timedelta
from decimal import Decimal, ROUND_CEILING
from typing import Any

from salesdesk.core.config import settings
from salesdesk.domain.errors import (
    DuplicateDocumentNumber,
    IncompleteSourceDocument,
    NotFound,
    SourceNotFound,
    ValidationError,
)
from salesdesk.domain.models.documents import DocumentType
from salesdesk.domain.services.document_service import MAX_NUMBER_ATTEMPTS, _as_uuid, today
from salesdesk.domain.services.document_workflow import INITIAL_STATUS, apply_transition
from salesdesk.domain.services.numbering import format_number, normalize_explicit_number
from salesdesk.infrastructure.db.models import ManufacturingJob

logger = logging.getLogger("manufacturing_service")

DEFAULT_DUE_DAYS = 7
PRIORITIES = ("low", "medium", "high", "urgent")

EDITABLE_FIELDS = (
    "product_name",
    "description",
    "department",
    "priority",
    "quantity",
    "start_date",
    "expected_completion",
    "due_date",
    "notes",
    "materials",
    "instructions",
)


def _validate_values(values: dict[str, Any]) -> dict[str, Any]:
    errors = []
    if not (values.get("product_name") or "").strip():
        errors.append({"field": "product_name", "message": "Product name is required"})
    try:
        quantity = int(values.get("quantity"))
    except (TypeError, ValueError):
        errors.append({"field": "quantity", "message": "Quantity must be a whole number"})
    else:
        if quantity <= 0:
            errors.append({"field": "quantity", "message": "Quantity must be greater than zero"})
        values["quantity"] = quantity
    if values.get("priority") not in PRIORITIES:
        errors.append({"field": "priority", "message": f"Priority must be one of {list(PRIORITIES)}"})
    if errors:
        raise ValidationError("Invalid manufacturing job", errors)
    return values


def prepare_job_values(payload: dict[str, Any], *, on_date: date | None = None) -> dict[str, Any]:
    on_date = on_date or today()
    values = {key: payload.get(key) for key in EDITABLE_FIELDS if key in payload}
    values["department"] = values.get("department") or "Production"
    values["priority"] = values.get("priority") or "medium"
    if values.get("quantity") is None:
        values["quantity"] = 1
    values["start_date"] = values.get("start_date") or on_date
    values["due_date"] = values.get("due_date") or on_date + timedelta(days=DEFAULT_DUE_DAYS)
    return _validate_values(values)


async def allocate_job_number(repo: Any, company_id: str, on_date: date, prefix: str | None = None) -> str:
    prefix = prefix or settings.NUMBER_PREFIX
    sequence = await repo.count_created_on(company_id, on_date) + 1
    for _ in range(MAX_NUMBER_ATTEMPTS):
        number = format_number(DocumentType.MANUFACTURING_JOB, on_date, sequence, prefix)
        if not await repo.number_exists(number):
            return number
        sequence += 1
    raise DuplicateDocumentNumber(DocumentType.MANUFACTURING_JOB.value, number)


async def create_job(
    repo: Any,
    payload: dict[str, Any],
    *,
    company_id: str,
    user_id: str | None = None,
    order_id: uuid.UUID | None = None,
    on_date: date | None = None,
) -> ManufacturingJob:
    on_date = on_date or today()
    values = prepare_job_values(payload, on_date=on_date)

    explicit = normalize_explicit_number(payload.get("job_number"))
    if explicit:
        if await repo.number_exists(explicit):
            raise DuplicateDocumentNumber(DocumentType.MANUFACTURING_JOB.value, explicit)
        job_number = explicit
    else:
        job_number = await allocate_job_number(repo, company_id, on_date)

    job = ManufacturingJob(
        id=uuid.uuid4(),
        job_number=job_number,
        company_id=company_id,
        created_by=user_id,
        order_id=order_id,
        status=INITIAL_STATUS[DocumentType.MANUFACTURING_JOB],
        **values,
    )
    job = await repo.create(job)
    logger.info("Created manufacturing job %s for company %s", job_number, company_id)
    return job


def _item_quantity(item: dict[str, Any]) -> int:
    quantity = Decimal(str(item.get("quantity") or 1))
    return max(int(quantity.to_integral_value(rounding=ROUND_CEILING)), 1)


async def create_job_from_order(
    doc_repo: Any,
    job_repo: Any,
    company_id: str,
    order_id: Any,
    overrides: dict[str, Any] | None = None,
    *,
    user_id: str | None = None,
    on_date: date | None = None,
) -> ManufacturingJob:
    """
    Raise a job for an order.

    Product name, description and quantity default to the order's first line
    item; ``overrides`` wins for any field it sets.
    """
    order = None
    document_id = _as_uuid(order_id)
    if document_id is not None:
        order = await doc_repo.get(company_id, document_id, DocumentType.ORDER.value)
    if order is None:
        order = await doc_repo.get_by_number(company_id, DocumentType.ORDER.value, str(order_id))
    if order is None:
        raise SourceNotFound(DocumentType.ORDER.value, order_id)
    if not order.items:
        raise IncompleteSourceDocument(order.number, ["items"])

    first = order.items[0]
    payload: dict[str, Any] = {
        "product_name": first.get("description") or order.number,
        "description": first.get("description"),
        "quantity": _item_quantity(first),
        "notes": f"Raised from order {order.number}",
    }
    payload.update({k: v for k, v in (overrides or {}).items() if v is not None})

    job = await create_job(
        job_repo, payload, company_id=company_id, user_id=user_id, order_id=order.id, on_date=on_date
    )
    logger.info("Order %s → manufacturing job %s", order.number, job.job_number)
    return job


async def get_job(repo: Any, company_id: str, id_or_number: Any) -> ManufacturingJob:
    job = None
    job_id = _as_uuid(id_or_number)
    if job_id is not None:
        job = await repo.get(company_id, job_id)
    if job is None:
        job = await repo.get_by_number(company_id, str(id_or_number).strip())
    if job is None:
        raise NotFound(DocumentType.MANUFACTURING_JOB.value, id_or_number)
    return job


async def update_job(repo: Any, company_id: str, job_id: Any, payload: dict[str, Any]) -> ManufacturingJob:
    job = await get_job(repo, company_id, job_id)

    number = normalize_explicit_number(payload.get("job_number"))
    if number and number != job.job_number:
        raise ValidationError.for_field("job_number", "Job numbers cannot be changed")

    values = prepare_job_values(payload, on_date=job.start_date)
    return await repo.update(job, values)


async def change_job_status(repo: Any, company_id: str, job_id: Any, new_status: str) -> ManufacturingJob:
    job = await get_job(repo, company_id, job_id)
    apply_transition(job, DocumentType.MANUFACTURING_JOB, new_status)
    return await repo.update(job)


async def delete_job(repo: Any, company_id: str, job_id: Any) -> ManufacturingJob:
    job = await get_job(repo, company_id, job_id)
    await repo.delete(job)
    logger.info("Deleted manufacturing job %s", job.job_number)
    return job
