# salesdesk/domain/services/print_config.py
"""
Per-tenant print configuration.

Every document type has a set of boolean toggles controlling which optional
sections the renderer prints. Stored options are merged over the defaults on
read, so adding a toggle later needs no data migration.
"""

from __future__ import annotations

import logging
from typing import Any

from salesdesk.domain.errors import ValidationError
from salesdesk.domain.models.documents import DocumentType

logger = logging.getLogger("print_config")

DEFAULT_PRINT_CONFIG: dict[str, bool] = {
    "header": True,
    "footer": True,
    "branch": False,
    "org_dup_trip": False,
    "party_information": True,
    "contact_person_name": True,
    "company_before_poc": False,
    "mobile": True,
    "email": True,
    "gstin": True,
    "party_gstin": True,
    "item_code": False,
    "non_stock_item_code": False,
    "hsn_sac": True,
    "qty_in_services": True,
    "lead_time": False,
    "discount_rate": True,
    "discount_amt": True,
    "taxable_amount": True,
    "gst_amounts": True,
    "gst_summary": True,
    "total_before_round_off": False,
    "amount_in_words": True,
    "notes": True,
    "terms": True,
    "bank_details": True,
    "disclaimer": False,
    "digital_signature": False,
}


def validate_options(options: dict[str, Any]) -> dict[str, bool]:
    """Reject unknown keys and non-boolean values."""
    errors = []
    for key, value in options.items():
        if key not in DEFAULT_PRINT_CONFIG:
            errors.append({"field": f"options.{key}", "message": "Unknown print option"})
        elif not isinstance(value, bool):
            errors.append({"field": f"options.{key}", "message": "Must be true or false"})
    if errors:
        raise ValidationError("Invalid print configuration", errors)
    return dict(options)


def merged_options(stored: dict[str, Any] | None) -> dict[str, bool]:
    options = dict(DEFAULT_PRINT_CONFIG)
    for key, value in (stored or {}).items():
        if key in options:
            options[key] = bool(value)
    return options


async def get_print_config(repo: Any, company_id: str, document_type: DocumentType) -> dict[str, bool]:
    row = await repo.get(company_id, document_type.value)
    return merged_options(row.options if row else None)


async def save_print_config(
    repo: Any,
    company_id: str,
    document_type: DocumentType,
    options: dict[str, Any],
) -> dict[str, bool]:
    """Merge ``options`` over the tenant's current configuration and store it."""
    changes = validate_options(options)
    current = await get_print_config(repo, company_id, document_type)
    current.update(changes)
    row = await repo.upsert(company_id, document_type.value, current)
    logger.info("Print config for %s saved for company %s", document_type.value, company_id)
    return merged_options(row.options)


async def reset_print_config(repo: Any, company_id: str, document_type: DocumentType) -> dict[str, bool]:
    await repo.delete(company_id, document_type.value)
    logger.info("Print config for %s reset for company %s", document_type.value, company_id)
    return dict(DEFAULT_PRINT_CONFIG)
