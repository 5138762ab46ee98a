# salesdesk/api/v1/routes/print_configs.py
"""Per-tenant print configuration for each sales document type."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from salesdesk.api.v1.deps import Principal, get_principal, get_print_config_repo
from salesdesk.api.v1.envelope import ok
from salesdesk.api.v1.schemas.print_config import PrintConfigUpdate
from salesdesk.domain.models.documents import SALES_DOCUMENT_TYPES, DocumentType
from salesdesk.domain.services.print_config import (
    get_print_config,
    reset_print_config,
    save_print_config,
)
from salesdesk.infrastructure.db.repositories import PrintConfigRepository

router = APIRouter(prefix="/print-configs", tags=["Print Configs"])


def _document_type(value: str) -> DocumentType:
    try:
        document_type = DocumentType(value)
    except ValueError:
        document_type = None
    if document_type not in SALES_DOCUMENT_TYPES:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown document type '{value}'",
        )
    return document_type


@router.get("/{document_type}", response_model=dict)
async def read_print_config(
    document_type: str,
    principal: Principal = Depends(get_principal),
    repo: PrintConfigRepository = Depends(get_print_config_repo),
):
    options = await get_print_config(repo, principal.company_id, _document_type(document_type))
    return ok(data={"document_type": document_type, "options": options})


@router.put("/{document_type}", response_model=dict)
async def update_print_config(
    document_type: str,
    body: PrintConfigUpdate,
    principal: Principal = Depends(get_principal),
    repo: PrintConfigRepository = Depends(get_print_config_repo),
):
    options = await save_print_config(repo, principal.company_id, _document_type(document_type), body.options)
    return ok(data={"document_type": document_type, "options": options}, message="Print configuration saved")


@router.delete("/{document_type}", response_model=dict)
async def delete_print_config(
    document_type: str,
    principal: Principal = Depends(get_principal),
    repo: PrintConfigRepository = Depends(get_print_config_repo),
):
    """Reset to defaults."""
    options = await reset_print_config(repo, principal.company_id, _document_type(document_type))
    return ok(data={"document_type": document_type, "options": options}, message="Print configuration reset")
