# salesdesk/api/v1/routes/quotations.py
"""
Quotation endpoints: CRUD, status, conversions and PDF downloads.

A quotation can be printed as a proforma invoice or delivery challan without
converting it; converting creates a separate, independent document.
"""

from __future__ import annotations

from fastapi import Depends

from salesdesk.api.v1.deps import Principal, get_document_repo, get_principal, get_print_config_repo
from salesdesk.api.v1.routes.documents import add_conversion_route, build_document_router, pdf_response
from salesdesk.domain.models.documents import DocumentType
from salesdesk.domain.services import document_service
from salesdesk.domain.services.document_pdf import render_document_pdf
from salesdesk.domain.services.print_config import get_print_config
from salesdesk.infrastructure.db.repositories import DocumentRepository, PrintConfigRepository

router = build_document_router(DocumentType.QUOTATION, "/quotations", "Quotations")

for _target in (
    DocumentType.INVOICE,
    DocumentType.ORDER,
    DocumentType.PROFORMA,
    DocumentType.DELIVERY_CHALLAN,
):
    add_conversion_route(router, DocumentType.QUOTATION, _target)


async def _render_as(
    document_id: str,
    print_as: DocumentType,
    title: str,
    principal: Principal,
    repo: DocumentRepository,
    config_repo: PrintConfigRepository,
):
    doc = await document_service.get_document(repo, principal.company_id, DocumentType.QUOTATION, document_id)
    options = await get_print_config(config_repo, principal.company_id, print_as)
    return pdf_response(render_document_pdf(doc, options, title=title), f"{print_as.value}_{doc.number}")


@router.get("/{document_id}/proforma-invoice")
async def download_proforma_invoice(
    document_id: str,
    principal: Principal = Depends(get_principal),
    repo: DocumentRepository = Depends(get_document_repo),
    config_repo: PrintConfigRepository = Depends(get_print_config_repo),
):
    """Print the quotation as a proforma invoice."""
    return await _render_as(document_id, DocumentType.PROFORMA, "PROFORMA INVOICE", principal, repo, config_repo)


@router.get("/{document_id}/delivery-challan")
async def download_delivery_challan(
    document_id: str,
    principal: Principal = Depends(get_principal),
    repo: DocumentRepository = Depends(get_document_repo),
    config_repo: PrintConfigRepository = Depends(get_print_config_repo),
):
    """Print the quotation as a delivery challan."""
    return await _render_as(document_id, DocumentType.DELIVERY_CHALLAN, "DELIVERY CHALLAN", principal, repo, config_repo)
