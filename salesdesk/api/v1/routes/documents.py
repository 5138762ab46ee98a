# salesdesk/api/v1/routes/documents.py
"""
Shared CRUD, status and PDF endpoints for sales documents.

Every document type gets a structurally identical router from
:func:`build_document_router`; type-specific routes (conversions, payments,
manufacturing jobs) are added on top in the per-type modules.
"""

from __future__ import annotations

import io
import logging
from datetime import date

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import StreamingResponse

from salesdesk.api.v1.deps import Principal, get_document_repo, get_principal, get_print_config_repo
from salesdesk.api.v1.envelope import ok, paginated
from salesdesk.api.v1.schemas.documents import (
    DocumentCreate,
    DocumentDetail,
    DocumentSummary,
    DocumentUpdate,
    StatusChange,
    TotalsOut,
)
from salesdesk.core.config import settings
from salesdesk.domain.models.documents import DocumentType
from salesdesk.domain.services import document_service
from salesdesk.domain.services.conversion import convert_document
from salesdesk.domain.services.document_pdf import render_document_pdf
from salesdesk.domain.services.document_totals import amount_in_words
from salesdesk.domain.services.document_workflow import (
    allowed_transitions,
    effective_status,
    status_badge,
)
from salesdesk.domain.services.print_config import get_print_config
from salesdesk.infrastructure.audit import log_document_action
from salesdesk.infrastructure.db.models import Document
from salesdesk.infrastructure.db.repositories import DocumentRepository, PrintConfigRepository

logger = logging.getLogger("api.v1.documents")


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------

def _summary_fields(doc: Document) -> dict:
    document_type = DocumentType(doc.document_type)
    display = effective_status(document_type, doc.status, doc.valid_until, document_service.today())
    return dict(
        id=str(doc.id),
        number=doc.number,
        document_type=doc.document_type,
        document_date=doc.document_date,
        valid_until=doc.valid_until,
        customer_id=doc.customer_id,
        customer_company=doc.customer_company,
        contact_person=doc.contact_person,
        total_amount=doc.total_amount,
        status=doc.status,
        display_status=display,
        badge=status_badge(display),
        created_at=doc.created_at,
    )


def document_to_summary(doc: Document) -> dict:
    return DocumentSummary(**_summary_fields(doc)).model_dump()


def document_to_detail(doc: Document) -> dict:
    """Convert a Document ORM object to a DocumentDetail dict."""
    totals = document_service.totals_from_record(doc)
    return DocumentDetail(
        **_summary_fields(doc),
        reference=doc.reference,
        lead_id=doc.lead_id,
        supplier_id=doc.supplier_id,
        contact_person_title=doc.contact_person_title,
        email=doc.email,
        phone=doc.phone,
        gstin=doc.gstin,
        address_line1=doc.address_line1,
        address_line2=doc.address_line2,
        city=doc.city,
        state=doc.state,
        country=doc.country,
        pincode=doc.pincode,
        same_as_billing=bool(doc.same_as_billing),
        shipping_address_line1=doc.shipping_address_line1,
        shipping_address_line2=doc.shipping_address_line2,
        shipping_city=doc.shipping_city,
        shipping_state=doc.shipping_state,
        shipping_country=doc.shipping_country,
        shipping_pincode=doc.shipping_pincode,
        items=doc.items or [],
        extra_charges=doc.extra_charges or [],
        discounts=doc.discounts or [],
        terms=doc.terms or [],
        notes=doc.notes,
        bank_details=doc.bank_details,
        totals=TotalsOut(
            **totals.model_dump(),
            tax_total=totals.tax_total,
            amount_in_words=amount_in_words(totals.total_amount),
        ),
        paid_amount=doc.paid_amount or 0,
        allowed_transitions=allowed_transitions(DocumentType(doc.document_type), doc.status),
        source_document_id=str(doc.source_document_id) if doc.source_document_id else None,
        created_by=doc.created_by,
        updated_at=doc.updated_at,
    ).model_dump()


def pdf_response(pdf_bytes: bytes, filename: str) -> StreamingResponse:
    return StreamingResponse(
        io.BytesIO(pdf_bytes),
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}.pdf"'},
    )


# ---------------------------------------------------------------------------
# Router factory
# ---------------------------------------------------------------------------

def build_document_router(document_type: DocumentType, prefix: str, tag: str) -> APIRouter:
    router = APIRouter(prefix=prefix, tags=[tag])
    kind = document_type.value

    @router.get("", response_model=dict)
    async def list_documents(
        limit: int = Query(default=settings.DEFAULT_PAGE_SIZE, ge=1, le=100),
        offset: int = Query(default=0, ge=0),
        status_filter: str | None = Query(default=None, alias="status"),
        customer_id: str | None = Query(default=None),
        date_from: date | None = Query(default=None, description="Filter: document_date >= this"),
        date_to: date | None = Query(default=None, description="Filter: document_date <= this"),
        search: str | None = Query(default=None, max_length=100),
        principal: Principal = Depends(get_principal),
        repo: DocumentRepository = Depends(get_document_repo),
    ):
        items, total = await document_service.list_documents(
            repo,
            principal.company_id,
            document_type,
            status=status_filter,
            customer_id=customer_id,
            date_from=date_from,
            date_to=date_to,
            search=search,
            limit=limit,
            offset=offset,
        )
        return paginated(
            items=[document_to_summary(doc) for doc in items],
            total=total,
            limit=limit,
            offset=offset,
        )

    @router.get("/{document_id}", response_model=dict)
    async def get_document(
        document_id: str,
        principal: Principal = Depends(get_principal),
        repo: DocumentRepository = Depends(get_document_repo),
    ):
        """Look up by id or by document number."""
        doc = await document_service.get_document(repo, principal.company_id, document_type, document_id)
        return ok(data=document_to_detail(doc))

    @router.post("", response_model=dict, status_code=status.HTTP_201_CREATED)
    async def create_document(
        body: DocumentCreate,
        principal: Principal = Depends(get_principal),
        repo: DocumentRepository = Depends(get_document_repo),
    ):
        doc = await document_service.create_document(
            repo,
            document_type,
            body.model_dump(),
            company_id=principal.company_id,
            user_id=principal.user_id,
        )
        log_document_action(
            "create", company_id=principal.company_id, user_id=principal.user_id,
            document_type=kind, number=doc.number,
        )
        return ok(data=document_to_detail(doc), message=f"{tag[:-1]} created")

    @router.put("/{document_id}", response_model=dict)
    async def update_document(
        document_id: str,
        body: DocumentUpdate,
        principal: Principal = Depends(get_principal),
        repo: DocumentRepository = Depends(get_document_repo),
    ):
        doc = await document_service.update_document(
            repo, principal.company_id, document_type, document_id, body.model_dump()
        )
        log_document_action(
            "update", company_id=principal.company_id, user_id=principal.user_id,
            document_type=kind, number=doc.number,
        )
        return ok(data=document_to_detail(doc), message=f"{tag[:-1]} updated")

    @router.delete("/{document_id}", response_model=dict)
    async def delete_document(
        document_id: str,
        principal: Principal = Depends(get_principal),
        repo: DocumentRepository = Depends(get_document_repo),
    ):
        doc = await document_service.delete_document(repo, principal.company_id, document_type, document_id)
        log_document_action(
            "delete", company_id=principal.company_id, user_id=principal.user_id,
            document_type=kind, number=doc.number,
        )
        return ok(data={"id": str(doc.id), "number": doc.number}, message=f"{tag[:-1]} deleted")

    @router.post("/{document_id}/status", response_model=dict)
    async def change_status(
        document_id: str,
        body: StatusChange,
        principal: Principal = Depends(get_principal),
        repo: DocumentRepository = Depends(get_document_repo),
    ):
        doc = await document_service.change_status(
            repo, principal.company_id, document_type, document_id, body.status
        )
        log_document_action(
            "status", company_id=principal.company_id, user_id=principal.user_id,
            document_type=kind, number=doc.number, details={"status": doc.status},
        )
        return ok(data=document_to_detail(doc), message=f"Status changed to {doc.status}")

    @router.get("/{document_id}/download-pdf")
    async def download_pdf(
        document_id: str,
        principal: Principal = Depends(get_principal),
        repo: DocumentRepository = Depends(get_document_repo),
        config_repo: PrintConfigRepository = Depends(get_print_config_repo),
    ):
        doc = await document_service.get_document(repo, principal.company_id, document_type, document_id)
        options = await get_print_config(config_repo, principal.company_id, document_type)
        return pdf_response(render_document_pdf(doc, options), f"{kind}_{doc.number}")

    return router


def add_conversion_route(
    router: APIRouter,
    source_type: DocumentType,
    target_type: DocumentType,
) -> None:
    """Register ``POST /{id}/convert-to-<target>`` on ``router``."""

    @router.post(
        f"/{{document_id}}/convert-to-{target_type.value}",
        response_model=dict,
        status_code=status.HTTP_201_CREATED,
        name=f"convert_{source_type.value}_to_{target_type.value}",
    )
    async def convert(
        document_id: str,
        principal: Principal = Depends(get_principal),
        repo: DocumentRepository = Depends(get_document_repo),
    ):
        doc = await convert_document(
            repo,
            principal.company_id,
            source_type,
            document_id,
            target_type,
            user_id=principal.user_id,
        )
        log_document_action(
            "convert", company_id=principal.company_id, user_id=principal.user_id,
            document_type=target_type.value, number=doc.number,
            details={"source": str(doc.source_document_id), "source_type": source_type.value},
        )
        return ok(data=document_to_detail(doc), message=f"Converted to {target_type.value} {doc.number}")
