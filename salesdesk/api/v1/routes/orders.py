# salesdesk/api/v1/routes/orders.py
"""Order endpoints: CRUD, status, conversions and manufacturing jobs raised from an order."""

from __future__ import annotations

from fastapi import Depends, status

from salesdesk.api.v1.deps import Principal, get_document_repo, get_job_repo, get_principal
from salesdesk.api.v1.envelope import ok
from salesdesk.api.v1.routes.documents import add_conversion_route, build_document_router
from salesdesk.api.v1.routes.manufacturing_jobs import job_to_detail
from salesdesk.api.v1.schemas.manufacturing import JobFromOrder
from salesdesk.domain.models.documents import DocumentType
from salesdesk.domain.services.manufacturing_service import create_job_from_order
from salesdesk.infrastructure.audit import log_document_action
from salesdesk.infrastructure.db.repositories import DocumentRepository, ManufacturingJobRepository

router = build_document_router(DocumentType.ORDER, "/orders", "Orders")

add_conversion_route(router, DocumentType.ORDER, DocumentType.INVOICE)
add_conversion_route(router, DocumentType.ORDER, DocumentType.DELIVERY_CHALLAN)


@router.post("/{document_id}/manufacturing-jobs", response_model=dict, status_code=status.HTTP_201_CREATED)
async def create_manufacturing_job(
    document_id: str,
    body: JobFromOrder | None = None,
    principal: Principal = Depends(get_principal),
    repo: DocumentRepository = Depends(get_document_repo),
    job_repo: ManufacturingJobRepository = Depends(get_job_repo),
):
    """Raise a manufacturing job for the order (defaults from its first line item)."""
    job = await create_job_from_order(
        repo,
        job_repo,
        principal.company_id,
        document_id,
        body.model_dump() if body else None,
        user_id=principal.user_id,
    )
    log_document_action(
        "create", company_id=principal.company_id, user_id=principal.user_id,
        document_type=DocumentType.MANUFACTURING_JOB.value, number=job.job_number,
        details={"order_id": str(job.order_id)},
    )
    return ok(data=job_to_detail(job), message=f"Manufacturing job {job.job_number} created")
