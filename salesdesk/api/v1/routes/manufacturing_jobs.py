# salesdesk/api/v1/routes/manufacturing_jobs.py
"""Manufacturing job CRUD and status endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query, status

from salesdesk.api.v1.deps import Principal, get_job_repo, get_principal
from salesdesk.api.v1.envelope import ok, paginated
from salesdesk.api.v1.schemas.documents import StatusChange
from salesdesk.api.v1.schemas.manufacturing import JobCreate, JobDetail, JobUpdate
from salesdesk.core.config import settings
from salesdesk.domain.models.documents import DocumentType
from salesdesk.domain.services import manufacturing_service
from salesdesk.domain.services.document_workflow import allowed_transitions, status_badge
from salesdesk.infrastructure.audit import log_document_action
from salesdesk.infrastructure.db.models import ManufacturingJob
from salesdesk.infrastructure.db.repositories import ManufacturingJobRepository

logger = logging.getLogger("api.v1.manufacturing_jobs")

router = APIRouter(prefix="/manufacturing-jobs", tags=["Manufacturing Jobs"])

KIND = DocumentType.MANUFACTURING_JOB.value


def job_to_detail(job: ManufacturingJob) -> dict:
    return JobDetail(
        id=str(job.id),
        job_number=job.job_number,
        order_id=str(job.order_id) if job.order_id else None,
        product_name=job.product_name,
        description=job.description,
        department=job.department,
        priority=job.priority,
        quantity=job.quantity,
        start_date=job.start_date,
        expected_completion=job.expected_completion,
        due_date=job.due_date,
        status=job.status,
        badge=status_badge(job.status),
        allowed_transitions=allowed_transitions(DocumentType.MANUFACTURING_JOB, job.status),
        notes=job.notes,
        materials=job.materials,
        instructions=job.instructions,
        created_by=job.created_by,
        created_at=job.created_at,
        updated_at=job.updated_at,
    ).model_dump()


@router.get("", response_model=dict)
async def list_jobs(
    limit: int = Query(default=settings.DEFAULT_PAGE_SIZE, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    status_filter: str | None = Query(default=None, alias="status"),
    search: str | None = Query(default=None, max_length=100),
    principal: Principal = Depends(get_principal),
    repo: ManufacturingJobRepository = Depends(get_job_repo),
):
    items, total = await repo.list(
        principal.company_id, status=status_filter, search=search, limit=limit, offset=offset
    )
    return paginated(items=[job_to_detail(j) for j in items], total=total, limit=limit, offset=offset)


@router.get("/{job_id}", response_model=dict)
async def get_job(
    job_id: str,
    principal: Principal = Depends(get_principal),
    repo: ManufacturingJobRepository = Depends(get_job_repo),
):
    job = await manufacturing_service.get_job(repo, principal.company_id, job_id)
    return ok(data=job_to_detail(job))


@router.post("", response_model=dict, status_code=status.HTTP_201_CREATED)
async def create_job(
    body: JobCreate,
    principal: Principal = Depends(get_principal),
    repo: ManufacturingJobRepository = Depends(get_job_repo),
):
    job = await manufacturing_service.create_job(
        repo, body.model_dump(), company_id=principal.company_id, user_id=principal.user_id
    )
    log_document_action(
        "create", company_id=principal.company_id, user_id=principal.user_id,
        document_type=KIND, number=job.job_number,
    )
    return ok(data=job_to_detail(job), message="Manufacturing job created")


@router.put("/{job_id}", response_model=dict)
async def update_job(
    job_id: str,
    body: JobUpdate,
    principal: Principal = Depends(get_principal),
    repo: ManufacturingJobRepository = Depends(get_job_repo),
):
    job = await manufacturing_service.update_job(repo, principal.company_id, job_id, body.model_dump())
    log_document_action(
        "update", company_id=principal.company_id, user_id=principal.user_id,
        document_type=KIND, number=job.job_number,
    )
    return ok(data=job_to_detail(job), message="Manufacturing job updated")


@router.post("/{job_id}/status", response_model=dict)
async def change_job_status(
    job_id: str,
    body: StatusChange,
    principal: Principal = Depends(get_principal),
    repo: ManufacturingJobRepository = Depends(get_job_repo),
):
    job = await manufacturing_service.change_job_status(repo, principal.company_id, job_id, body.status)
    log_document_action(
        "status", company_id=principal.company_id, user_id=principal.user_id,
        document_type=KIND, number=job.job_number, details={"status": job.status},
    )
    return ok(data=job_to_detail(job), message=f"Status changed to {job.status}")


@router.delete("/{job_id}", response_model=dict)
async def delete_job(
    job_id: str,
    principal: Principal = Depends(get_principal),
    repo: ManufacturingJobRepository = Depends(get_job_repo),
):
    job = await manufacturing_service.delete_job(repo, principal.company_id, job_id)
    log_document_action(
        "delete", company_id=principal.company_id, user_id=principal.user_id,
        document_type=KIND, number=job.job_number,
    )
    return ok(data={"id": str(job.id), "job_number": job.job_number}, message="Manufacturing job deleted")
