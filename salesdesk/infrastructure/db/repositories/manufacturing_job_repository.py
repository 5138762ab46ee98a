# salesdesk/infrastructure/db/repositories/manufacturing_job_repository.py
"""Repository for ManufacturingJob CRUD."""

from __future__ import annotations

import uuid
from datetime import date
from typing import Any

from sqlalchemy import and_, func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from salesdesk.domain.errors import DuplicateDocumentNumber
from salesdesk.infrastructure.db.models import ManufacturingJob
from salesdesk.infrastructure.db.repositories.document_repository import day_bounds, violates_constraint

JOB_NUMBER_CONSTRAINT = "uq_manufacturing_jobs_job_number"


class ManufacturingJobRepository:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get(self, company_id: str, job_id: uuid.UUID) -> ManufacturingJob | None:
        stmt = select(ManufacturingJob).where(
            ManufacturingJob.id == job_id,
            ManufacturingJob.company_id == company_id,
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_number(self, company_id: str, job_number: str) -> ManufacturingJob | None:
        stmt = select(ManufacturingJob).where(
            ManufacturingJob.company_id == company_id,
            ManufacturingJob.job_number == job_number,
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def number_exists(self, job_number: str) -> bool:
        stmt = select(func.count()).select_from(ManufacturingJob).where(
            ManufacturingJob.job_number == job_number
        )
        return ((await self.db.execute(stmt)).scalar() or 0) > 0

    async def count_created_on(self, company_id: str, day: date) -> int:
        start, end = day_bounds(day)
        stmt = select(func.count()).select_from(ManufacturingJob).where(
            and_(
                ManufacturingJob.company_id == company_id,
                ManufacturingJob.created_at >= start,
                ManufacturingJob.created_at < end,
            )
        )
        return (await self.db.execute(stmt)).scalar() or 0

    async def list(
        self,
        company_id: str,
        *,
        status: str | None = None,
        order_id: uuid.UUID | None = None,
        search: str | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> tuple[list[ManufacturingJob], int]:
        q = select(ManufacturingJob).where(ManufacturingJob.company_id == company_id)
        if status:
            q = q.where(ManufacturingJob.status == status)
        if order_id:
            q = q.where(ManufacturingJob.order_id == order_id)
        if search:
            like = f"%{search.strip()}%"
            q = q.where(
                or_(
                    ManufacturingJob.job_number.ilike(like),
                    ManufacturingJob.product_name.ilike(like),
                )
            )

        total = (await self.db.execute(select(func.count()).select_from(q.subquery()))).scalar() or 0
        q = q.order_by(ManufacturingJob.created_at.desc()).offset(offset).limit(limit)
        result = await self.db.execute(q)
        return list(result.scalars().all()), total

    async def create(self, job: ManufacturingJob) -> ManufacturingJob:
        self.db.add(job)
        try:
            await self.db.commit()
        except IntegrityError as exc:
            await self.db.rollback()
            if not violates_constraint(exc, JOB_NUMBER_CONSTRAINT):
                raise
            raise DuplicateDocumentNumber("manufacturing-job", job.job_number) from exc
        await self.db.refresh(job)
        return job

    async def update(self, job: ManufacturingJob, values: dict[str, Any] | None = None) -> ManufacturingJob:
        for key, value in (values or {}).items():
            setattr(job, key, value)
        await self.db.commit()
        await self.db.refresh(job)
        return job

    async def delete(self, job: ManufacturingJob) -> None:
        await self.db.delete(job)
        await self.db.commit()
