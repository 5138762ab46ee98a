# salesdesk/infrastructure/db/repositories/document_repository.py
from __future__ import annotations

import uuid
from datetime import date, datetime, time, timedelta, timezone
from typing import Any

from sqlalchemy import and_, func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from salesdesk.domain.errors import DuplicateDocumentNumber
from salesdesk.infrastructure.db.models import Document

NUMBER_CONSTRAINT = "uq_documents_type_number"


def violates_constraint(exc: IntegrityError, constraint: str) -> bool:
    """True when ``exc`` was raised by the named unique constraint."""
    orig = exc.orig
    name = getattr(orig, "constraint_name", None)
    if name is None:
        # asyncpg errors arrive wrapped by the SQLAlchemy dialect
        name = getattr(getattr(orig, "__cause__", None), "constraint_name", None)
    if name:
        return name == constraint
    return constraint in str(orig)


def day_bounds(day: date) -> tuple[datetime, datetime]:
    """[start, end) of a calendar day in UTC."""
    start = datetime.combine(day, time.min, tzinfo=timezone.utc)
    return start, start + timedelta(days=1)


class DocumentRepository:
    """Persistence for sales documents. Every read is scoped to a tenant."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    # ---------- reads ----------

    async def get(
        self,
        company_id: str,
        document_id: uuid.UUID,
        document_type: str | None = None,
    ) -> Document | None:
        stmt = select(Document).where(
            Document.id == document_id,
            Document.company_id == company_id,
        )
        if document_type:
            stmt = stmt.where(Document.document_type == document_type)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_number(
        self,
        company_id: str,
        document_type: str,
        number: str,
    ) -> Document | None:
        stmt = select(Document).where(
            Document.company_id == company_id,
            Document.document_type == document_type,
            Document.number == number,
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def number_exists(self, document_type: str, number: str) -> bool:
        """Numbers are unique per document type across all tenants."""
        stmt = select(func.count()).select_from(Document).where(
            Document.document_type == document_type,
            Document.number == number,
        )
        return ((await self.db.execute(stmt)).scalar() or 0) > 0

    async def count_created_on(self, company_id: str, document_type: str, day: date) -> int:
        start, end = day_bounds(day)
        stmt = select(func.count()).select_from(Document).where(
            and_(
                Document.company_id == company_id,
                Document.document_type == document_type,
                Document.created_at >= start,
                Document.created_at < end,
            )
        )
        return (await self.db.execute(stmt)).scalar() or 0

    async def list(
        self,
        company_id: str,
        document_type: str,
        *,
        status: str | None = None,
        customer_id: str | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
        search: str | None = None,
        due_before: date | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> tuple[list[Document], int]:
        """Return one page of documents and the total count matching the filters."""
        q = select(Document).where(
            Document.company_id == company_id,
            Document.document_type == document_type,
        )
        if status:
            q = q.where(Document.status == status)
        if customer_id:
            q = q.where(Document.customer_id == customer_id)
        if date_from:
            q = q.where(Document.document_date >= date_from)
        if date_to:
            q = q.where(Document.document_date <= date_to)
        if due_before:
            q = q.where(Document.valid_until < due_before)
        if search:
            like = f"%{search.strip()}%"
            q = q.where(
                or_(
                    Document.number.ilike(like),
                    Document.customer_company.ilike(like),
                    Document.contact_person.ilike(like),
                )
            )

        count_q = select(func.count()).select_from(q.subquery())
        total = (await self.db.execute(count_q)).scalar() or 0

        q = q.order_by(Document.created_at.desc()).offset(offset).limit(limit)
        result = await self.db.execute(q)
        return list(result.scalars().all()), total

    # ---------- writes ----------

    async def create(self, document: Document) -> Document:
        self.db.add(document)
        try:
            await self.db.commit()
        except IntegrityError as exc:
            await self.db.rollback()
            if not violates_constraint(exc, NUMBER_CONSTRAINT):
                raise
            raise DuplicateDocumentNumber(document.document_type, document.number) from exc
        await self.db.refresh(document)
        return document

    async def update(self, document: Document, values: dict[str, Any] | None = None) -> Document:
        """Whole-record replace: ``values`` are written over the loaded row, then committed."""
        for key, value in (values or {}).items():
            setattr(document, key, value)
        await self.db.commit()
        await self.db.refresh(document)
        return document

    async def delete(self, document: Document) -> None:
        await self.db.delete(document)
        await self.db.commit()
