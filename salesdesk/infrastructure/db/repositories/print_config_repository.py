# salesdesk/infrastructure/db/repositories/print_config_repository.py
"""Repository for per-tenant print configuration."""

from __future__ import annotations

import uuid
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from salesdesk.infrastructure.db.models import PrintConfig


class PrintConfigRepository:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get(self, company_id: str, document_type: str) -> PrintConfig | None:
        stmt = select(PrintConfig).where(
            PrintConfig.company_id == company_id,
            PrintConfig.document_type == document_type,
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def upsert(self, company_id: str, document_type: str, options: dict[str, Any]) -> PrintConfig:
        row = await self.get(company_id, document_type)
        if row is None:
            row = PrintConfig(
                id=uuid.uuid4(),
                company_id=company_id,
                document_type=document_type,
                options=options,
            )
            self.db.add(row)
        else:
            row.options = options
        await self.db.commit()
        await self.db.refresh(row)
        return row

    async def delete(self, company_id: str, document_type: str) -> bool:
        row = await self.get(company_id, document_type)
        if row is None:
            return False
        await self.db.delete(row)
        await self.db.commit()
        return True
