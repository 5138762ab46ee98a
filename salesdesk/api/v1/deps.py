# salesdesk/api/v1/deps.py
"""
FastAPI dependencies for the v1 API layer.

``get_principal`` validates the ``Authorization: Bearer <jwt>`` header issued
by the external auth service and returns who is calling and for which tenant.
Users are not looked up: the token is the only source of identity.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from fastapi import Depends, HTTPException, Header, status
from jose import JWTError, jwt
from sqlalchemy.ext.asyncio import AsyncSession

from salesdesk.core.config import settings
from salesdesk.core.db import get_db
from salesdesk.infrastructure.db.repositories import (
    DocumentRepository,
    ManufacturingJobRepository,
    PaymentRepository,
    PrintConfigRepository,
)

logger = logging.getLogger("api.v1.deps")


@dataclass(frozen=True)
class Principal:
    user_id: str
    company_id: str


async def get_principal(authorization: str | None = Header(None)) -> Principal:
    """
    Raises HTTP 401 if the token is missing, invalid, expired, or lacks the
    ``sub`` / ``company_id`` claims.
    """
    if not authorization or not authorization.startswith("Bearer "):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing or invalid Authorization header. Expected: Bearer <token>",
            headers={"WWW-Authenticate": "Bearer"},
        )

    token = authorization[7:]  # strip "Bearer "

    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except JWTError as exc:
        logger.debug("JWT decode failed: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user_id = payload.get("sub")
    company_id = payload.get("company_id")
    if not user_id or not company_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token missing subject or company",
        )

    return Principal(user_id=str(user_id), company_id=str(company_id))


def get_document_repo(db: AsyncSession = Depends(get_db)) -> DocumentRepository:
    return DocumentRepository(db)


def get_job_repo(db: AsyncSession = Depends(get_db)) -> ManufacturingJobRepository:
    return ManufacturingJobRepository(db)


def get_payment_repo(db: AsyncSession = Depends(get_db)) -> PaymentRepository:
    return PaymentRepository(db)


def get_print_config_repo(db: AsyncSession = Depends(get_db)) -> PrintConfigRepository:
    return PrintConfigRepository(db)
