# salesdesk/api/v1/errors.py
"""Exception handlers rendering domain and request errors as the v1 error envelope."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from salesdesk.api.v1.envelope import error
from salesdesk.domain.errors import SalesDeskError

logger = logging.getLogger("api.v1.errors")


async def salesdesk_error_handler(request: Request, exc: SalesDeskError) -> JSONResponse:
    logger.info("%s %s → %s: %s", request.method, request.url.path, type(exc).__name__, exc.message)
    return JSONResponse(
        status_code=exc.http_status,
        content=error(exc.message, exc.to_errors()),
    )


def _field_path(loc: tuple) -> str:
    # drop the "body" / "query" / "path" prefix
    parts = [str(p) for p in loc[1:]] if len(loc) > 1 else [str(p) for p in loc]
    return ".".join(parts)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [{"field": _field_path(tuple(e.get("loc", ()))), "message": e.get("msg", "")} for e in exc.errors()]
    return JSONResponse(
        status_code=422,
        content=error("Request validation failed", errors),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=error(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(SalesDeskError, salesdesk_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
