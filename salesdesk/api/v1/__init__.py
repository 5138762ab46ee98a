# salesdesk/api/v1/__init__.py
"""
Versioned API v1: aggregates all sub-routers under ``/api/v1``.

Usage in ``main.py``::

    from salesdesk.api.v1 import v1_router
    app.include_router(v1_router)
"""

from fastapi import APIRouter

from salesdesk.api.v1.routes.quotations import router as quotations_router
from salesdesk.api.v1.routes.proformas import router as proformas_router
from salesdesk.api.v1.routes.orders import router as orders_router
from salesdesk.api.v1.routes.invoices import router as invoices_router
from salesdesk.api.v1.routes.purchase_orders import router as purchase_orders_router
from salesdesk.api.v1.routes.delivery_challans import router as delivery_challans_router
from salesdesk.api.v1.routes.manufacturing_jobs import router as manufacturing_jobs_router
from salesdesk.api.v1.routes.print_configs import router as print_configs_router
from salesdesk.api.routes.health import router as health_router

v1_router = APIRouter(prefix="/api/v1")

# Sales documents
v1_router.include_router(quotations_router)
v1_router.include_router(proformas_router)
v1_router.include_router(orders_router)
v1_router.include_router(invoices_router)
v1_router.include_router(purchase_orders_router)
v1_router.include_router(delivery_challans_router)

# Production
v1_router.include_router(manufacturing_jobs_router)

# Settings
v1_router.include_router(print_configs_router)

v1_router.include_router(health_router, tags=["health"])

__all__ = ["v1_router"]
