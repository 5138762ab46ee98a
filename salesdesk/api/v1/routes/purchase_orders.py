# salesdesk/api/v1/routes/purchase_orders.py
from salesdesk.api.v1.routes.documents import build_document_router
from salesdesk.domain.models.documents import DocumentType

router = build_document_router(DocumentType.PURCHASE_ORDER, "/purchase-orders", "Purchase Orders")
