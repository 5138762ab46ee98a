# salesdesk/api/v1/routes/delivery_challans.py
from salesdesk.api.v1.routes.documents import build_document_router
from salesdesk.domain.models.documents import DocumentType

router = build_document_router(DocumentType.DELIVERY_CHALLAN, "/delivery-challans", "Delivery Challans")
