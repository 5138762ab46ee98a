# salesdesk/api/v1/routes/proformas.py
from salesdesk.api.v1.routes.documents import build_document_router
from salesdesk.domain.models.documents import DocumentType

router = build_document_router(DocumentType.PROFORMA, "/proformas", "Proformas")
