from .document_repository import DocumentRepository
from .manufacturing_job_repository import ManufacturingJobRepository
from .payment_repository import PaymentRepository
from .print_config_repository import PrintConfigRepository

__all__ = [
    "DocumentRepository",
    "ManufacturingJobRepository",
    "PaymentRepository",
    "PrintConfigRepository",
]
