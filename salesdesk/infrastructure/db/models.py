import uuid

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    Date,
    DateTime,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
    text,
)
from sqlalchemy.dialects.postgresql import UUID

from salesdesk.infrastructure.db.base import Base


class Document(Base):
    """
    Quotations, proformas, orders, invoices, purchase orders and delivery
    challans share one table, tagged by ``document_type``.
    """
    __tablename__ = "documents"
    __table_args__ = (
        UniqueConstraint("document_type", "number", name="uq_documents_type_number"),
        Index("ix_documents_company_type_created", "company_id", "document_type", "created_at"),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    document_type = Column(String(30), nullable=False, index=True)
    number = Column(String(50), nullable=False)
    company_id = Column(String(64), nullable=False, index=True)
    created_by = Column(String(64))

    document_date = Column(Date, nullable=False)
    valid_until = Column(Date)  # validity (quotations) or due date (invoices)
    reference = Column(String(120))

    # Party references (weak, by id) + denormalized copy for printing
    customer_id = Column(String(64))
    lead_id = Column(String(64))
    supplier_id = Column(String(64))
    contact_person_title = Column(String(20))
    contact_person = Column(String(200))
    customer_company = Column(String(200))
    email = Column(String(200))
    phone = Column(String(30))
    gstin = Column(String(20))

    # Billing address
    address_line1 = Column(String(255))
    address_line2 = Column(String(255))
    city = Column(String(100))
    state = Column(String(100))
    country = Column(String(100), server_default="India")
    pincode = Column(String(20))

    # Shipping address
    same_as_billing = Column(Boolean, nullable=False, default=True)
    shipping_address_line1 = Column(String(255))
    shipping_address_line2 = Column(String(255))
    shipping_city = Column(String(100))
    shipping_state = Column(String(100))
    shipping_country = Column(String(100))
    shipping_pincode = Column(String(20))

    items = Column(JSON, nullable=False, default=list)
    extra_charges = Column(JSON, nullable=False, default=list)
    discounts = Column(JSON, nullable=False, default=list)
    terms = Column(JSON, nullable=False, default=list)
    notes = Column(Text)
    bank_details = Column(JSON)

    # Totals (always recomputed from items/charges)
    subtotal = Column(Numeric(14, 2), nullable=False, default=0)
    taxable_total = Column(Numeric(14, 2), nullable=False, default=0)
    cgst_total = Column(Numeric(14, 2), nullable=False, default=0)
    sgst_total = Column(Numeric(14, 2), nullable=False, default=0)
    igst_total = Column(Numeric(14, 2), nullable=False, default=0)
    total_amount = Column(Numeric(14, 2), nullable=False, default=0)

    status = Column(String(30), nullable=False)
    paid_amount = Column(Numeric(14, 2), nullable=False, default=0)

    # Back-reference only: no FK, so deleting either side never touches the other
    source_document_id = Column(UUID(as_uuid=True), index=True)

    created_at = Column(DateTime(timezone=True), server_default=text("CURRENT_TIMESTAMP"))
    updated_at = Column(
        DateTime(timezone=True),
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=text("CURRENT_TIMESTAMP"),
    )


class ManufacturingJob(Base):
    __tablename__ = "manufacturing_jobs"
    __table_args__ = (
        UniqueConstraint("job_number", name="uq_manufacturing_jobs_job_number"),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    job_number = Column(String(50), nullable=False)
    company_id = Column(String(64), nullable=False, index=True)
    created_by = Column(String(64))
    order_id = Column(UUID(as_uuid=True), index=True)  # back-reference only

    product_name = Column(String(200), nullable=False)
    description = Column(Text)
    department = Column(String(50), nullable=False, default="Production")
    priority = Column(String(20), nullable=False, default="medium")
    quantity = Column(Integer, nullable=False, default=1)

    start_date = Column(Date)
    expected_completion = Column(Date)
    due_date = Column(Date)

    status = Column(String(30), nullable=False, default="pending")
    notes = Column(Text)
    materials = Column(Text)
    instructions = Column(Text)

    created_at = Column(DateTime(timezone=True), server_default=text("CURRENT_TIMESTAMP"))
    updated_at = Column(
        DateTime(timezone=True),
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=text("CURRENT_TIMESTAMP"),
    )


class Payment(Base):
    __tablename__ = "payments"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    company_id = Column(String(64), nullable=False, index=True)
    invoice_id = Column(UUID(as_uuid=True), nullable=False, index=True)
    amount = Column(Numeric(14, 2), nullable=False)
    payment_date = Column(Date, nullable=False)
    method = Column(String(30), nullable=False, default="bank_transfer")
    reference = Column(String(120))
    notes = Column(Text)
    status = Column(String(20), nullable=False, default="completed")
    created_by = Column(String(64))
    created_at = Column(DateTime(timezone=True), server_default=text("CURRENT_TIMESTAMP"))


class PrintConfig(Base):
    __tablename__ = "print_configs"
    __table_args__ = (
        UniqueConstraint("company_id", "document_type", name="uq_print_configs_company_type"),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    company_id = Column(String(64), nullable=False)
    document_type = Column(String(30), nullable=False)
    options = Column(JSON, nullable=False, default=dict)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=text("CURRENT_TIMESTAMP"),
    )
