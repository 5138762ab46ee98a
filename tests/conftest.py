"""Shared test fixtures for the SalesDesk test suite."""

import asyncio
import uuid
from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from salesdesk.domain.errors import DuplicateDocumentNumber

COMPANY = "company-1"
OTHER_COMPANY = "company-2"
USER = "user-1"


@pytest.fixture(scope="session")
def event_loop():
    """Use a single event loop for the entire test session."""
    loop = asyncio.new_event_loop()
    yield loop
    loop.close()


class _Clock:
    """Timestamps for fake rows; tests can pin ``now`` to simulate another day."""

    def __init__(self) -> None:
        self.now: datetime | None = None

    def current(self) -> datetime:
        return self.now or datetime.now(timezone.utc)


class FakeDocumentRepository(_Clock):
    """In-memory stand-in for DocumentRepository with the same interface."""

    def __init__(self) -> None:
        super().__init__()
        self.rows: dict[uuid.UUID, object] = {}
        self.creates = 0

    async def get(self, company_id, document_id, document_type=None):
        doc = self.rows.get(document_id)
        if doc is None or doc.company_id != company_id:
            return None
        if document_type and doc.document_type != document_type:
            return None
        return doc

    async def get_by_number(self, company_id, document_type, number):
        for doc in self.rows.values():
            if (doc.company_id, doc.document_type, doc.number) == (company_id, document_type, number):
                return doc
        return None

    async def number_exists(self, document_type, number):
        return any(d.document_type == document_type and d.number == number for d in self.rows.values())

    async def count_created_on(self, company_id, document_type, day):
        return sum(
            1
            for d in self.rows.values()
            if d.company_id == company_id and d.document_type == document_type and d.created_at.date() == day
        )

    async def list(
        self,
        company_id,
        document_type,
        *,
        status=None,
        customer_id=None,
        date_from=None,
        date_to=None,
        search=None,
        due_before=None,
        limit=20,
        offset=0,
    ):
        rows = [d for d in self.rows.values() if d.company_id == company_id and d.document_type == document_type]
        if status:
            rows = [d for d in rows if d.status == status]
        if customer_id:
            rows = [d for d in rows if d.customer_id == customer_id]
        if date_from:
            rows = [d for d in rows if d.document_date >= date_from]
        if date_to:
            rows = [d for d in rows if d.document_date <= date_to]
        if due_before:
            rows = [d for d in rows if d.valid_until and d.valid_until < due_before]
        if search:
            needle = search.lower()
            rows = [
                d for d in rows
                if needle in (d.number or "").lower() or needle in (d.customer_company or "").lower()
            ]
        rows.sort(key=lambda d: d.created_at, reverse=True)
        return rows[offset:offset + limit], len(rows)

    async def create(self, document):
        if await self.number_exists(document.document_type, document.number):
            raise DuplicateDocumentNumber(document.document_type, document.number)
        document.created_at = document.updated_at = self.current()
        self.rows[document.id] = document
        self.creates += 1
        return document

    async def update(self, document, values=None):
        for key, value in (values or {}).items():
            setattr(document, key, value)
        document.updated_at = self.current()
        return document

    async def delete(self, document):
        self.rows.pop(document.id, None)


class FakeJobRepository(_Clock):
    def __init__(self) -> None:
        super().__init__()
        self.rows: dict[uuid.UUID, object] = {}

    async def get(self, company_id, job_id):
        job = self.rows.get(job_id)
        return job if job is not None and job.company_id == company_id else None

    async def get_by_number(self, company_id, job_number):
        for job in self.rows.values():
            if job.company_id == company_id and job.job_number == job_number:
                return job
        return None

    async def number_exists(self, job_number):
        return any(j.job_number == job_number for j in self.rows.values())

    async def count_created_on(self, company_id, day):
        return sum(1 for j in self.rows.values() if j.company_id == company_id and j.created_at.date() == day)

    async def list(self, company_id, *, status=None, order_id=None, search=None, limit=20, offset=0):
        rows = [j for j in self.rows.values() if j.company_id == company_id]
        if status:
            rows = [j for j in rows if j.status == status]
        if order_id:
            rows = [j for j in rows if j.order_id == order_id]
        return rows[offset:offset + limit], len(rows)

    async def create(self, job):
        if await self.number_exists(job.job_number):
            raise DuplicateDocumentNumber("manufacturing-job", job.job_number)
        job.created_at = job.updated_at = self.current()
        self.rows[job.id] = job
        return job

    async def update(self, job, values=None):
        for key, value in (values or {}).items():
            setattr(job, key, value)
        job.updated_at = self.current()
        return job

    async def delete(self, job):
        self.rows.pop(job.id, None)


class FakePaymentRepository(_Clock):
    def __init__(self) -> None:
        super().__init__()
        self.rows: list = []

    async def add(self, payment, invoice):
        payment.created_at = self.current()
        self.rows.append(payment)
        return payment

    async def list_for_invoice(self, company_id, invoice_id):
        return [p for p in self.rows if p.company_id == company_id and p.invoice_id == invoice_id]

    async def total_completed(self, company_id, invoice_id):
        return sum(
            (p.amount for p in await self.list_for_invoice(company_id, invoice_id) if p.status == "completed"),
            Decimal("0"),
        )


class FakePrintConfigRepository:
    def __init__(self) -> None:
        self.rows: dict[tuple[str, str], object] = {}

    async def get(self, company_id, document_type):
        return self.rows.get((company_id, document_type))

    async def upsert(self, company_id, document_type, options):
        from salesdesk.infrastructure.db.models import PrintConfig

        row = self.rows.get((company_id, document_type))
        if row is None:
            row = PrintConfig(id=uuid.uuid4(), company_id=company_id, document_type=document_type)
            self.rows[(company_id, document_type)] = row
        row.options = dict(options)
        return row

    async def delete(self, company_id, document_type):
        return self.rows.pop((company_id, document_type), None) is not None


@pytest.fixture
def doc_repo() -> FakeDocumentRepository:
    return FakeDocumentRepository()


@pytest.fixture
def job_repo() -> FakeJobRepository:
    return FakeJobRepository()


@pytest.fixture
def payment_repo() -> FakePaymentRepository:
    return FakePaymentRepository()


@pytest.fixture
def print_config_repo() -> FakePrintConfigRepository:
    return FakePrintConfigRepository()


@pytest.fixture
def quotation_payload() -> dict:
    """Intrastate quotation: two lines at 9% + 9%, one freight charge."""
    return {
        "customer_id": "cust-42",
        "contact_person_title": "Mr.",
        "contact_person": "Ravi Kumar",
        "customer_company": "Acme Traders",
        "email": "ravi@acme.example",
        "phone": "+91 98200 00000",
        "gstin": "27AADCB2230M1ZP",
        "address_line1": "12 MG Road",
        "city": "Pune",
        "state": "Maharashtra",
        "country": "India",
        "pincode": "411001",
        "same_as_billing": True,
        "items": [
            {
                "description": "Control panel",
                "hsn_sac": "8537",
                "quantity": "2",
                "rate": "1000",
                "discount": "10",
                "discount_type": "percentage",
                "cgst_rate": "9",
                "sgst_rate": "9",
            },
            {
                "description": "Installation",
                "hsn_sac": "9954",
                "quantity": "1",
                "rate": "500",
                "cgst_rate": "9",
                "sgst_rate": "9",
            },
        ],
        "extra_charges": [{"description": "Freight", "amount": "100"}],
        "terms": ["Payment within 30 days"],
        "notes": "Thank you for your business",
        "bank_details": {"bank_name": "HDFC", "branch": "Pune", "account_no": "0001", "ifsc": "HDFC0000001"},
    }


@pytest.fixture
def fixed_day() -> date:
    return date(2025, 7, 15)
