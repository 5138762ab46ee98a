"""Tests for manufacturing jobs."""

from datetime import timedelta

import pytest

from salesdesk.domain.errors import (
    DuplicateDocumentNumber,
    IncompleteSourceDocument,
    InvalidStatusTransition,
    SourceNotFound,
    ValidationError,
)
from salesdesk.domain.models.documents import DocumentType
from salesdesk.domain.services import document_service, manufacturing_service

from conftest import COMPANY, USER


def test_create_job_defaults(event_loop, job_repo, fixed_day):
    job = event_loop.run_until_complete(
        manufacturing_service.create_job(
            job_repo, {"product_name": "Control panel"}, company_id=COMPANY, user_id=USER, on_date=fixed_day
        )
    )
    assert job.job_number == "RX-JO25-25-07-001"
    assert job.status == "pending"
    assert job.priority == "medium"
    assert job.department == "Production"
    assert job.quantity == 1
    assert job.due_date == fixed_day + timedelta(days=7)


def test_job_validation(event_loop, job_repo):
    with pytest.raises(ValidationError) as exc:
        event_loop.run_until_complete(
            manufacturing_service.create_job(
                job_repo, {"product_name": " ", "quantity": 0, "priority": "asap"}, company_id=COMPANY
            )
        )
    assert {e["field"] for e in exc.value.to_errors()} == {"product_name", "quantity", "priority"}
    assert job_repo.rows == {}


@pytest.mark.parametrize("quantity", ["abc", "1.5", []])
def test_job_quantity_must_be_whole_number(event_loop, job_repo, quantity):
    payload = {"product_name": "Control panel", "quantity": quantity}
    with pytest.raises(ValidationError) as exc:
        event_loop.run_until_complete(manufacturing_service.create_job(job_repo, payload, company_id=COMPANY))
    assert [e["field"] for e in exc.value.to_errors()] == ["quantity"]
    assert job_repo.rows == {}


def test_duplicate_explicit_job_number(event_loop, job_repo):
    payload = {"product_name": "Panel", "job_number": "JOB-1"}
    event_loop.run_until_complete(manufacturing_service.create_job(job_repo, payload, company_id=COMPANY))
    with pytest.raises(DuplicateDocumentNumber):
        event_loop.run_until_complete(manufacturing_service.create_job(job_repo, payload, company_id=COMPANY))


def test_job_from_order(event_loop, doc_repo, job_repo, quotation_payload):
    order = event_loop.run_until_complete(
        document_service.create_document(doc_repo, DocumentType.ORDER, quotation_payload, company_id=COMPANY)
    )
    job = event_loop.run_until_complete(
        manufacturing_service.create_job_from_order(
            doc_repo, job_repo, COMPANY, order.number, {"priority": "high"}, user_id=USER
        )
    )
    assert job.order_id == order.id
    assert job.product_name == "Control panel"
    assert job.quantity == 2
    assert job.priority == "high"
    assert order.status == "processing"


def test_job_from_missing_or_empty_order(event_loop, doc_repo, job_repo):
    with pytest.raises(SourceNotFound):
        event_loop.run_until_complete(
            manufacturing_service.create_job_from_order(doc_repo, job_repo, COMPANY, "RX-VO25-25-07-404")
        )
    empty = event_loop.run_until_complete(
        document_service.create_document(doc_repo, DocumentType.ORDER, {"customer_id": "c"}, company_id=COMPANY)
    )
    with pytest.raises(IncompleteSourceDocument):
        event_loop.run_until_complete(
            manufacturing_service.create_job_from_order(doc_repo, job_repo, COMPANY, empty.id)
        )


def test_job_status_flow(event_loop, job_repo):
    job = event_loop.run_until_complete(
        manufacturing_service.create_job(job_repo, {"product_name": "Panel"}, company_id=COMPANY)
    )
    for status in ("in_progress", "in-assembly", "qa"):
        event_loop.run_until_complete(manufacturing_service.change_job_status(job_repo, COMPANY, job.id, status))
    assert job.status == "qa"
    with pytest.raises(InvalidStatusTransition):
        event_loop.run_until_complete(manufacturing_service.change_job_status(job_repo, COMPANY, job.id, "pending"))


def test_update_and_delete_job(event_loop, job_repo):
    job = event_loop.run_until_complete(
        manufacturing_service.create_job(job_repo, {"product_name": "Panel"}, company_id=COMPANY)
    )
    updated = event_loop.run_until_complete(
        manufacturing_service.update_job(job_repo, COMPANY, job.job_number, {"product_name": "Panel v2", "quantity": 5})
    )
    assert (updated.product_name, updated.quantity) == ("Panel v2", 5)
    with pytest.raises(ValidationError):
        event_loop.run_until_complete(
            manufacturing_service.update_job(job_repo, COMPANY, job.id, {"product_name": "X", "job_number": "OTHER"})
        )
    event_loop.run_until_complete(manufacturing_service.delete_job(job_repo, COMPANY, job.id))
    assert job_repo.rows == {}
