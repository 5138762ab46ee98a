# tests/test_repositories.py
"""Tests for the SQLAlchemy repositories against a mocked AsyncSession."""

import uuid
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import IntegrityError

from salesdesk.domain.errors import DuplicateDocumentNumber
from salesdesk.infrastructure.db.models import Document, ManufacturingJob
from salesdesk.infrastructure.db.repositories import DocumentRepository, ManufacturingJobRepository


class _UniqueViolation(Exception):
    def __init__(self, constraint_name):
        super().__init__(f'duplicate key value violates unique constraint "{constraint_name}"')
        self.constraint_name = constraint_name


def _session(commit_error=None):
    db = MagicMock()
    db.commit = AsyncMock(side_effect=commit_error)
    db.rollback = AsyncMock()
    db.refresh = AsyncMock()
    return db


def _document():
    return Document(id=uuid.uuid4(), document_type="quotation", number="RX-VQ25-25-07-001", company_id="co-1")


def test_create_commits_and_refreshes(event_loop):
    db = _session()
    doc = _document()

    result = event_loop.run_until_complete(DocumentRepository(db).create(doc))

    assert result is doc
    db.add.assert_called_once_with(doc)
    db.commit.assert_awaited_once()
    db.refresh.assert_awaited_once_with(doc)
    db.rollback.assert_not_awaited()


def test_unique_number_violation_becomes_duplicate_number(event_loop):
    """A lost race on the number surfaces as DuplicateDocumentNumber and rolls back."""
    error = IntegrityError("INSERT INTO documents", {}, _UniqueViolation("uq_documents_type_number"))
    db = _session(commit_error=error)
    doc = _document()

    with pytest.raises(DuplicateDocumentNumber) as exc_info:
        event_loop.run_until_complete(DocumentRepository(db).create(doc))

    assert exc_info.value.number == doc.number
    db.rollback.assert_awaited_once()
    db.refresh.assert_not_awaited()


def test_wrapped_driver_error_is_recognised(event_loop):
    # The dialect wraps the driver exception; the constraint name sits on __cause__
    wrapper = Exception("IntegrityError")
    wrapper.__cause__ = _UniqueViolation("uq_documents_type_number")
    db = _session(commit_error=IntegrityError("INSERT INTO documents", {}, wrapper))

    with pytest.raises(DuplicateDocumentNumber):
        event_loop.run_until_complete(DocumentRepository(db).create(_document()))


def test_other_integrity_errors_are_reraised(event_loop):
    error = IntegrityError(
        "INSERT INTO documents", {}, Exception('null value in column "company_id" violates not-null constraint')
    )
    db = _session(commit_error=error)

    with pytest.raises(IntegrityError):
        event_loop.run_until_complete(DocumentRepository(db).create(_document()))

    db.rollback.assert_awaited_once()


def test_job_number_violation_becomes_duplicate_number(event_loop):
    error = IntegrityError("INSERT INTO manufacturing_jobs", {}, _UniqueViolation("uq_manufacturing_jobs_job_number"))
    db = _session(commit_error=error)
    job = ManufacturingJob(id=uuid.uuid4(), job_number="RX-JO25-25-07-001", company_id="co-1", product_name="Pump")

    with pytest.raises(DuplicateDocumentNumber):
        event_loop.run_until_complete(ManufacturingJobRepository(db).create(job))

    db.rollback.assert_awaited_once()
