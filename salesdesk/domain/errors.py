# salesdesk/domain/errors.py
"""
Error taxonomy for the document core.

Every error is recoverable at the request boundary: the v1 exception handlers
turn them into the standard error envelope using ``http_status`` and
``to_errors()``.
"""

from __future__ import annotations

from typing import Any


class SalesDeskError(Exception):
    """Base class for all domain errors."""

    http_status: int = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_errors(self) -> list[dict[str, Any]] | None:
        return None


class ValidationError(SalesDeskError):
    """Malformed or missing field(s), reported field-by-field."""

    http_status = 422

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or []

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationError":
        return cls(message, [{"field": field, "message": message}])

    def to_errors(self) -> list[dict[str, Any]] | None:
        return self.errors or None


class InvalidLineItem(ValidationError):
    """A line item carries a negative quantity, rate, discount or tax rate."""


class DuplicateDocumentNumber(SalesDeskError):
    http_status = 409

    def __init__(self, document_type: str, number: str) -> None:
        super().__init__(f"A {document_type} with number '{number}' already exists")
        self.document_type = document_type
        self.number = number


class InvalidStatusTransition(SalesDeskError):
    http_status = 409

    def __init__(self, kind: str, current: str, new: str, allowed: list[str]) -> None:
        super().__init__(
            f"Cannot transition {kind} from '{current}' to '{new}'. Allowed: {allowed}"
        )
        self.kind = kind
        self.current = current
        self.new = new
        self.allowed = allowed


class NotFound(SalesDeskError):
    http_status = 404

    def __init__(self, kind: str, key: Any) -> None:
        super().__init__(f"{kind.replace('-', ' ').capitalize()} '{key}' not found")
        self.kind = kind
        self.key = key


class SourceNotFound(NotFound):
    """The document to convert from does not exist (or belongs to another tenant)."""


class IncompleteSourceDocument(SalesDeskError):
    http_status = 422

    def __init__(self, number: str, missing: list[str]) -> None:
        super().__init__(
            f"Document '{number}' cannot be converted, missing: {', '.join(missing)}"
        )
        self.number = number
        self.missing = missing

    def to_errors(self) -> list[dict[str, Any]] | None:
        return [{"field": field, "message": "required for conversion"} for field in self.missing]
