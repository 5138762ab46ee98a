# salesdesk/domain/services/numbering.py
"""
Document numbering policy.

Numbers look like ``RX-VQ25-25-07-001``::

    {PREFIX}-{TYPECODE}{YY}-{YY}-{MM}-{SEQ:03}

The two-digit year appears twice; existing printed documents use that layout
so it is kept as is. SEQ restarts at 001 every calendar day, per document type
and tenant. The policy holds no state: the caller passes how many documents of
that type the tenant already created on that day.
"""

from __future__ import annotations

import re
from datetime import date

from salesdesk.domain.errors import ValidationError
from salesdesk.domain.models.documents import DocumentType

TYPE_CODES: dict[DocumentType, str] = {
    DocumentType.QUOTATION: "VQ",
    DocumentType.PROFORMA: "VP",
    DocumentType.INVOICE: "VI",
    DocumentType.ORDER: "VO",
    DocumentType.PURCHASE_ORDER: "PO",
    DocumentType.DELIVERY_CHALLAN: "DC",
    DocumentType.MANUFACTURING_JOB: "JO",
}

DEFAULT_PREFIX = "RX"

NUMBER_RE = re.compile(
    r"^(?P<prefix>[A-Z0-9]+)-(?P<code>[A-Z]{2})(?P<yy>\d{2})-(?P<yy2>\d{2})-(?P<mm>\d{2})-(?P<seq>\d{3,})$"
)


def format_number(
    document_type: DocumentType,
    on_date: date,
    sequence: int,
    prefix: str = DEFAULT_PREFIX,
) -> str:
    if sequence < 1:
        raise ValueError("sequence starts at 1")
    yy = f"{on_date.year % 100:02d}"
    return f"{prefix}-{TYPE_CODES[document_type]}{yy}-{yy}-{on_date.month:02d}-{sequence:03d}"


def next_number(
    document_type: DocumentType,
    on_date: date,
    existing_for_day: int,
    prefix: str = DEFAULT_PREFIX,
) -> str:
    """
    Next number for ``document_type`` on ``on_date``.

    ``existing_for_day`` is the count of documents of this type the tenant has
    already created that day, so the first document of the day gets ``001``.
    """
    if existing_for_day < 0:
        raise ValueError("existing_for_day must not be negative")
    return format_number(document_type, on_date, existing_for_day + 1, prefix)


def parse_number(number: str) -> dict | None:
    """Split a generated number into its parts, ``None`` if it does not match the format."""
    m = NUMBER_RE.match(number.strip())
    if not m:
        return None
    code = m.group("code")
    doc_type = next((t for t, c in TYPE_CODES.items() if c == code), None)
    return {
        "prefix": m.group("prefix"),
        "document_type": doc_type,
        "year": 2000 + int(m.group("yy")),
        "month": int(m.group("mm")),
        "sequence": int(m.group("seq")),
    }


def normalize_explicit_number(number: str | None) -> str | None:
    """Trim a caller-supplied number; blank means "generate one"."""
    if number is None:
        return None
    cleaned = number.strip()
    if not cleaned:
        return None
    if len(cleaned) > 50:
        raise ValidationError.for_field("number", "Number must be at most 50 characters")
    return cleaned
