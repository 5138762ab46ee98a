# salesdesk/infrastructure/audit.py
"""
Audit logger for document actions.

Records who did what to which document, and when, as structured log lines
that a log aggregator can index.
"""

import logging
from datetime import datetime, timezone
from typing import Any

logger = logging.getLogger("audit")


def log_document_action(
    action: str,
    *,
    company_id: str,
    user_id: str | None = None,
    document_type: str = "",
    number: str = "",
    details: dict[str, Any] | None = None,
) -> None:
    """Log a document action (create, update, status change, convert, delete, payment...)."""
    logger.info(
        "DOC_ACTION action=%s company=%s user=%s document=%s:%s time=%s details=%s",
        action,
        company_id,
        user_id,
        document_type,
        number,
        datetime.now(timezone.utc).isoformat(),
        details or {},
    )
