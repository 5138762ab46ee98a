# tests/test_audit.py
"""Tests for the document audit log."""

import logging

from salesdesk.infrastructure.audit import log_document_action


def test_log_document_action_records_fields(caplog):
    with caplog.at_level(logging.INFO, logger="audit"):
        log_document_action(
            "convert",
            company_id="co-1",
            user_id="u-1",
            document_type="invoice",
            number="INV/2025/07/0001",
            details={"source_type": "quotation"},
        )

    assert len(caplog.records) == 1
    message = caplog.records[0].getMessage()
    assert message.startswith("DOC_ACTION action=convert")
    assert "company=co-1" in message
    assert "user=u-1" in message
    assert "document=invoice:INV/2025/07/0001" in message
    assert "'source_type': 'quotation'" in message


def test_log_document_action_defaults():
    # No details and no user must still log cleanly
    log_document_action("delete", company_id="co-1")
